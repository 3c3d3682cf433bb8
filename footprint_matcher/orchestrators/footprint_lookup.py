"""Footprint lookup orchestrator.

``FootprintMatcher`` is the explicitly constructed context object that
coordinates one lookup:

1. Region guard: advisory only, never blocks
2. Load features: once per matcher, then reused read-only
3. Containment search: first enclosing footprint
4. Proximity search: on a containment miss, within the configured radius
5. Measurement: perimeter and area of the contained footprint, or of a
   footprint the user later selects from the proximity results

The dataset is loaded at most once per matcher (guarded by an
``asyncio.Lock``); the matcher holds no other state between lookups.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from footprint_matcher.core.config import MatcherConfig
from footprint_matcher.matching.containment import scan_containing
from footprint_matcher.matching.loader import load_features
from footprint_matcher.matching.measurement import measure_feature
from footprint_matcher.matching.proximity import scan_nearby
from footprint_matcher.matching.region import is_in_region, region_advisory
from footprint_matcher.models.geocoding import GeocoderConfig
from footprint_matcher.models.results import LookupOutcome

if TYPE_CHECKING:
    from footprint_matcher.models.feature import Feature, FeatureCollection
    from footprint_matcher.models.geocoding import GeocodingResult
    from footprint_matcher.models.results import (
        MatchResult,
        ProximityResult,
        SkippedFeature,
    )
    from footprint_matcher.providers.base import GeocodingProvider
    from footprint_matcher.sources.base import FeatureSource

logger = logging.getLogger("footprint_matcher.orchestrators.footprint_lookup")


class FootprintMatcher:
    """Lookup context: configuration, dataset source, geocoder.

    Args:
        config: Matcher configuration; defaults to ``MatcherConfig()``.
        source: Dataset source; defaults to the one selected from
            ``config.footprint_source``.
        geocoder: Geocoding provider for ``lookup_address``; defaults to
            ``config.geocoder_provider``.
        collection: A pre-loaded collection, skipping the loader.
    """

    def __init__(
        self,
        config: MatcherConfig | None = None,
        *,
        source: FeatureSource | None = None,
        geocoder: GeocodingProvider | None = None,
        collection: FeatureCollection | None = None,
    ) -> None:
        self._config = config or MatcherConfig()
        self._source = source
        self._geocoder = geocoder
        self._collection = collection
        self._load_lock = asyncio.Lock()

    @property
    def config(self) -> MatcherConfig:
        return self._config

    @property
    def source(self) -> FeatureSource:
        """The dataset source, created from configuration on first use."""
        if self._source is None:
            from footprint_matcher.sources.factory import source_from_uri

            self._source = source_from_uri(
                self._config.footprint_source,
                timeout_s=self._config.load_timeout_s,
            )
        return self._source

    @property
    def geocoder(self) -> GeocodingProvider:
        """The geocoding provider, created from configuration on first use."""
        if self._geocoder is None:
            from footprint_matcher.providers.factory import get_geocoder

            name = self._config.geocoder_provider
            self._geocoder = get_geocoder(
                name,
                GeocoderConfig(name=name, api_key=self._config.geocode_api_key),
            )
        return self._geocoder

    # ------------------------------------------------------------------
    # Dataset
    # ------------------------------------------------------------------

    async def collection(self) -> FeatureCollection:
        """Return the footprint collection, loading it on first call.

        Raises:
            DataUnavailableError: If the source cannot be reached.
            DataMalformedError: If the payload holds no features.
        """
        if self._collection is not None:
            return self._collection
        async with self._load_lock:
            if self._collection is None:
                self._collection = await load_features(
                    self.source,
                    timeout_s=self._config.load_timeout_s,
                )
        return self._collection

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def lookup(self, query: GeocodingResult) -> LookupOutcome:
        """Find the footprint at a geocoded coordinate.

        Returns:
            A ``LookupOutcome`` with either a measured match, or the
            nearby footprints ranked by distance (possibly none).

        Raises:
            InvalidCoordinateError: If the query is outside WGS 84 bounds.
            DataUnavailableError: If the dataset cannot be reached.
            DataMalformedError: If the dataset holds no features.
        """
        point = query.coordinate
        bounds = self._config.region_bounds
        advisories: list[str] = []

        in_region = is_in_region(point.lat, point.lng, bounds)
        if not in_region:
            advisories.append(region_advisory(point.lat, point.lng, bounds))

        features = await self.collection()
        logger.info(
            "Lookup started | address=%s | point=(%.6f, %.6f) | features=%d",
            query.address,
            point.lat,
            point.lng,
            len(features),
        )

        containment = scan_containing(point, features)
        if containment.match is not None:
            return LookupOutcome(
                query=query,
                in_region=in_region,
                match=measure_feature(containment.match),
                advisories=tuple(advisories),
                skipped=containment.skipped,
            )

        radius_m = self._config.search_radius_m
        advisories.append("No exact match found, looking for nearby buildings.")
        proximity = scan_nearby(point, features, radius_m)
        if proximity.results:
            closest = proximity.results[0].distance_m
            advisories.append(
                f"Found {len(proximity.results)} nearby building(s). "
                f"Closest is {closest:.2f}m away."
            )
        else:
            advisories.append(f"No nearby buildings found within {radius_m:g} meters.")

        return LookupOutcome(
            query=query,
            in_region=in_region,
            nearby=proximity.results,
            advisories=tuple(advisories),
            skipped=_merge_skipped(containment.skipped, proximity.skipped),
        )

    async def lookup_address(self, address: str) -> LookupOutcome:
        """Geocode *address* and look up the footprint there.

        Raises:
            GeocodingError: If the address cannot be geocoded.
        """
        query = await self.geocoder.geocode(address)
        return await self.lookup(query)

    async def find_nearby(
        self,
        query: GeocodingResult,
        radius_m: float | None = None,
    ) -> list[ProximityResult]:
        """Proximity search around *query* without a containment pass.

        Args:
            query: The geocoded query.
            radius_m: Search radius; defaults to ``config.search_radius_m``.
        """
        features = await self.collection()
        radius = self._config.search_radius_m if radius_m is None else radius_m
        return list(scan_nearby(query.coordinate, features, radius).results)

    def measure(self, feature: Feature) -> MatchResult:
        """Measure a footprint the caller selected (e.g. from ``nearby``).

        Raises:
            GeometryFaultError: If the feature geometry cannot be parsed.
        """
        return measure_feature(feature)


def _merge_skipped(*groups: tuple[SkippedFeature, ...]) -> tuple[SkippedFeature, ...]:
    """Combine skip records from several scans, one per feature index."""
    seen: dict[int, SkippedFeature] = {}
    for group in groups:
        for skipped in group:
            seen.setdefault(skipped.index, skipped)
    return tuple(seen.values())
