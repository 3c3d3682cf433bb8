"""Tests for the FootprintMatcher lookup orchestrator.

Covers:
- Containment hit returns measurements and no proximity results
- Containment miss falls back to proximity with advisory messages
- Out-of-region queries warn but still run
- The dataset is loaded once per matcher, including concurrent lookups
- Load failures and invalid coordinates propagate
- Address lookups go through the configured geocoder
- Skipped features are reported once per feature
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest

from footprint_matcher.core.config import MatcherConfig
from footprint_matcher.core.exceptions import InvalidCoordinateError
from footprint_matcher.matching.loader import DataMalformedError
from footprint_matcher.models.feature import Feature, FeatureCollection
from footprint_matcher.models.geocoding import GeocoderConfig, GeocodingResult
from footprint_matcher.models.report import SCHEMA_VERSION
from footprint_matcher.orchestrators import FootprintMatcher
from footprint_matcher.providers.base import AddressNotFoundError, GeocodingProvider
from footprint_matcher.providers.maps_co import MapsCoGeocoder
from footprint_matcher.sources.base import DataUnavailableError, FeatureSource
from footprint_matcher.sources.file import FileSource

NO_EXACT_MATCH = "No exact match found, looking for nearby buildings."
SQUARE_QUERY = GeocodingResult(address="Reference Square, AK", lat=61.0005, lng=-149.9995)
ANCHORAGE = GeocodingResult(address="Downtown Anchorage, AK", lat=61.2, lng=-149.9)
NEW_YORK = GeocodingResult(address="New York, NY", lat=40.7, lng=-74.0)


def _square(index: int, lat_offset: float, size: float = 0.00005) -> Feature:
    """Small square centred on ANCHORAGE's longitude, *lat_offset* degrees north."""
    west, east = ANCHORAGE.lng - size / 2, ANCHORAGE.lng + size / 2
    south = ANCHORAGE.lat + lat_offset
    ring = [[west, south], [west, south + size], [east, south + size], [east, south], [west, south]]
    return Feature(
        index=index,
        geometry={"type": "Polygon", "coordinates": [ring]},
        properties={"id": f"bldg-{index}"},
    )


class _CountingSource(FeatureSource):
    """Serves a fixed payload and counts fetches."""

    def __init__(self, payload: bytes, delay_s: float = 0.0) -> None:
        super().__init__("memory://footprints")
        self.payload = payload
        self.delay_s = delay_s
        self.fetches = 0

    async def fetch(self) -> bytes:
        self.fetches += 1
        if self.delay_s:
            await asyncio.sleep(self.delay_s)
        return self.payload


class _StaticGeocoder(GeocodingProvider):
    """Resolves every address to one fixed result."""

    def __init__(self, result: GeocodingResult | None) -> None:
        super().__init__(GeocoderConfig(name="static"))
        self._result = result
        self.addresses: list[str] = []

    async def geocode(self, address: str) -> GeocodingResult:
        self.addresses.append(address)
        if self._result is None:
            msg = f"No results found for address {address!r}"
            raise AddressNotFoundError(self.name, msg)
        return GeocodingResult(address=address, lat=self._result.lat, lng=self._result.lng)


@pytest.fixture()
def matcher(footprints: FeatureCollection) -> FootprintMatcher:
    return FootprintMatcher(collection=footprints)


@pytest.fixture()
def ranked_collection() -> FeatureCollection:
    """Three squares 14-36 m north of ANCHORAGE, out of distance order."""
    return FeatureCollection.from_features(
        [_square(0, 0.0003), _square(1, 0.0001), _square(2, 0.0002)]
    )


# ---------------------------------------------------------------------------
# Containment path
# ---------------------------------------------------------------------------


class TestLookupMatch:
    """The query point falls inside a footprint."""

    @pytest.mark.asyncio()
    async def test_match_with_measurements(self, matcher: FootprintMatcher) -> None:
        outcome = await matcher.lookup(SQUARE_QUERY)

        assert outcome.status == "matched"
        assert outcome.in_region is True
        assert outcome.match is not None
        assert outcome.match.feature.properties["id"] == "reference-square"
        assert 320.0 < outcome.match.perimeter_m < 340.0
        assert 5800.0 < outcome.match.area_m2 < 6200.0
        assert outcome.nearby == ()
        assert outcome.advisories == ()

    @pytest.mark.asyncio()
    async def test_match_inside_hole(self, matcher: FootprintMatcher) -> None:
        outcome = await matcher.lookup(
            GeocodingResult(address="Courtyard", lat=61.2174, lng=-149.9005)
        )
        assert outcome.match is not None
        assert outcome.match.feature.properties["id"] == "courtyard"

    @pytest.mark.asyncio()
    async def test_skips_before_match_reported(self, matcher: FootprintMatcher) -> None:
        outcome = await matcher.lookup(GeocodingResult(address="Twin", lat=61.21005, lng=-149.8899))
        assert outcome.status == "matched"
        assert outcome.skipped == ()


# ---------------------------------------------------------------------------
# Proximity fallback
# ---------------------------------------------------------------------------


class TestLookupNearby:
    """The query point misses every footprint."""

    @pytest.mark.asyncio()
    async def test_nearby_ranked(self, ranked_collection: FeatureCollection) -> None:
        outcome = await FootprintMatcher(collection=ranked_collection).lookup(ANCHORAGE)

        assert outcome.status == "nearby"
        assert outcome.match is None
        assert [r.feature.index for r in outcome.nearby] == [1, 2, 0]
        assert outcome.advisories[0] == NO_EXACT_MATCH
        closest = outcome.nearby[0].distance_m
        assert outcome.advisories[1] == (
            f"Found 3 nearby building(s). Closest is {closest:.2f}m away."
        )

    @pytest.mark.asyncio()
    async def test_nothing_within_radius(self) -> None:
        collection = FeatureCollection.from_features(
            [_square(0, 0.0032), _square(1, 0.0018), _square(2, 0.0025)]
        )
        matcher = FootprintMatcher(collection=collection)
        outcome = await matcher.lookup(ANCHORAGE)

        assert outcome.status == "no_match"
        assert outcome.nearby == ()
        assert outcome.advisories == (
            NO_EXACT_MATCH,
            "No nearby buildings found within 50 meters.",
        )
        nearest = (await matcher.find_nearby(ANCHORAGE, 1000.0))[0]
        assert nearest.feature.index == 1
        assert 190.0 < nearest.distance_m < 215.0

    @pytest.mark.asyncio()
    async def test_configured_radius(self) -> None:
        collection = FeatureCollection.from_features([_square(0, 0.0018)])
        matcher = FootprintMatcher(MatcherConfig(search_radius_m=250.0), collection=collection)
        outcome = await matcher.lookup(ANCHORAGE)
        assert outcome.status == "nearby"
        assert 150.0 < outcome.nearby[0].distance_m < 250.0

    @pytest.mark.asyncio()
    async def test_measure_selected_nearby(self, ranked_collection: FeatureCollection) -> None:
        matcher = FootprintMatcher(collection=ranked_collection)
        outcome = await matcher.lookup(ANCHORAGE)
        result = matcher.measure(outcome.nearby[0].feature)
        assert result.feature.index == 1
        assert result.perimeter_m > 0
        assert result.area_m2 > 0

    @pytest.mark.asyncio()
    async def test_find_nearby_custom_radius(self, ranked_collection: FeatureCollection) -> None:
        matcher = FootprintMatcher(collection=ranked_collection)
        assert [r.feature.index for r in await matcher.find_nearby(ANCHORAGE, 20.0)] == [1]
        assert len(await matcher.find_nearby(ANCHORAGE)) == 3

    @pytest.mark.asyncio()
    async def test_skipped_reported_once(self, matcher: FootprintMatcher) -> None:
        outcome = await matcher.lookup(
            GeocodingResult(address="Nowhere", lat=61.5, lng=-149.5)
        )
        assert outcome.status == "no_match"
        assert [s.index for s in outcome.skipped] == [3, 4]


# ---------------------------------------------------------------------------
# Region guard
# ---------------------------------------------------------------------------


class TestRegionGuard:
    """Out-of-region queries are advisory only."""

    @pytest.mark.asyncio()
    async def test_out_of_region_still_searches(self, matcher: FootprintMatcher) -> None:
        outcome = await matcher.lookup(NEW_YORK)

        assert outcome.in_region is False
        assert outcome.advisories[0] == "Coordinates [-74.0, 40.7] are outside Alaska's bounds"
        assert outcome.advisories[1] == NO_EXACT_MATCH
        assert outcome.status == "no_match"

    @pytest.mark.asyncio()
    async def test_custom_region(self, footprints: FeatureCollection) -> None:
        config = MatcherConfig(
            region_name="Anchorage Bowl",
            region_west=-150.1,
            region_east=-149.6,
            region_south=61.05,
            region_north=61.3,
        )
        outcome = await FootprintMatcher(config, collection=footprints).lookup(SQUARE_QUERY)
        assert outcome.in_region is False
        assert "Anchorage Bowl's bounds" in outcome.advisories[0]
        assert outcome.status == "matched"

    @pytest.mark.asyncio()
    async def test_invalid_coordinate_rejected(self, matcher: FootprintMatcher) -> None:
        with pytest.raises(InvalidCoordinateError):
            await matcher.lookup(GeocodingResult(address="Bad", lat=95.0, lng=-149.9))


# ---------------------------------------------------------------------------
# Dataset loading
# ---------------------------------------------------------------------------


class TestDatasetLoading:
    """Load-once semantics and load failures."""

    @pytest.mark.asyncio()
    async def test_loaded_once(self, footprints_path: Path) -> None:
        source = _CountingSource(footprints_path.read_bytes())
        matcher = FootprintMatcher(source=source)

        await matcher.lookup(SQUARE_QUERY)
        await matcher.lookup(ANCHORAGE)
        await matcher.find_nearby(ANCHORAGE)

        assert source.fetches == 1

    @pytest.mark.asyncio()
    async def test_concurrent_lookups_share_one_load(self, footprints_path: Path) -> None:
        source = _CountingSource(footprints_path.read_bytes(), delay_s=0.02)
        matcher = FootprintMatcher(source=source)

        outcomes = await asyncio.gather(
            matcher.lookup(SQUARE_QUERY),
            matcher.lookup(ANCHORAGE),
            matcher.lookup(NEW_YORK),
        )

        assert source.fetches == 1
        assert outcomes[0].status == "matched"

    @pytest.mark.asyncio()
    async def test_source_from_config(self, footprints_path: Path) -> None:
        matcher = FootprintMatcher(MatcherConfig(footprint_source=str(footprints_path)))
        assert isinstance(matcher.source, FileSource)
        outcome = await matcher.lookup(SQUARE_QUERY)
        assert outcome.status == "matched"

    @pytest.mark.asyncio()
    async def test_empty_collection(self, empty_collection_path: Path) -> None:
        matcher = FootprintMatcher(source=FileSource(empty_collection_path))
        with pytest.raises(DataMalformedError):
            await matcher.lookup(SQUARE_QUERY)

    @pytest.mark.asyncio()
    async def test_missing_dataset(self, tmp_path: Path) -> None:
        matcher = FootprintMatcher(source=FileSource(tmp_path / "Alaska.geojson"))
        with pytest.raises(DataUnavailableError):
            await matcher.lookup(SQUARE_QUERY)

    @pytest.mark.asyncio()
    async def test_failed_load_is_retried(self, tmp_path: Path, footprints_path: Path) -> None:
        dataset = tmp_path / "Alaska.geojson"
        matcher = FootprintMatcher(source=FileSource(dataset))
        with pytest.raises(DataUnavailableError):
            await matcher.collection()

        dataset.write_bytes(footprints_path.read_bytes())
        assert len(await matcher.collection()) == 5


# ---------------------------------------------------------------------------
# Address lookups and reports
# ---------------------------------------------------------------------------


class TestLookupAddress:
    """Geocode, then look up."""

    @pytest.mark.asyncio()
    async def test_geocoded_then_matched(self, footprints: FeatureCollection) -> None:
        geocoder = _StaticGeocoder(SQUARE_QUERY)
        matcher = FootprintMatcher(geocoder=geocoder, collection=footprints)

        outcome = await matcher.lookup_address("1 Reference Square")

        assert geocoder.addresses == ["1 Reference Square"]
        assert outcome.query.address == "1 Reference Square"
        assert outcome.status == "matched"

    @pytest.mark.asyncio()
    async def test_geocoding_failure_propagates(self, footprints: FeatureCollection) -> None:
        matcher = FootprintMatcher(geocoder=_StaticGeocoder(None), collection=footprints)
        with pytest.raises(AddressNotFoundError):
            await matcher.lookup_address("nowhere")

    def test_geocoder_from_config(self) -> None:
        matcher = FootprintMatcher(MatcherConfig(geocode_api_key="secret"))
        assert isinstance(matcher.geocoder, MapsCoGeocoder)
        assert matcher.geocoder.config.api_key == "secret"


class TestLookupReport:
    """Serialisable report for the display layer."""

    @pytest.mark.asyncio()
    async def test_matched_report(self, matcher: FootprintMatcher) -> None:
        report = (await matcher.lookup(SQUARE_QUERY)).to_report()

        assert report.schema_version == SCHEMA_VERSION
        assert report.status == "matched"
        assert report.query.address == "Reference Square, AK"
        assert report.match is not None
        assert report.match.feature_index == 0
        assert report.match.geometry_type == "Polygon"
        assert report.match.perimeter_ft == pytest.approx(report.match.perimeter_m * 3.28084)
        assert report.match.area_sqft == pytest.approx(report.match.area_m2 * 10.7639)
        assert report.match.properties == {"id": "reference-square", "source": "test"}
        assert report.nearby == []

    @pytest.mark.asyncio()
    async def test_nearby_report_is_json(self, ranked_collection: FeatureCollection) -> None:
        outcome = await FootprintMatcher(collection=ranked_collection).lookup(ANCHORAGE)
        document = json.loads(outcome.to_report().model_dump_json())

        assert document["status"] == "nearby"
        assert document["match"] is None
        assert [n["feature_index"] for n in document["nearby"]] == [1, 2, 0]
        assert document["advisories"][0] == NO_EXACT_MATCH
        assert document["skipped_features"] == 0

    @pytest.mark.asyncio()
    async def test_skipped_count(self, matcher: FootprintMatcher) -> None:
        outcome = await matcher.lookup(GeocodingResult(address="Nowhere", lat=61.5, lng=-149.5))
        assert outcome.to_report().skipped_features == 2

