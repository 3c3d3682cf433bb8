"""Result models produced by the search and measurement components.

- MatchResult: a contained feature with its perimeter and area
- ProximityResult: a nearby feature with its distance to the query
- SkippedFeature: a per-feature geometry fault recorded during a scan
- ContainmentScan / ProximityScan: scan outcome plus skipped features
- LookupOutcome: everything one orchestrated lookup produced
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from footprint_matcher.core.constants import FEET_PER_METRE, SQ_FEET_PER_SQ_METRE

if TYPE_CHECKING:
    from footprint_matcher.models.feature import Feature
    from footprint_matcher.models.geocoding import GeocodingResult
    from footprint_matcher.models.geometry import Coordinate
    from footprint_matcher.models.report import LookupReport


@dataclass(frozen=True, slots=True)
class MatchResult:
    """A selected footprint with its geodesic measurements.

    Attributes:
        feature: The matched feature.
        perimeter_m: Outer-ring perimeter in metres.
        area_m2: Outer-ring area in square metres (holes not subtracted).
    """

    feature: Feature
    perimeter_m: float
    area_m2: float

    @property
    def perimeter_ft(self) -> float:
        return self.perimeter_m * FEET_PER_METRE

    @property
    def area_sqft(self) -> float:
        return self.area_m2 * SQ_FEET_PER_SQ_METRE


@dataclass(frozen=True, slots=True)
class ProximityResult:
    """A feature within the search radius of the query point.

    Attributes:
        feature: The nearby feature.
        distance_m: Geodesic distance from the query to ``point``.
        point: The representative on-surface point the distance was
            measured to.
    """

    feature: Feature
    distance_m: float
    point: Coordinate


@dataclass(frozen=True, slots=True)
class SkippedFeature:
    """A feature that could not be evaluated and was skipped.

    Attributes:
        index: Collection index of the skipped feature.
        code: Machine-readable fault code (e.g. ``"RING_TOO_SHORT"``).
        reason: Human-readable fault description.
    """

    index: int
    code: str
    reason: str


@dataclass(frozen=True, slots=True)
class ContainmentScan:
    """Outcome of a containment scan.

    ``match`` is the first containing feature in collection order, or
    ``None``.  ``skipped`` lists the faults met before the scan stopped.
    """

    match: Feature | None = None
    skipped: tuple[SkippedFeature, ...] = ()


@dataclass(frozen=True, slots=True)
class ProximityScan:
    """Outcome of a proximity scan: ranked results plus skipped features."""

    results: tuple[ProximityResult, ...] = ()
    skipped: tuple[SkippedFeature, ...] = ()


@dataclass(frozen=True, slots=True)
class LookupOutcome:
    """Everything one orchestrated lookup produced.

    Attributes:
        query: The geocoded query the lookup ran for.
        in_region: Whether the query lies inside the coverage region.
        match: Containment match with measurements, or ``None``.
        nearby: Proximity results, populated only on a containment miss.
        advisories: Presentation-level messages (region warning,
            "no nearby buildings", ...).
        skipped: Features skipped during the containment and proximity
            scans.
    """

    query: GeocodingResult
    in_region: bool = True
    match: MatchResult | None = None
    nearby: tuple[ProximityResult, ...] = ()
    advisories: tuple[str, ...] = ()
    skipped: tuple[SkippedFeature, ...] = field(default_factory=tuple)

    @property
    def status(self) -> str:
        """``"matched"``, ``"nearby"`` or ``"no_match"``."""
        if self.match is not None:
            return "matched"
        if self.nearby:
            return "nearby"
        return "no_match"

    def to_report(self) -> LookupReport:
        """Build the serialisable report for the display collaborator."""
        from footprint_matcher.models.report import LookupReport

        return LookupReport.from_outcome(self)
