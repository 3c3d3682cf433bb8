"""Pydantic report model for the display boundary.

A ``LookupReport`` is the serialisable form of a ``LookupOutcome``: what
was asked, what was found, and the advisory messages to show.  Metric
values are reported alongside their foot/square-foot conversions so the
display layer never converts units itself.

Sections:
- **query**: address text and coordinate
- **match**: the containing footprint with perimeter and area
- **nearby**: ranked proximity results on a containment miss
- **advisories** / **skipped_features**: presentation messages and the
  count of features whose geometry could not be evaluated
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from footprint_matcher.models.results import LookupOutcome, MatchResult, ProximityResult

SCHEMA_VERSION = "footprint-lookup-v1"


class QuerySection(BaseModel):
    """The geocoded query."""

    address: str = ""
    lat: float = 0.0
    lng: float = 0.0
    in_region: bool = True


class BuildingSection(BaseModel):
    """A matched building footprint with measurements.

    Attributes:
        feature_index: Position of the feature in the dataset.
        geometry_type: ``"Polygon"`` or ``"MultiPolygon"``.
        perimeter_m: Outer-ring geodesic perimeter in metres.
        perimeter_ft: Perimeter in feet.
        area_m2: Outer-ring geodesic area in square metres.
        area_sqft: Area in square feet.
        properties: Feature attributes, passed through unchanged.
    """

    feature_index: int
    geometry_type: str = ""
    perimeter_m: float = 0.0
    perimeter_ft: float = 0.0
    area_m2: float = 0.0
    area_sqft: float = 0.0
    properties: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_match(cls, match: MatchResult) -> BuildingSection:
        return cls(
            feature_index=match.feature.index,
            geometry_type=match.feature.geometry_type,
            perimeter_m=match.perimeter_m,
            perimeter_ft=match.perimeter_ft,
            area_m2=match.area_m2,
            area_sqft=match.area_sqft,
            properties=dict(match.feature.properties),
        )


class NearbySection(BaseModel):
    """One proximity result."""

    feature_index: int
    distance_m: float
    lat: float
    lng: float
    properties: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_result(cls, result: ProximityResult) -> NearbySection:
        return cls(
            feature_index=result.feature.index,
            distance_m=result.distance_m,
            lat=result.point.lat,
            lng=result.point.lng,
            properties=dict(result.feature.properties),
        )


class LookupReport(BaseModel):
    """Top-level lookup report."""

    schema_version: str = SCHEMA_VERSION
    status: str = "no_match"
    query: QuerySection = Field(default_factory=QuerySection)
    match: BuildingSection | None = None
    nearby: list[NearbySection] = Field(default_factory=list)
    advisories: list[str] = Field(default_factory=list)
    skipped_features: int = 0

    @classmethod
    def from_outcome(cls, outcome: LookupOutcome) -> LookupReport:
        """Build a report from a ``LookupOutcome``."""
        return cls(
            status=outcome.status,
            query=QuerySection.model_validate(
                {**outcome.query.to_dict(), "in_region": outcome.in_region}
            ),
            match=BuildingSection.from_match(outcome.match) if outcome.match else None,
            nearby=[NearbySection.from_result(r) for r in outcome.nearby],
            advisories=list(outcome.advisories),
            skipped_features=len(outcome.skipped),
        )
