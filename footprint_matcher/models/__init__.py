"""Data models and schemas.

Defines the data structures used throughout the matcher:
- Coordinate, PolygonGeometry, MultiPolygonGeometry: geometry value types
- Feature, FeatureCollection: the loaded footprint dataset
- MatchResult, ProximityResult, SkippedFeature: search and measurement results
- GeocodingResult: the geocoded query
- LookupReport: serialisable report for the display layer
"""

from footprint_matcher.models.feature import Feature, FeatureCollection
from footprint_matcher.models.geocoding import GeocoderConfig, GeocodingResult
from footprint_matcher.models.geometry import (
    Coordinate,
    Geometry,
    MultiPolygonGeometry,
    PolygonGeometry,
)
from footprint_matcher.models.results import (
    ContainmentScan,
    LookupOutcome,
    MatchResult,
    ProximityResult,
    ProximityScan,
    SkippedFeature,
)

__all__ = [
    "ContainmentScan",
    "Coordinate",
    "Feature",
    "FeatureCollection",
    "GeocoderConfig",
    "GeocodingResult",
    "Geometry",
    "LookupOutcome",
    "MatchResult",
    "MultiPolygonGeometry",
    "PolygonGeometry",
    "ProximityResult",
    "ProximityScan",
    "SkippedFeature",
]
