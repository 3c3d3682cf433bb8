"""Footprint measurement.

Computes geodesic perimeter and area for a footprint on the WGS 84
ellipsoid with ``pyproj.Geod``, and converts them to feet / square feet.

Only outer rings are measured:
- Perimeter of a Polygon is the length of its outer ring; a MultiPolygon
  sums the outer-ring lengths of its polygons.
- Area is the absolute geodesic area of the outer ring (winding-order
  agnostic); a MultiPolygon sums its polygons.  Holes are NOT
  subtracted.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, assert_never

from footprint_matcher.core.constants import FEET_PER_METRE, SQ_FEET_PER_SQ_METRE
from footprint_matcher.matching.geometry import feature_geometry
from footprint_matcher.models.geometry import MultiPolygonGeometry, PolygonGeometry
from footprint_matcher.models.results import MatchResult

if TYPE_CHECKING:
    from footprint_matcher.models.feature import Feature
    from footprint_matcher.models.geometry import Geometry, Ring

logger = logging.getLogger("footprint_matcher.matching.measurement")

ELLIPSOID = "WGS84"


# ---------------------------------------------------------------------------
# Unit conversions
# ---------------------------------------------------------------------------


def meters_to_feet(meters: float) -> float:
    """Convert metres to feet (x 3.28084)."""
    return meters * FEET_PER_METRE


def square_meters_to_square_feet(square_meters: float) -> float:
    """Convert square metres to square feet (x 10.7639)."""
    return square_meters * SQ_FEET_PER_SQ_METRE


# ---------------------------------------------------------------------------
# Ring level
# ---------------------------------------------------------------------------


def ring_length_m(ring: Ring) -> float:
    """Geodesic length of a ring in metres, following its vertex order.

    Rings with fewer than two points have zero length.
    """
    if len(ring) < 2:
        return 0.0

    from pyproj import Geod

    geod = Geod(ellps=ELLIPSOID)
    lons = [c[0] for c in ring]
    lats = [c[1] for c in ring]
    return float(geod.line_length(lons, lats))


def ring_area_m2(ring: Ring) -> float:
    """Absolute geodesic area enclosed by a ring, in square metres.

    Rings with fewer than three points enclose no area.
    """
    if len(ring) < 3:
        return 0.0

    from pyproj import Geod

    geod = Geod(ellps=ELLIPSOID)
    lons = [c[0] for c in ring]
    lats = [c[1] for c in ring]
    # Geod.polygon_area_perimeter returns (signed area_m2, perimeter_m)
    area_m2, _perimeter = geod.polygon_area_perimeter(lons, lats)
    return abs(float(area_m2))


# ---------------------------------------------------------------------------
# Geometry level
# ---------------------------------------------------------------------------


def geometry_perimeter_m(geometry: Geometry) -> float:
    """Outer-ring perimeter in metres; MultiPolygons sum their parts."""
    if isinstance(geometry, PolygonGeometry):
        return ring_length_m(geometry.exterior)
    if isinstance(geometry, MultiPolygonGeometry):
        return sum(ring_length_m(poly.exterior) for poly in geometry.polygons)
    assert_never(geometry)


def geometry_area_m2(geometry: Geometry) -> float:
    """Outer-ring area in square metres; MultiPolygons sum their parts."""
    if isinstance(geometry, PolygonGeometry):
        return ring_area_m2(geometry.exterior)
    if isinstance(geometry, MultiPolygonGeometry):
        return sum(ring_area_m2(poly.exterior) for poly in geometry.polygons)
    assert_never(geometry)


# ---------------------------------------------------------------------------
# Feature level
# ---------------------------------------------------------------------------


def perimeter_m(feature: Feature) -> float:
    """Perimeter of *feature* in metres.

    Raises:
        GeometryFaultError: If the feature geometry cannot be parsed.
    """
    return geometry_perimeter_m(feature_geometry(feature))


def area_m2(feature: Feature) -> float:
    """Area of *feature* in square metres.

    Raises:
        GeometryFaultError: If the feature geometry cannot be parsed.
    """
    return geometry_area_m2(feature_geometry(feature))


def measure_feature(feature: Feature) -> MatchResult:
    """Measure a selected feature into a ``MatchResult``.

    Raises:
        GeometryFaultError: If the feature geometry cannot be parsed.
    """
    geometry = feature_geometry(feature)
    result = MatchResult(
        feature=feature,
        perimeter_m=geometry_perimeter_m(geometry),
        area_m2=geometry_area_m2(geometry),
    )
    logger.info(
        "Feature measured | index=%d | perimeter=%.2f m (%.2f ft) | area=%.2f m2 (%.2f sqft)",
        feature.index,
        result.perimeter_m,
        result.perimeter_ft,
        result.area_m2,
        result.area_sqft,
    )
    return result
