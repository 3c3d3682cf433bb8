"""Proximity search.

Fallback when containment finds nothing: rank features by the geodesic
distance from the query point to one representative point per feature.

The representative point is shapely's ``point_on_surface``, which is
deterministic and always lies inside the footprint (holes honoured),
unlike a centroid that can fall outside a concave shape.  The reported
distance is therefore an over-estimate of the distance to the nearest
wall.

Features are kept when ``distance < radius_m`` (strict) and returned in
ascending distance order; equal distances keep collection order.
Features whose geometry cannot be evaluated are skipped and recorded.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from footprint_matcher.matching.geometry import (
    GeometryFaultError,
    feature_geometry,
    skipped_from_fault,
    to_shape,
)
from footprint_matcher.matching.measurement import ELLIPSOID
from footprint_matcher.models.geometry import Coordinate
from footprint_matcher.models.results import ProximityResult, ProximityScan, SkippedFeature

if TYPE_CHECKING:
    from collections.abc import Iterable

    from footprint_matcher.models.feature import Feature
    from footprint_matcher.models.geometry import Geometry

logger = logging.getLogger("footprint_matcher.matching.proximity")


def representative_point(geometry: Geometry) -> Coordinate:
    """Return a deterministic point guaranteed to lie on *geometry*.

    Raises:
        GeometryFaultError: If shapely cannot build the shape or it has
            no surface.
    """
    from shapely.errors import GEOSException

    try:
        surface_point = to_shape(geometry).point_on_surface()
    except (GEOSException, ValueError, TypeError) as exc:
        msg = f"Cannot derive a point on the footprint: {exc}"
        raise GeometryFaultError(msg, code="GEOMETRY_INVALID") from exc

    if surface_point.is_empty:
        msg = "Footprint has no surface to place a representative point on"
        raise GeometryFaultError(msg, code="GEOMETRY_INVALID")

    return Coordinate(lat=surface_point.y, lng=surface_point.x)


def geodesic_distance_m(a: Coordinate, b: Coordinate) -> float:
    """Distance in metres between two points on the WGS 84 ellipsoid."""
    from pyproj import Geod

    _fwd_az, _back_az, distance = Geod(ellps=ELLIPSOID).inv(a.lng, a.lat, b.lng, b.lat)
    return float(distance)


def scan_nearby(
    point: Coordinate,
    features: Iterable[Feature],
    radius_m: float,
) -> ProximityScan:
    """Rank features within *radius_m* of *point*, recording skipped features.

    Args:
        point: The query coordinate.
        features: Features in collection order.
        radius_m: Exclusive search radius in metres.

    Returns:
        A ``ProximityScan`` with results sorted by ascending distance.

    Raises:
        ValueError: If *radius_m* is not positive.
    """
    if radius_m <= 0:
        msg = f"Search radius must be > 0 metres, got {radius_m}"
        raise ValueError(msg)

    nearby: list[ProximityResult] = []
    skipped: list[SkippedFeature] = []

    for feature in features:
        try:
            on_surface = representative_point(feature_geometry(feature))
        except GeometryFaultError as exc:
            skipped.append(skipped_from_fault(feature, exc))
            continue

        distance = geodesic_distance_m(point, on_surface)
        if distance < radius_m:
            nearby.append(ProximityResult(feature=feature, distance_m=distance, point=on_surface))

    # sorted() is stable: equal distances keep collection order
    ranked = tuple(sorted(nearby, key=lambda r: r.distance_m))

    if ranked:
        logger.info(
            "Nearby features found | count=%d | closest=%.2f m | radius=%.0f m | skipped=%d",
            len(ranked),
            ranked[0].distance_m,
            radius_m,
            len(skipped),
        )
    else:
        logger.info(
            "No nearby features | radius=%.0f m | skipped=%d",
            radius_m,
            len(skipped),
        )
    return ProximityScan(results=ranked, skipped=tuple(skipped))


def find_nearby(
    point: Coordinate,
    features: Iterable[Feature],
    radius_m: float,
) -> list[ProximityResult]:
    """Return features within *radius_m* of *point*, nearest first."""
    return list(scan_nearby(point, features, radius_m).results)
