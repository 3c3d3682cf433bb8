"""Containment search.

Scans a FeatureCollection in order for the first feature whose outer
ring contains the query point.

- Holes are ignored: a point inside a hole still counts as contained.
- A MultiPolygon contains the point if any constituent outer ring does.
- Points on a ring's boundary count as contained.
- Overlapping footprints resolve by collection order, never by area.
- A feature whose geometry cannot be parsed or tested is recorded as a
  ``SkippedFeature`` and the scan continues.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from footprint_matcher.matching.geometry import (
    GeometryFaultError,
    exterior_polygons,
    feature_geometry,
    skipped_from_fault,
)
from footprint_matcher.models.results import ContainmentScan, SkippedFeature

if TYPE_CHECKING:
    from collections.abc import Iterable

    from footprint_matcher.models.feature import Feature
    from footprint_matcher.models.geometry import Coordinate, Geometry

logger = logging.getLogger("footprint_matcher.matching.containment")


def scan_containing(point: Coordinate, features: Iterable[Feature]) -> ContainmentScan:
    """Find the first feature containing *point*, recording skipped features.

    Args:
        point: The query coordinate.
        features: Features in collection order.

    Returns:
        A ``ContainmentScan`` whose ``match`` is the lowest-index
        containing feature, or ``None``.
    """
    from shapely.geometry import Point

    query = Point(point.lonlat)
    skipped: list[SkippedFeature] = []
    scanned = 0

    for feature in features:
        scanned += 1
        try:
            geometry = feature_geometry(feature)
            hit = _covers(geometry, query)
        except GeometryFaultError as exc:
            skipped.append(skipped_from_fault(feature, exc))
            continue

        if hit:
            logger.info(
                "Containment match | index=%d | point=(%.6f, %.6f) | scanned=%d | skipped=%d",
                feature.index,
                point.lat,
                point.lng,
                scanned,
                len(skipped),
            )
            return ContainmentScan(match=feature, skipped=tuple(skipped))

    logger.info(
        "No containment match | point=(%.6f, %.6f) | scanned=%d | skipped=%d",
        point.lat,
        point.lng,
        scanned,
        len(skipped),
    )
    return ContainmentScan(match=None, skipped=tuple(skipped))


def find_containing(point: Coordinate, features: Iterable[Feature]) -> Feature | None:
    """Return the first feature whose geometry contains *point*, or ``None``."""
    return scan_containing(point, features).match


def _covers(geometry: Geometry, query: object) -> bool:
    """Point-in-polygon test over outer rings.

    Raises:
        GeometryFaultError: If shapely cannot build or test a ring.
    """
    from shapely.errors import GEOSException

    try:
        return any(shape.covers(query) for shape in exterior_polygons(geometry))
    except (GEOSException, ValueError, TypeError) as exc:
        msg = f"Point-in-polygon test failed: {exc}"
        raise GeometryFaultError(msg, code="GEOMETRY_INVALID") from exc
