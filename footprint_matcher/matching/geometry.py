"""Geometry parsing and shapely conversion.

The loader passes raw GeoJSON geometry through unvalidated.  This module
turns one raw geometry into the ``Geometry`` union, raising
``GeometryFaultError`` when it cannot: a missing geometry, an
unsupported ``type`` tag, wrong coordinate nesting, non-numeric or
out-of-range coordinates, or an outer ring with too few points.

An invalid hole ring is dropped rather than faulting its polygon, and an
invalid MultiPolygon part is dropped while the remaining parts are kept.
Both are logged and listed on the parsed geometry's ``dropped`` field.
A MultiPolygon faults only when none of its parts parse.

A geometry fault is always per-feature and recoverable.  The search
components catch it, record a ``SkippedFeature`` and move on.

Rings are auto-closed (first coordinate appended when first != last).
No topology repair is attempted.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, assert_never

from footprint_matcher.core.constants import (
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
)
from footprint_matcher.core.exceptions import ValidationError
from footprint_matcher.models.geometry import (
    Geometry,
    LonLat,
    MultiPolygonGeometry,
    PolygonGeometry,
    Ring,
)
from footprint_matcher.models.results import SkippedFeature

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry

    from footprint_matcher.models.feature import Feature

logger = logging.getLogger("footprint_matcher.matching.geometry")

# Minimum vertices for a valid ring (3 distinct + closing = 4)
MIN_RING_VERTICES = 4

POLYGON = "Polygon"
MULTI_POLYGON = "MultiPolygon"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class GeometryFaultError(ValidationError):
    """Raised when a single feature's geometry cannot be evaluated."""

    default_stage = "geometry"
    default_code = "GEOMETRY_FAULT"


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_geometry(raw: object) -> Geometry:
    """Parse a raw GeoJSON geometry mapping into a ``Geometry``.

    Raises:
        GeometryFaultError: If the geometry is missing, of an unsupported
            type, or structurally malformed.
    """
    if not isinstance(raw, dict):
        msg = "Feature has no geometry"
        raise GeometryFaultError(msg, code="GEOMETRY_MISSING")

    geom_type = raw.get("type")
    coordinates = raw.get("coordinates")

    if geom_type == POLYGON:
        return _parse_polygon(coordinates)
    if geom_type == MULTI_POLYGON:
        return _parse_multipolygon(coordinates)

    msg = f"Unsupported geometry type {geom_type!r} (expected Polygon or MultiPolygon)"
    raise GeometryFaultError(msg, code="GEOMETRY_TYPE_UNSUPPORTED")


def feature_geometry(feature: Feature) -> Geometry:
    """Parse the geometry of *feature*, tagging faults with its index."""
    try:
        return parse_geometry(feature.geometry)
    except GeometryFaultError as exc:
        msg = f"Feature {feature.index}: {exc.message}"
        raise GeometryFaultError(msg, code=exc.code) from exc


def skipped_from_fault(feature: Feature, exc: GeometryFaultError) -> SkippedFeature:
    """Record a geometry fault as a ``SkippedFeature`` and log it."""
    logger.warning(
        "Skipping feature | index=%d | code=%s | reason=%s",
        feature.index,
        exc.code,
        exc.message,
    )
    return SkippedFeature(index=feature.index, code=exc.code, reason=exc.message)


def _parse_polygon(raw_rings: object) -> PolygonGeometry:
    if not isinstance(raw_rings, list | tuple) or not raw_rings:
        msg = "Polygon has no rings"
        raise GeometryFaultError(msg, code="COORDINATES_MALFORMED")
    exterior = _parse_ring(raw_rings[0])

    interiors: list[Ring] = []
    dropped: list[str] = []
    for idx, raw_ring in enumerate(raw_rings[1:], start=1):
        try:
            interiors.append(_parse_ring(raw_ring))
        except GeometryFaultError as exc:
            dropped.append(f"hole {idx}: {exc.message}")

    if dropped:
        logger.warning(
            "Dropping invalid hole rings | count=%d | reasons=%s",
            len(dropped),
            "; ".join(dropped),
        )
    return PolygonGeometry(exterior=exterior, interiors=tuple(interiors), dropped=tuple(dropped))


def _parse_multipolygon(raw_polygons: object) -> MultiPolygonGeometry:
    """Parse each constituent polygon on its own, keeping the valid ones.

    Raises only when no constituent polygon survives.
    """
    if not isinstance(raw_polygons, list | tuple) or not raw_polygons:
        msg = "MultiPolygon has no polygons"
        raise GeometryFaultError(msg, code="COORDINATES_MALFORMED")

    polygons: list[PolygonGeometry] = []
    faults: list[GeometryFaultError] = []
    dropped: list[str] = []
    for idx, raw_polygon in enumerate(raw_polygons):
        try:
            polygons.append(_parse_polygon(raw_polygon))
        except GeometryFaultError as exc:
            faults.append(exc)
            dropped.append(f"polygon {idx}: {exc.message}")

    if not polygons:
        first = faults[0]
        msg = f"All {len(raw_polygons)} MultiPolygon part(s) are invalid; {first.message}"
        raise GeometryFaultError(msg, code=first.code) from first

    if dropped:
        logger.warning(
            "Dropping invalid MultiPolygon parts | kept=%d | count=%d | reasons=%s",
            len(polygons),
            len(dropped),
            "; ".join(dropped),
        )
    return MultiPolygonGeometry(polygons=tuple(polygons), dropped=tuple(dropped))


def _parse_ring(raw_ring: object) -> Ring:
    if not isinstance(raw_ring, list | tuple):
        msg = f"Ring must be a list of positions, got {type(raw_ring).__name__}"
        raise GeometryFaultError(msg, code="COORDINATES_MALFORMED")

    points = [_parse_position(idx, c) for idx, c in enumerate(raw_ring)]
    if len(points) < 3:
        msg = f"Ring has only {len(points)} point(s), need at least 3"
        raise GeometryFaultError(msg, code="RING_TOO_SHORT")

    if points[0] != points[-1]:
        points.append(points[0])

    if len(points) < MIN_RING_VERTICES:
        msg = f"Ring has fewer than {MIN_RING_VERTICES} vertices (including closure)"
        raise GeometryFaultError(msg, code="RING_TOO_SHORT")

    return tuple(points)


def _parse_position(idx: int, raw: object) -> LonLat:
    """Convert one ``[lon, lat, (alt)]`` position, dropping altitude."""
    if not isinstance(raw, list | tuple) or len(raw) < 2:
        msg = f"Malformed position at index {idx}: expected [lon, lat], got {raw!r}"
        raise GeometryFaultError(msg, code="COORDINATES_MALFORMED")
    try:
        lon = float(raw[0])
        lat = float(raw[1])
    except (TypeError, ValueError) as exc:
        msg = f"Malformed position at index {idx}: cannot convert {raw!r} to float"
        raise GeometryFaultError(msg, code="COORDINATES_MALFORMED") from exc

    if not (MIN_LONGITUDE <= lon <= MAX_LONGITUDE and MIN_LATITUDE <= lat <= MAX_LATITUDE):
        msg = f"Position {idx} ({lon}, {lat}) outside WGS 84 bounds"
        raise GeometryFaultError(msg, code="COORDINATE_OUT_OF_RANGE")
    return (lon, lat)


# ---------------------------------------------------------------------------
# Shapely conversion
# ---------------------------------------------------------------------------


def exterior_polygons(geometry: Geometry) -> list[BaseGeometry]:
    """Return one shapely polygon per outer ring, holes dropped."""
    from shapely.geometry import Polygon

    if isinstance(geometry, PolygonGeometry):
        return [Polygon(geometry.exterior)]
    if isinstance(geometry, MultiPolygonGeometry):
        return [Polygon(poly.exterior) for poly in geometry.polygons]
    assert_never(geometry)


def to_shape(geometry: Geometry) -> BaseGeometry:
    """Convert to a shapely Polygon/MultiPolygon, holes included."""
    from shapely.geometry import MultiPolygon

    if isinstance(geometry, PolygonGeometry):
        return _shape_polygon(geometry)
    if isinstance(geometry, MultiPolygonGeometry):
        return MultiPolygon([_shape_polygon(poly) for poly in geometry.polygons])
    assert_never(geometry)


def _shape_polygon(polygon: PolygonGeometry) -> BaseGeometry:
    from shapely.geometry import Polygon

    if polygon.has_holes:
        return Polygon(polygon.exterior, holes=polygon.interiors)
    return Polygon(polygon.exterior)
