"""Geometry value types for footprint matching.

``Geometry`` is a closed union of ``PolygonGeometry`` and
``MultiPolygonGeometry``.  Every consumer dispatches over both members
and ends with ``assert_never`` so that adding a geometry kind is a type
error in each component until it is handled.

Rings are tuples of ``(lon, lat)`` pairs, matching GeoJSON axis order.
A ``Coordinate`` is the query-side ``(lat, lng)`` value type.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeAlias

from footprint_matcher.core.constants import (
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
)
from footprint_matcher.core.exceptions import InvalidCoordinateError

LonLat: TypeAlias = tuple[float, float]
Ring: TypeAlias = tuple[LonLat, ...]


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A WGS 84 point in decimal degrees.

    Attributes:
        lat: Latitude in ``[-90, 90]``.
        lng: Longitude in ``[-180, 180]``.

    Raises:
        InvalidCoordinateError: If either value is out of range.
    """

    lat: float
    lng: float

    def __post_init__(self) -> None:
        if not MIN_LATITUDE <= self.lat <= MAX_LATITUDE:
            msg = f"Latitude {self.lat} out of WGS 84 range [{MIN_LATITUDE}, {MAX_LATITUDE}]"
            raise InvalidCoordinateError(msg)
        if not MIN_LONGITUDE <= self.lng <= MAX_LONGITUDE:
            msg = f"Longitude {self.lng} out of WGS 84 range [{MIN_LONGITUDE}, {MAX_LONGITUDE}]"
            raise InvalidCoordinateError(msg)

    @property
    def lonlat(self) -> LonLat:
        """Return the point in GeoJSON ``(lon, lat)`` order."""
        return (self.lng, self.lat)


@dataclass(frozen=True, slots=True)
class PolygonGeometry:
    """One outer ring plus zero or more hole rings.

    Only ``exterior`` takes part in containment, perimeter and area.
    ``dropped`` lists hole rings discarded as invalid while parsing.
    """

    exterior: Ring
    interiors: tuple[Ring, ...] = field(default_factory=tuple)
    dropped: tuple[str, ...] = field(default_factory=tuple)

    @property
    def has_holes(self) -> bool:
        return len(self.interiors) > 0


@dataclass(frozen=True, slots=True)
class MultiPolygonGeometry:
    """Independent polygons sharing one logical feature.

    ``dropped`` lists constituent polygons discarded as invalid while
    parsing; ``polygons`` holds only the ones that parsed.
    """

    polygons: tuple[PolygonGeometry, ...]
    dropped: tuple[str, ...] = field(default_factory=tuple)


Geometry: TypeAlias = PolygonGeometry | MultiPolygonGeometry
