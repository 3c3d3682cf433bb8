"""Region guard.

Checks whether a query coordinate falls inside the dataset's expected
coverage box.  A coordinate outside the box is an advisory, never an
error: the lookup still runs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from footprint_matcher.core.constants import (
    DEFAULT_REGION_EAST,
    DEFAULT_REGION_NAME,
    DEFAULT_REGION_NORTH,
    DEFAULT_REGION_SOUTH,
    DEFAULT_REGION_WEST,
)

logger = logging.getLogger("footprint_matcher.matching.region")


@dataclass(frozen=True, slots=True)
class RegionBounds:
    """A named longitude/latitude bounding box (inclusive edges)."""

    name: str
    west: float
    east: float
    south: float
    north: float

    def contains(self, lat: float, lng: float) -> bool:
        return self.west <= lng <= self.east and self.south <= lat <= self.north


ALASKA_BOUNDS = RegionBounds(
    name=DEFAULT_REGION_NAME,
    west=DEFAULT_REGION_WEST,
    east=DEFAULT_REGION_EAST,
    south=DEFAULT_REGION_SOUTH,
    north=DEFAULT_REGION_NORTH,
)


def is_in_region(lat: float, lng: float, bounds: RegionBounds = ALASKA_BOUNDS) -> bool:
    """Return whether ``(lat, lng)`` lies inside *bounds*."""
    return bounds.contains(lat, lng)


def region_advisory(lat: float, lng: float, bounds: RegionBounds = ALASKA_BOUNDS) -> str:
    """Return a warning message for an out-of-region coordinate.

    Returns ``""`` when the coordinate is inside *bounds*.  Otherwise the
    warning is logged and returned for display.
    """
    if is_in_region(lat, lng, bounds):
        return ""
    message = f"Coordinates [{lng}, {lat}] are outside {bounds.name}'s bounds"
    logger.warning(message)
    return message
