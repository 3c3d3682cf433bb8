"""Data-shape diagnostics for loaded footprint datasets.

Describes the structure of a sample feature (geometry type, coordinate
nesting depth, first coordinate) so that a dataset in an unexpected
shape, e.g. swapped axis order or flattened rings, is visible in the
logs before any search runs.  Polygons nest to depth 3 and
MultiPolygons to depth 4.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from footprint_matcher.models.feature import Feature, FeatureCollection

logger = logging.getLogger("footprint_matcher.matching.diagnostics")

EXPECTED_DEPTH = {"Polygon": 3, "MultiPolygon": 4}


def coordinate_depth(coords: object) -> int:
    """Return the nesting depth of a coordinate array.

    A bare position ``[lon, lat]`` has depth 1, a ring depth 2, and so
    on.  Non-arrays have depth 0; an empty array has depth 1.
    """
    if not isinstance(coords, list | tuple):
        return 0
    if not coords:
        return 1
    if isinstance(coords[0], int | float):
        return 1
    return 1 + coordinate_depth(coords[0])


def first_coordinate(coords: object) -> tuple[float, float] | None:
    """Return the first ``(x, y)`` pair in a nested coordinate array."""
    if not isinstance(coords, list | tuple) or not coords:
        return None
    if (
        len(coords) >= 2
        and isinstance(coords[0], int | float)
        and isinstance(coords[1], int | float)
    ):
        return (float(coords[0]), float(coords[1]))
    return first_coordinate(coords[0])


def describe_feature(feature: Feature) -> dict[str, object]:
    """Summarise the structure of one feature's geometry."""
    coords = feature.geometry.get("coordinates") if feature.geometry else None
    geometry_type = feature.geometry_type
    depth = coordinate_depth(coords)
    return {
        "index": feature.index,
        "geometry_type": geometry_type,
        "coordinate_depth": depth,
        "expected_depth": EXPECTED_DEPTH.get(geometry_type),
        "first_coordinate": first_coordinate(coords),
    }


def geometry_type_counts(collection: FeatureCollection) -> Counter[str]:
    """Count features per geometry ``type`` tag (``""`` for none)."""
    return Counter(feature.geometry_type for feature in collection)


def log_collection_shape(collection: FeatureCollection) -> dict[str, object]:
    """Log the shape of the first feature and the geometry type mix.

    Returns the sample description (empty for an empty collection).
    """
    if not len(collection):
        return {}

    sample = describe_feature(collection[0])
    logger.info(
        "Sample feature structure | type=%s | depth=%d | first_coordinate=%s",
        sample["geometry_type"],
        sample["coordinate_depth"],
        sample["first_coordinate"],
    )
    expected = sample["expected_depth"]
    if expected is not None and expected != sample["coordinate_depth"]:
        logger.warning(
            "Sample feature nesting depth %s does not match %s for %s",
            sample["coordinate_depth"],
            expected,
            sample["geometry_type"],
        )
    logger.debug("Geometry types | %s", dict(geometry_type_counts(collection)))
    return sample
