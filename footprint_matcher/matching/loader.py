"""Feature loader.

Fetches the footprint dataset from a ``FeatureSource`` and decodes it
into a ``FeatureCollection``.  This is the only step that performs I/O
and the only one that suspends; the caller may cancel it or bound it
with *timeout_s*.

Failure modes:
- ``DataUnavailableError``: the source could not be reached (raised by
  the source, or on timeout).
- ``DataMalformedError``: the payload is not a JSON object with a
  non-empty ``features`` array.

Geometry is NOT validated here.  Malformed feature geometry passes
through and is skipped per feature by the search components.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING

from footprint_matcher.core.exceptions import ContractError
from footprint_matcher.matching.diagnostics import log_collection_shape
from footprint_matcher.models.feature import Feature, FeatureCollection
from footprint_matcher.sources.base import DataUnavailableError

if TYPE_CHECKING:
    from footprint_matcher.sources.base import FeatureSource

logger = logging.getLogger("footprint_matcher.matching.loader")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class DataMalformedError(ContractError):
    """Raised when the payload has no parseable, non-empty feature list."""

    default_stage = "load_features"
    default_code = "DATA_MALFORMED"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def load_features(
    source: FeatureSource,
    *,
    timeout_s: float | None = None,
) -> FeatureCollection:
    """Load and decode the footprint FeatureCollection.

    Args:
        source: Where to read the dataset from.
        timeout_s: Optional overall timeout for the fetch, in seconds.

    Returns:
        The decoded collection, in dataset order.

    Raises:
        DataUnavailableError: If the source cannot be reached in time.
        DataMalformedError: If the payload holds no features.
    """
    logger.info("Loading footprints | source=%s", source.location)

    try:
        async with asyncio.timeout(timeout_s):
            payload = await source.fetch()
    except TimeoutError as exc:
        msg = f"Timed out after {timeout_s}s fetching footprints"
        raise DataUnavailableError(source.location, msg, code="SOURCE_TIMEOUT") from exc

    collection = parse_feature_collection(payload, source=source.location)
    logger.info(
        "Features loaded | source=%s | features=%d",
        source.location,
        len(collection),
    )
    log_collection_shape(collection)
    return collection


def parse_feature_collection(payload: bytes | str, *, source: str = "") -> FeatureCollection:
    """Decode a GeoJSON FeatureCollection payload.

    Raises:
        DataMalformedError: If the payload is not JSON, not an object,
            or has a missing, non-array or empty ``features`` member.
    """
    try:
        document = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError, ValueError) as exc:
        msg = f"Footprint payload is not valid JSON: {exc}"
        raise DataMalformedError(msg) from exc

    if not isinstance(document, dict):
        msg = f"Footprint payload must be a JSON object, got {type(document).__name__}"
        raise DataMalformedError(msg)

    raw_features = document.get("features")
    if not isinstance(raw_features, list):
        msg = "Footprint payload has no 'features' array"
        raise DataMalformedError(msg)
    if not raw_features:
        msg = "Footprint payload contains no features"
        raise DataMalformedError(msg)

    features = [Feature.from_geojson(raw, idx) for idx, raw in enumerate(raw_features)]
    return FeatureCollection.from_features(features, source=source)
