"""Shared matcher constants: single source of truth.

Centralises the default dataset location, the default coverage region
and the search radius so that config, the region guard and the lookup
orchestrator agree on one value.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Dataset
# ---------------------------------------------------------------------------

DEFAULT_FOOTPRINT_SOURCE: str = "building-footprints/Alaska.geojson"
"""Default location of the building footprint FeatureCollection."""

BLOB_URI_SCHEME: str = "azblob"
"""URI scheme for footprint datasets stored in Azure Blob Storage."""

# ---------------------------------------------------------------------------
# Coverage region (approximate Alaska bounding box)
# ---------------------------------------------------------------------------

DEFAULT_REGION_NAME: str = "Alaska"
DEFAULT_REGION_WEST: float = -180.0
DEFAULT_REGION_EAST: float = -130.0
DEFAULT_REGION_SOUTH: float = 51.0
DEFAULT_REGION_NORTH: float = 72.0

# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

DEFAULT_SEARCH_RADIUS_M: float = 50.0
"""Proximity fallback radius in metres."""

DEFAULT_LOAD_TIMEOUT_S: float = 30.0
"""Timeout for fetching the footprint dataset, in seconds."""

# ---------------------------------------------------------------------------
# WGS 84 coordinate bounds
# ---------------------------------------------------------------------------

MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0
MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0

# ---------------------------------------------------------------------------
# Unit conversions (exact multipliers, relied on by downstream comparisons)
# ---------------------------------------------------------------------------

FEET_PER_METRE: float = 3.28084
SQ_FEET_PER_SQ_METRE: float = 10.7639
