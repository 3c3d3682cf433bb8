"""Footprint dataset sources.

Byte-source adapters behind one interface:
- FeatureSource: Abstract base class defining ``fetch()``
- FileSource: local filesystem
- HttpSource: HTTP(S) download via httpx
- BlobSource: Azure Blob Storage

``source_from_uri`` picks the adapter from the configured location.
"""

from footprint_matcher.sources.base import DataUnavailableError, FeatureSource
from footprint_matcher.sources.factory import source_from_uri

__all__ = [
    "DataUnavailableError",
    "FeatureSource",
    "source_from_uri",
]
