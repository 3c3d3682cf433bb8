"""Source factory: selects a ``FeatureSource`` from a location string.

- ``http://`` / ``https://`` → ``HttpSource``
- ``azblob://container/blob`` → ``BlobSource``
- anything else (``file://`` prefix optional) → ``FileSource``

Usage::

    from footprint_matcher.sources.factory import source_from_uri

    source = source_from_uri(config.footprint_source)
"""

from __future__ import annotations

import logging

from footprint_matcher.core.constants import BLOB_URI_SCHEME, DEFAULT_LOAD_TIMEOUT_S
from footprint_matcher.sources.base import FeatureSource

logger = logging.getLogger(__name__)

_HTTP_PREFIXES = ("http://", "https://")
_FILE_PREFIX = "file://"


def source_from_uri(uri: str, *, timeout_s: float = DEFAULT_LOAD_TIMEOUT_S) -> FeatureSource:
    """Create the source matching *uri*'s scheme.

    Args:
        uri: Path, URL or blob URI of the dataset.
        timeout_s: HTTP timeout, used by ``HttpSource`` only.

    Raises:
        ValueError: If *uri* is empty or a malformed blob URI.
    """
    if not uri:
        msg = "Footprint source location must be non-empty"
        raise ValueError(msg)

    if uri.lower().startswith(_HTTP_PREFIXES):
        from footprint_matcher.sources.http import HttpSource

        source: FeatureSource = HttpSource(uri, timeout_s=timeout_s)
    elif uri.startswith(f"{BLOB_URI_SCHEME}://"):
        from footprint_matcher.sources.blob import BlobSource

        source = BlobSource.from_uri(uri)
    else:
        from footprint_matcher.sources.file import FileSource

        path = uri[len(_FILE_PREFIX) :] if uri.startswith(_FILE_PREFIX) else uri
        source = FileSource(path)

    logger.debug("Selected footprint source | %r", source)
    return source
