"""Azure Blob Storage footprint source.

Datasets are addressed as ``azblob://<container>/<blob name>``.  The
``BlobServiceClient`` is built from the ``AzureWebJobsStorage``
connection string unless one is injected.  A missing or malformed
connection string surfaces as ``DataUnavailableError`` like any other
unreachable source.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from footprint_matcher.core.constants import BLOB_URI_SCHEME
from footprint_matcher.core.exceptions import ContractError
from footprint_matcher.core.ingress import get_blob_service_client
from footprint_matcher.sources.base import DataUnavailableError, FeatureSource

if TYPE_CHECKING:
    from azure.storage.blob import BlobServiceClient

logger = logging.getLogger(__name__)


class BlobSource(FeatureSource):
    """Downloads the dataset from a blob container.

    Args:
        container: Blob container name.
        blob_name: Blob path within the container.
        blob_service_client: Optional pre-built client.
    """

    def __init__(
        self,
        container: str,
        blob_name: str,
        *,
        blob_service_client: BlobServiceClient | None = None,
    ) -> None:
        super().__init__(f"{BLOB_URI_SCHEME}://{container}/{blob_name}")
        self._container = container
        self._blob_name = blob_name
        self._client = blob_service_client

    @classmethod
    def from_uri(
        cls,
        uri: str,
        *,
        blob_service_client: BlobServiceClient | None = None,
    ) -> BlobSource:
        """Build a source from an ``azblob://container/blob`` URI.

        Raises:
            ValueError: If the URI has the wrong scheme or lacks a
                container or blob name.
        """
        prefix = f"{BLOB_URI_SCHEME}://"
        if not uri.startswith(prefix):
            msg = f"Blob URI must start with {prefix!r}, got {uri!r}"
            raise ValueError(msg)
        container, _, blob_name = uri[len(prefix) :].partition("/")
        if not container or not blob_name:
            msg = f"Blob URI must name a container and a blob, got {uri!r}"
            raise ValueError(msg)
        return cls(container, blob_name, blob_service_client=blob_service_client)

    async def fetch(self) -> bytes:
        return await asyncio.to_thread(self._download)

    def _download(self) -> bytes:
        from azure.core.exceptions import AzureError, ResourceNotFoundError

        try:
            client = self._client or get_blob_service_client()
        except (ContractError, ValueError) as exc:
            msg = f"Blob storage is not configured: {exc}"
            raise DataUnavailableError(self.location, msg, code="SOURCE_UNCONFIGURED") from exc

        try:
            blob_client = client.get_blob_client(container=self._container, blob=self._blob_name)
            payload = blob_client.download_blob().readall()
        except ResourceNotFoundError as exc:
            msg = f"Footprint blob not found: {self._container}/{self._blob_name}"
            raise DataUnavailableError(self.location, msg, code="SOURCE_NOT_FOUND") from exc
        except AzureError as exc:
            msg = f"Failed to download footprint blob: {exc}"
            raise DataUnavailableError(self.location, msg) from exc

        logger.debug(
            "Downloaded footprint blob | container=%s | blob=%s | bytes=%d",
            self._container,
            self._blob_name,
            len(payload),
        )
        return payload
