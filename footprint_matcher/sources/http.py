"""HTTP(S) footprint source using ``httpx``."""

from __future__ import annotations

import logging

import httpx

from footprint_matcher.core.constants import DEFAULT_LOAD_TIMEOUT_S
from footprint_matcher.sources.base import DataUnavailableError, FeatureSource

logger = logging.getLogger(__name__)


class HttpSource(FeatureSource):
    """Downloads the dataset with a GET request.

    Args:
        url: Absolute ``http://`` or ``https://`` URL.
        timeout_s: Per-request timeout in seconds.
        transport: Optional ``httpx`` transport (tests inject a
            ``MockTransport``).
    """

    def __init__(
        self,
        url: str,
        *,
        timeout_s: float = DEFAULT_LOAD_TIMEOUT_S,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(url)
        self._timeout_s = timeout_s
        self._transport = transport

    async def fetch(self) -> bytes:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout_s,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(self.location)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            msg = f"Failed to load footprints: HTTP {status} {exc.response.reason_phrase}"
            code = "SOURCE_NOT_FOUND" if status == 404 else "DATA_UNAVAILABLE"
            raise DataUnavailableError(self.location, msg, code=code) from exc
        except httpx.HTTPError as exc:
            msg = f"Failed to load footprints: {exc}"
            raise DataUnavailableError(self.location, msg) from exc

        logger.debug(
            "Downloaded footprints | url=%s | bytes=%d",
            self.location,
            len(response.content),
        )
        return response.content
