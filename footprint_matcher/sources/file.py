"""Local filesystem footprint source."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from footprint_matcher.sources.base import DataUnavailableError, FeatureSource

logger = logging.getLogger(__name__)


class FileSource(FeatureSource):
    """Reads the dataset from a local path in a worker thread."""

    def __init__(self, path: Path | str) -> None:
        super().__init__(str(path))
        self._path = Path(path)

    async def fetch(self) -> bytes:
        try:
            payload = await asyncio.to_thread(self._path.read_bytes)
        except FileNotFoundError as exc:
            msg = f"Footprint file not found: {self._path}"
            raise DataUnavailableError(self.location, msg, code="SOURCE_NOT_FOUND") from exc
        except OSError as exc:
            msg = f"Cannot read footprint file: {exc}"
            raise DataUnavailableError(self.location, msg) from exc

        logger.debug("Read footprint file | path=%s | bytes=%d", self._path, len(payload))
        return payload
