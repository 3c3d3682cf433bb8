"""FeatureSource abstract base class.

Defines the contract every footprint byte source implements.  The
loader interacts exclusively with this interface: it never knows which
storage backend is behind it.

Each concrete source (``FileSource``, ``HttpSource``, ``BlobSource``)
implements ``fetch()`` for its backend and maps every backend failure
to ``DataUnavailableError``.
"""

from __future__ import annotations

import abc

from footprint_matcher.core.exceptions import TransientError


class FeatureSource(abc.ABC):
    """Abstract base class for footprint dataset sources.

    Example usage::

        source = source_from_uri("https://example.org/Alaska.geojson")
        payload = await source.fetch()
    """

    def __init__(self, location: str) -> None:
        self._location = location

    @property
    def location(self) -> str:
        """Return the path, URL or URI this source reads from."""
        return self._location

    @abc.abstractmethod
    async def fetch(self) -> bytes:
        """Retrieve the raw dataset bytes.

        Returns:
            The full payload.

        Raises:
            DataUnavailableError: If the backend cannot be reached or
                the object does not exist.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._location!r})"


# ---------------------------------------------------------------------------
# Source exceptions
# ---------------------------------------------------------------------------


class DataUnavailableError(TransientError):
    """The footprint dataset could not be retrieved.

    Attributes:
        location: The source location that failed.
    """

    default_stage = "load_features"
    default_code = "DATA_UNAVAILABLE"

    def __init__(self, location: str, message: str, *, code: str = "") -> None:
        self.location = location
        super().__init__(message, code=code)

    def __str__(self) -> str:
        return f"[{self.location}] {self.message}"
