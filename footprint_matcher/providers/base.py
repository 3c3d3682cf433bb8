"""GeocodingProvider abstract base class.

Defines the contract every geocoding adapter implements.  The lookup
orchestrator interacts exclusively with this interface: it turns an
address into a ``GeocodingResult`` and never knows which service is
behind it.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from footprint_matcher.core.exceptions import MatcherError

if TYPE_CHECKING:
    from footprint_matcher.models.geocoding import GeocoderConfig, GeocodingResult


class GeocodingProvider(abc.ABC):
    """Abstract base class for geocoding adapters.

    Example usage::

        geocoder = get_geocoder("maps_co", GeocoderConfig(name="maps_co", api_key=key))
        result = await geocoder.geocode("632 W 6th Ave, Anchorage, AK")
    """

    def __init__(self, config: GeocoderConfig) -> None:
        self._config = config

    @property
    def name(self) -> str:
        """Return the provider name from configuration."""
        return self._config.name

    @property
    def config(self) -> GeocoderConfig:
        """Return the provider configuration (read-only)."""
        return self._config

    @abc.abstractmethod
    async def geocode(self, address: str) -> GeocodingResult:
        """Resolve *address* to a coordinate.

        Returns:
            The best match for the address.

        Raises:
            GeocodingError: On transient or permanent API errors.
            AddressNotFoundError: If the service returns no match.
        """


# ---------------------------------------------------------------------------
# Geocoding exceptions
# ---------------------------------------------------------------------------


class GeocodingError(MatcherError):
    """Base exception for geocoding adapter errors.

    Attributes:
        provider: Name of the provider that raised the error.
        message: Human-readable error description.
        retryable: Whether the caller should retry the operation.
    """

    default_stage = "geocoding"
    default_code = "GEOCODING_FAILED"

    def __init__(
        self,
        provider: str,
        message: str,
        *,
        retryable: bool = False,
    ) -> None:
        self.provider = provider
        super().__init__(
            message,
            retryable=retryable,
            code=self.default_code,
            stage=self.default_stage,
        )

    def __str__(self) -> str:
        return f"[{self.provider}] {self.message}"


class GeocodingAuthError(GeocodingError):
    """Missing or rejected API key."""

    default_code = "GEOCODING_AUTH_FAILED"

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(provider, message, retryable=False)


class AddressNotFoundError(GeocodingError):
    """The service returned no result for the address."""

    default_code = "ADDRESS_NOT_FOUND"

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(provider, message, retryable=False)
