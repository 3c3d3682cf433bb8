"""geocode.maps.co adapter.

Concrete ``GeocodingProvider`` for the maps.co forward-geocoding search
API.  The first search hit is used; ``lat`` and ``lon`` arrive as
strings and are parsed to floats.

Configuration:
    The API URL defaults to ``https://geocode.maps.co``.  Override via
    ``GeocoderConfig.api_base_url`` if needed.  The API key is required.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from footprint_matcher.models.geocoding import GeocodingResult
from footprint_matcher.providers.base import (
    AddressNotFoundError,
    GeocodingAuthError,
    GeocodingError,
    GeocodingProvider,
)

if TYPE_CHECKING:
    from footprint_matcher.models.geocoding import GeocoderConfig

logger = logging.getLogger(__name__)

_DEFAULT_API_URL = "https://geocode.maps.co"
_SEARCH_PATH = "/search"


class MapsCoGeocoder(GeocodingProvider):
    """maps.co search adapter using ``httpx``.

    Args:
        config: Provider configuration; ``api_key`` must be set.
        transport: Optional ``httpx`` transport (tests inject a
            ``MockTransport``).
    """

    def __init__(
        self,
        config: GeocoderConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(config)
        self._base_url = (config.api_base_url or _DEFAULT_API_URL).rstrip("/")
        self._transport = transport

    async def geocode(self, address: str) -> GeocodingResult:
        if not self.config.api_key:
            msg = "Geocoding API key is not configured (set GEOCODE_API_KEY)"
            raise GeocodingAuthError(self.name, msg)
        if not address.strip():
            msg = "Address must be non-empty"
            raise AddressNotFoundError(self.name, msg)

        params = {**self.config.extra_params, "q": address, "api_key": self.config.api_key}
        try:
            async with httpx.AsyncClient(
                timeout=self.config.timeout_s,
                transport=self._transport,
            ) as client:
                response = await client.get(f"{self._base_url}{_SEARCH_PATH}", params=params)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            msg = f"Geocoding API error: {status} {exc.response.reason_phrase}"
            if status in (401, 403):
                raise GeocodingAuthError(self.name, msg) from exc
            raise GeocodingError(self.name, msg, retryable=status == 429 or status >= 500) from exc
        except httpx.HTTPError as exc:
            msg = f"Geocoding request failed: {exc}"
            raise GeocodingError(self.name, msg, retryable=True) from exc
        except ValueError as exc:
            msg = f"Geocoding response is not valid JSON: {exc}"
            raise GeocodingError(self.name, msg) from exc

        result = _first_result(self.name, address, data)
        logger.info(
            "Address geocoded | provider=%s | address=%s | lat=%.6f | lng=%.6f",
            self.name,
            address,
            result.lat,
            result.lng,
        )
        return result


def _first_result(provider: str, address: str, data: Any) -> GeocodingResult:
    """Convert the first search hit to a ``GeocodingResult``.

    Raises:
        AddressNotFoundError: If there are no hits.
        GeocodingError: If the first hit lacks numeric ``lat``/``lon``.
    """
    if not isinstance(data, list) or not data:
        msg = f"No results found for address {address!r}"
        raise AddressNotFoundError(provider, msg)

    hit = data[0]
    try:
        lat = float(hit["lat"])
        lng = float(hit["lon"])
    except (KeyError, TypeError, ValueError) as exc:
        msg = f"Geocoding result has no usable lat/lon: {hit!r}"
        raise GeocodingError(provider, msg) from exc

    return GeocodingResult(address=address, lat=lat, lng=lng, raw_response=data)
