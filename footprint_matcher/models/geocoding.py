"""Data models for the geocoding boundary.

- GeocodingResult: the ``(address, lat, lng)`` query triple handed to
  the matcher by a geocoding provider
- GeocoderConfig: provider-specific configuration
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from footprint_matcher.models.geometry import Coordinate


@dataclass(frozen=True, slots=True)
class GeocodingResult:
    """A geocoded address.

    Attributes:
        address: The original address text.
        lat: Latitude in decimal degrees.
        lng: Longitude in decimal degrees.
        raw_response: Provider response kept for debugging.
    """

    address: str
    lat: float
    lng: float
    raw_response: Any = None

    @property
    def coordinate(self) -> Coordinate:
        """The query point.  Raises ``InvalidCoordinateError`` if out of range."""
        return Coordinate(lat=self.lat, lng=self.lng)

    def to_dict(self) -> dict[str, object]:
        """The query triple, without the provider response."""
        return {"address": self.address, "lat": self.lat, "lng": self.lng}

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> GeocodingResult:
        """Deserialise from a dict payload.

        ``lon`` is accepted as an alias of ``lng``.

        Raises:
            KeyError: If latitude or longitude is missing.
            ValueError: If latitude or longitude is not numeric.
        """
        lng = data["lng"] if "lng" in data else data["lon"]
        return cls(
            address=str(data.get("address", "")),
            lat=float(data["lat"]),  # type: ignore[arg-type]
            lng=float(lng),  # type: ignore[arg-type]
        )


@dataclass(frozen=True, slots=True)
class GeocoderConfig:
    """Configuration for a geocoding provider.

    Attributes:
        name: Registered provider name (e.g. ``"maps_co"``).
        api_base_url: Base URL of the provider API; empty selects the
            provider default.
        api_key: API key, sent as a query parameter.
        timeout_s: HTTP timeout in seconds.
        extra_params: Additional query parameters for every request.
    """

    name: str
    api_base_url: str = ""
    api_key: str = ""
    timeout_s: float = 10.0
    extra_params: dict[str, str] = field(default_factory=dict)
