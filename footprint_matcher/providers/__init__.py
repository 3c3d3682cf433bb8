"""Geocoding provider adapters.

Implements the provider-agnostic adapter pattern:
- GeocodingProvider: Abstract base class defining the interface
- MapsCoGeocoder: geocode.maps.co search API

The active provider is selected via configuration.
"""

from footprint_matcher.providers.base import (
    AddressNotFoundError,
    GeocodingAuthError,
    GeocodingError,
    GeocodingProvider,
)
from footprint_matcher.providers.factory import (
    MAPS_CO,
    get_geocoder,
    list_geocoders,
    register_geocoder,
)

__all__ = [
    "MAPS_CO",
    "AddressNotFoundError",
    "GeocodingAuthError",
    "GeocodingError",
    "GeocodingProvider",
    "get_geocoder",
    "list_geocoders",
    "register_geocoder",
]
