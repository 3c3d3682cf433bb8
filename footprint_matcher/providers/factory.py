"""Geocoder factory: selects the active geocoding provider by name.

The factory maintains a registry of known adapters.  New adapters are
registered with ``register_geocoder``.

Usage::

    from footprint_matcher.providers.factory import get_geocoder

    geocoder = get_geocoder("maps_co", GeocoderConfig(name="maps_co", api_key=key))

The provider name is read from the ``GEOCODER_PROVIDER`` environment
variable via ``MatcherConfig.geocoder_provider``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from footprint_matcher.models.geocoding import GeocoderConfig
from footprint_matcher.providers.base import GeocodingError, GeocodingProvider

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

MAPS_CO = "maps_co"

# Each entry maps a provider name to a callable returning the adapter
# class, so adapter modules load only when selected.
_ADAPTER_REGISTRY: dict[str, Callable[[], type[GeocodingProvider]]] = {}


def _register_builtin_adapters() -> None:
    """Register the built-in geocoding adapters."""

    def _maps_co() -> type[GeocodingProvider]:
        from footprint_matcher.providers.maps_co import MapsCoGeocoder

        return MapsCoGeocoder

    _ADAPTER_REGISTRY[MAPS_CO] = _maps_co


def _ensure_registry() -> None:
    """Initialise the adapter registry once (idempotent)."""
    if not _ADAPTER_REGISTRY:
        _register_builtin_adapters()


def register_geocoder(
    name: str,
    loader: Callable[[], type[GeocodingProvider]],
) -> None:
    """Register a custom geocoding adapter.

    Args:
        name: Provider name (e.g. ``"my_geocoder"``).
        loader: A zero-argument callable that returns the adapter class.

    Raises:
        ValueError: If the name is empty.
    """
    if not name:
        msg = "Geocoder name must be non-empty"
        raise ValueError(msg)
    _ensure_registry()
    _ADAPTER_REGISTRY[name] = loader
    logger.debug("Registered geocoding adapter: %s", name)


def get_geocoder(
    name: str,
    config: GeocoderConfig | None = None,
) -> GeocodingProvider:
    """Create and return a geocoding provider instance.

    Args:
        name: Provider identifier (e.g. ``"maps_co"``).
        config: Optional ``GeocoderConfig``.  If ``None``, a default
            config with just the provider name is used.

    Raises:
        GeocodingError: If the named provider is not registered or the
            config names a different provider.
    """
    _ensure_registry()

    loader = _ADAPTER_REGISTRY.get(name)
    if loader is None:
        available = ", ".join(sorted(_ADAPTER_REGISTRY))
        msg = f"Unknown geocoding provider: {name!r}. Available: {available}"
        raise GeocodingError(provider=name, message=msg)

    if config is None:
        config = GeocoderConfig(name=name)
    elif config.name != name:
        msg = f"GeocoderConfig.name {config.name!r} does not match requested provider {name!r}"
        raise GeocodingError(provider=name, message=msg)

    adapter_cls = loader()
    logger.info("Creating geocoding provider: %s", name)
    return adapter_cls(config)


def list_geocoders() -> list[str]:
    """Return the names of all registered geocoding adapters."""
    _ensure_registry()
    return sorted(_ADAPTER_REGISTRY)
