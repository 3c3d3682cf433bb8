"""Matcher configuration loaded from environment variables.

All configuration values default to the Alaska deployment (Alaska
bounding box, 50 m proximity radius).

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any numeric
    value is out of its valid range.  This catches bad configuration
    at startup instead of on the first lookup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from footprint_matcher.core.constants import (
    DEFAULT_FOOTPRINT_SOURCE,
    DEFAULT_LOAD_TIMEOUT_S,
    DEFAULT_REGION_EAST,
    DEFAULT_REGION_NAME,
    DEFAULT_REGION_NORTH,
    DEFAULT_REGION_SOUTH,
    DEFAULT_REGION_WEST,
    DEFAULT_SEARCH_RADIUS_M,
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
)
from footprint_matcher.core.exceptions import PermanentError
from footprint_matcher.matching.region import RegionBounds


class ConfigValidationError(PermanentError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class MatcherConfig:
    """Immutable matcher configuration.

    Loaded once at startup and passed to ``FootprintMatcher``.

    Attributes:
        footprint_source: Path, ``http(s)://`` URL or ``azblob://`` URI of
            the footprint FeatureCollection.
        search_radius_m: Proximity fallback radius in metres.
        load_timeout_s: Timeout for fetching the dataset, in seconds.
        region_name: Display name of the coverage region.
        region_west: Western longitude of the coverage box.
        region_east: Eastern longitude of the coverage box.
        region_south: Southern latitude of the coverage box.
        region_north: Northern latitude of the coverage box.
        geocoder_provider: Registered geocoding provider name.
        geocode_api_key: API key passed to the geocoding provider.
    """

    footprint_source: str = DEFAULT_FOOTPRINT_SOURCE
    search_radius_m: float = DEFAULT_SEARCH_RADIUS_M
    load_timeout_s: float = DEFAULT_LOAD_TIMEOUT_S
    region_name: str = DEFAULT_REGION_NAME
    region_west: float = DEFAULT_REGION_WEST
    region_east: float = DEFAULT_REGION_EAST
    region_south: float = DEFAULT_REGION_SOUTH
    region_north: float = DEFAULT_REGION_NORTH
    geocoder_provider: str = "maps_co"
    geocode_api_key: str = ""

    @property
    def region_bounds(self) -> RegionBounds:
        """Return the coverage box as a ``RegionBounds``."""
        return RegionBounds(
            name=self.region_name,
            west=self.region_west,
            east=self.region_east,
            south=self.region_south,
            north=self.region_north,
        )

    @classmethod
    def from_env(cls) -> MatcherConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a numeric value is out of range
                or a required string value is empty.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``SEARCH_RADIUS_M=abc``).
        """
        config = cls(
            footprint_source=os.getenv("FOOTPRINT_SOURCE", DEFAULT_FOOTPRINT_SOURCE),
            search_radius_m=float(os.getenv("SEARCH_RADIUS_M", str(DEFAULT_SEARCH_RADIUS_M))),
            load_timeout_s=float(os.getenv("LOAD_TIMEOUT_S", str(DEFAULT_LOAD_TIMEOUT_S))),
            region_name=os.getenv("REGION_NAME", DEFAULT_REGION_NAME),
            region_west=float(os.getenv("REGION_WEST", str(DEFAULT_REGION_WEST))),
            region_east=float(os.getenv("REGION_EAST", str(DEFAULT_REGION_EAST))),
            region_south=float(os.getenv("REGION_SOUTH", str(DEFAULT_REGION_SOUTH))),
            region_north=float(os.getenv("REGION_NORTH", str(DEFAULT_REGION_NORTH))),
            geocoder_provider=os.getenv("GEOCODER_PROVIDER", "maps_co"),
            geocode_api_key=os.getenv("GEOCODE_API_KEY", ""),
        )
        _validate(config)
        return config


def _validate(config: MatcherConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if not config.footprint_source:
        raise ConfigValidationError(
            "FOOTPRINT_SOURCE",
            config.footprint_source,
            "must not be empty",
        )

    if config.search_radius_m <= 0:
        raise ConfigValidationError(
            "SEARCH_RADIUS_M",
            config.search_radius_m,
            "must be > 0 (metres)",
        )

    if config.load_timeout_s <= 0:
        raise ConfigValidationError(
            "LOAD_TIMEOUT_S",
            config.load_timeout_s,
            "must be > 0 (seconds)",
        )

    for key, value in (("REGION_WEST", config.region_west), ("REGION_EAST", config.region_east)):
        if not MIN_LONGITUDE <= value <= MAX_LONGITUDE:
            raise ConfigValidationError(
                key,
                value,
                f"must be between {MIN_LONGITUDE} and {MAX_LONGITUDE} (degrees)",
            )

    latitudes = (("REGION_SOUTH", config.region_south), ("REGION_NORTH", config.region_north))
    for key, value in latitudes:
        if not MIN_LATITUDE <= value <= MAX_LATITUDE:
            raise ConfigValidationError(
                key,
                value,
                f"must be between {MIN_LATITUDE} and {MAX_LATITUDE} (degrees)",
            )

    if config.region_west >= config.region_east:
        raise ConfigValidationError(
            "REGION_WEST",
            config.region_west,
            f"must be less than REGION_EAST ({config.region_east})",
        )

    if config.region_south >= config.region_north:
        raise ConfigValidationError(
            "REGION_SOUTH",
            config.region_south,
            f"must be less than REGION_NORTH ({config.region_north})",
        )

    if not config.geocoder_provider:
        raise ConfigValidationError(
            "GEOCODER_PROVIDER",
            config.geocoder_provider,
            "must not be empty",
        )
