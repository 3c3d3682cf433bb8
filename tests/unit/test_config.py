"""Tests for matcher configuration.

Covers:
- Default values (Alaska box, 50 m radius, maps.co geocoder)
- Loading from environment variables
- Type coercion (string env vars -> numeric fields)
- Fail-fast range validation
"""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from footprint_matcher.core.config import ConfigValidationError, MatcherConfig
from footprint_matcher.core.exceptions import PermanentError
from footprint_matcher.matching.region import ALASKA_BOUNDS


class TestMatcherConfigDefaults:
    """Verify default configuration values."""

    def test_default_source(self) -> None:
        cfg = MatcherConfig()
        assert cfg.footprint_source == "building-footprints/Alaska.geojson"

    def test_default_radius(self) -> None:
        assert MatcherConfig().search_radius_m == 50.0

    def test_default_timeout(self) -> None:
        assert MatcherConfig().load_timeout_s == 30.0

    def test_default_region_is_alaska(self) -> None:
        assert MatcherConfig().region_bounds == ALASKA_BOUNDS

    def test_default_geocoder(self) -> None:
        cfg = MatcherConfig()
        assert cfg.geocoder_provider == "maps_co"
        assert cfg.geocode_api_key == ""


class TestMatcherConfigFromEnv:
    """Verify loading from environment variables."""

    def test_loads_from_environment(self) -> None:
        """All env vars are read and coerced to correct types."""
        env = {
            "FOOTPRINT_SOURCE": "azblob://building-footprints/Alaska.geojson",
            "SEARCH_RADIUS_M": "75",
            "LOAD_TIMEOUT_S": "12.5",
            "REGION_NAME": "Hawaii",
            "REGION_WEST": "-161",
            "REGION_EAST": "-154",
            "REGION_SOUTH": "18.5",
            "REGION_NORTH": "22.5",
            "GEOCODER_PROVIDER": "custom",
            "GEOCODE_API_KEY": "secret",
        }
        with patch.dict(os.environ, env, clear=True):
            cfg = MatcherConfig.from_env()

        assert cfg.footprint_source == "azblob://building-footprints/Alaska.geojson"
        assert cfg.search_radius_m == 75.0
        assert cfg.load_timeout_s == 12.5
        assert cfg.region_bounds.name == "Hawaii"
        assert (cfg.region_west, cfg.region_east) == (-161.0, -154.0)
        assert (cfg.region_south, cfg.region_north) == (18.5, 22.5)
        assert cfg.geocoder_provider == "custom"
        assert cfg.geocode_api_key == "secret"

    def test_defaults_when_env_missing(self) -> None:
        """Missing environment variables fall back to defaults."""
        with patch.dict(os.environ, {}, clear=True):
            cfg = MatcherConfig.from_env()
        assert cfg == MatcherConfig()

    def test_non_numeric_radius(self) -> None:
        with (
            patch.dict(os.environ, {"SEARCH_RADIUS_M": "abc"}, clear=True),
            pytest.raises(ValueError, match="abc"),
        ):
            MatcherConfig.from_env()

    def test_frozen_immutability(self) -> None:
        cfg = MatcherConfig()
        with pytest.raises(AttributeError):
            cfg.search_radius_m = 100.0  # type: ignore[misc]


class TestMatcherConfigValidation:
    """Fail-fast range validation in from_env."""

    @pytest.mark.parametrize(
        ("env", "key"),
        [
            ({"FOOTPRINT_SOURCE": ""}, "FOOTPRINT_SOURCE"),
            ({"SEARCH_RADIUS_M": "0"}, "SEARCH_RADIUS_M"),
            ({"SEARCH_RADIUS_M": "-1"}, "SEARCH_RADIUS_M"),
            ({"LOAD_TIMEOUT_S": "0"}, "LOAD_TIMEOUT_S"),
            ({"REGION_WEST": "-181"}, "REGION_WEST"),
            ({"REGION_EAST": "181"}, "REGION_EAST"),
            ({"REGION_SOUTH": "-91"}, "REGION_SOUTH"),
            ({"REGION_NORTH": "90.5"}, "REGION_NORTH"),
            ({"REGION_WEST": "-120"}, "REGION_WEST"),
            ({"REGION_SOUTH": "72"}, "REGION_SOUTH"),
            ({"GEOCODER_PROVIDER": ""}, "GEOCODER_PROVIDER"),
        ],
    )
    def test_rejected(self, env: dict[str, str], key: str) -> None:
        with patch.dict(os.environ, env, clear=True), pytest.raises(ConfigValidationError) as ctx:
            MatcherConfig.from_env()
        assert ctx.value.key == key
        assert key in str(ctx.value)

    def test_radius_message(self) -> None:
        with (
            patch.dict(os.environ, {"SEARCH_RADIUS_M": "-1"}, clear=True),
            pytest.raises(ConfigValidationError, match="must be > 0"),
        ):
            MatcherConfig.from_env()

    def test_longitude_range_message(self) -> None:
        with (
            patch.dict(os.environ, {"REGION_EAST": "200"}, clear=True),
            pytest.raises(ConfigValidationError, match="-180.0 and 180.0"),
        ):
            MatcherConfig.from_env()

    def test_inverted_box_message(self) -> None:
        with (
            patch.dict(os.environ, {"REGION_WEST": "-100"}, clear=True),
            pytest.raises(ConfigValidationError, match="less than REGION_EAST"),
        ):
            MatcherConfig.from_env()

    def test_boundary_values_accepted(self) -> None:
        env = {
            "REGION_WEST": "-180",
            "REGION_EAST": "180",
            "REGION_SOUTH": "-90",
            "REGION_NORTH": "90",
        }
        with patch.dict(os.environ, env, clear=True):
            cfg = MatcherConfig.from_env()
        assert cfg.region_bounds.contains(0.0, 0.0)

    def test_error_is_permanent(self) -> None:
        err = ConfigValidationError("SEARCH_RADIUS_M", -1.0, "must be > 0 (metres)")
        assert isinstance(err, PermanentError)
        assert err.retryable is False
        assert err.stage == "config"
        assert err.code == "CONFIG_VALIDATION_FAILED"
        assert err.value == -1.0
