"""Shared pytest fixtures for the Footprint Matcher test suite."""

from pathlib import Path

import pytest

from footprint_matcher.matching.loader import parse_feature_collection
from footprint_matcher.models.feature import FeatureCollection

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


@pytest.fixture()
def footprints_path(data_dir: Path) -> Path:
    """Path to a five-feature dataset.

    Index 0: the reference square at (61.0, -150.0)
    Index 1: a courtyard polygon with a hole (Anchorage)
    Index 2: a two-part MultiPolygon (Anchorage)
    Index 3: a Polygon whose ring has only two points
    Index 4: a Point feature
    """
    return data_dir / "footprints_small.geojson"


@pytest.fixture()
def empty_collection_path(data_dir: Path) -> Path:
    """Path to a FeatureCollection with an empty ``features`` array."""
    return data_dir / "empty_collection.geojson"


@pytest.fixture()
def footprints(footprints_path: Path) -> FeatureCollection:
    """The five-feature dataset, decoded."""
    return parse_feature_collection(footprints_path.read_bytes(), source=str(footprints_path))
