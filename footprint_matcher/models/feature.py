"""Data model for a building footprint feature.

A Feature is one record of the footprint FeatureCollection: the raw
GeoJSON geometry mapping (not validated at load time) and the opaque
properties mapping, which the matcher passes through untouched.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Feature:
    """A single footprint record from the dataset.

    Attributes:
        index: Zero-based position of the feature in its collection.
        geometry: Raw GeoJSON geometry mapping, or ``None`` when the
            record carries none.  Parsed lazily by the search components.
        properties: Free-form attribute mapping, never interpreted.
    """

    index: int
    geometry: dict[str, Any] | None = None
    properties: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_geojson(cls, raw: object, index: int) -> Feature:
        """Build a Feature from one entry of a GeoJSON ``features`` array.

        Entries that are not objects, or whose geometry/properties are
        not objects, keep an empty value for that part instead of
        failing the load.
        """
        if not isinstance(raw, dict):
            return cls(index=index)
        geometry = raw.get("geometry")
        properties = raw.get("properties")
        return cls(
            index=index,
            geometry=geometry if isinstance(geometry, dict) else None,
            properties=dict(properties) if isinstance(properties, dict) else {},
        )

    @property
    def geometry_type(self) -> str:
        """The geometry ``type`` tag, or ``""`` when absent."""
        if self.geometry is None:
            return ""
        return str(self.geometry.get("type", ""))


@dataclass(frozen=True, slots=True)
class FeatureCollection:
    """Ordered, read-only sequence of footprint features.

    Attributes:
        features: Features in dataset order.
        source: Label of the source the collection was loaded from.
    """

    features: tuple[Feature, ...] = ()
    source: str = ""

    @classmethod
    def from_features(
        cls, features: list[Feature] | tuple[Feature, ...], source: str = ""
    ) -> FeatureCollection:
        return cls(features=tuple(features), source=source)

    def __iter__(self) -> Iterator[Feature]:
        return iter(self.features)

    def __len__(self) -> int:
        return len(self.features)

    def __getitem__(self, index: int) -> Feature:
        return self.features[index]
