"""Footprint matching components.

Each module performs one step of a lookup:
- region: Region guard (advisory bounding-box check)
- loader: Fetch and decode the footprint FeatureCollection
- geometry: Raw geometry → Polygon/MultiPolygon, per-feature faults
- containment: First feature containing the query point
- proximity: Distance-ranked fallback within a radius
- measurement: Geodesic perimeter and area, unit conversions
- diagnostics: Data-shape logging for loaded datasets
"""
