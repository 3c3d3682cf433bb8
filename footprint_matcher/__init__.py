"""Building Footprint Matcher.

Locates the building footprint (Polygon or MultiPolygon) that contains,
or lies nearest to, a geocoded coordinate, and measures its geodesic
perimeter and area in metres and feet.
"""

__version__ = "0.1.0"
