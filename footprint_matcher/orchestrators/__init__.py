"""Lookup orchestration.

Coordinates the matching components for one geocoded query:
region guard → load → containment → (miss) proximity → measurement.
"""

from footprint_matcher.orchestrators.footprint_lookup import FootprintMatcher

__all__ = ["FootprintMatcher"]
