"""Matching adapters - Implementations of MatcherPort.

Available implementations, in resolution order:
- LocalFuzzyMatcher: edit-distance matching over the gazetteer
- SemanticFallbackMatcher: semantic matcher with its own threshold
- GeocodingFallbackMatcher: open-world geocode search near the city
"""

from .geocoding_fallback import GeocodingFallbackMatcher
from .local_fuzzy import LocalFuzzyMatcher
from .semantic_fallback import SemanticFallbackMatcher

__all__ = [
    "LocalFuzzyMatcher",
    "SemanticFallbackMatcher",
    "GeocodingFallbackMatcher",
]
