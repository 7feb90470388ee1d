"""Geocoding adapters - Implementations of GeocodeSearchPort.

Available implementations:
- GeopyGeocodeSearchAdapter: Nominatim or Google search through geopy
"""

from .geopy_adapter import GeopyGeocodeSearchAdapter

__all__ = ["GeopyGeocodeSearchAdapter"]
