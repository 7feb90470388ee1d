"""Geocoding port - Abstraction for open-world place search.

This protocol defines the contract for geocoding services, allowing
different implementations (Nominatim, Google Maps, etc.) to be used.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from ..domain.models import AreaAnchor, GeocodeHit


class GeocodeSearchPort(Protocol):
    """Port for geocode search services.

    Implementation: adapters/geocoding/geopy_adapter.py
    """

    def search(self, query: str, anchor: AreaAnchor) -> Optional[GeocodeHit]:
        """Search a point of interest near the anchor city.

        Args:
            query: Free text to search for (the raw transcript).
            anchor: The city the search is restricted to.

        Returns:
            The best single hit, or None if nothing was found.

        Raises:
            GeocodingError: If the geocoding service failed.
        """
        ...
