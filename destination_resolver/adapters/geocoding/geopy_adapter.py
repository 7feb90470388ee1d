"""Geopy geocode search adapter.

Searches a point of interest near the city anchor with:
- Nominatim (default) or Google (when an API key is configured)
- A search box around the anchor, and a distance check on the hit
- Rate limiting through geopy's RateLimiter
- Caching of hits and misses via CachePort
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, List, Optional

from geopy.distance import geodesic
from geopy.exc import GeocoderQuotaExceeded, GeocoderRateLimited, GeopyError
from geopy.extra.rate_limiter import RateLimiter
from geopy.geocoders import GoogleV3, Nominatim
from geopy.point import Point

from ...config import GeocodingConfig, get_config
from ...domain.errors import ConfigurationError, GeocodingError
from ...domain.models import AreaAnchor, GeocodeHit, GeoLocation
from ...ports.cache import CachePort
from ..cache.memory_cache import InMemoryCache


def search_box(anchor: AreaAnchor) -> List[Point]:
    """Return the [south-west, north-east] corners enclosing the anchor radius."""
    center = Point(anchor.location.latitude, anchor.location.longitude)
    reach = geodesic(kilometers=anchor.radius_km * math.sqrt(2))
    return [
        reach.destination(center, bearing=225),
        reach.destination(center, bearing=45),
    ]


def _hit_name(location: Any) -> str:
    raw = location.raw or {}
    name = raw.get("name")
    if name:
        return str(name)
    address = str(location.address or "")
    return address.split(",")[0].strip()


@dataclass
class GeopyGeocodeSearchAdapter:
    """Geocode search adapter built on geopy.

    Implements GeocodeSearchPort.

    Attributes:
        config: Geocoding configuration
        cache: Cache for search results (misses included)
    """

    config: GeocodingConfig = field(default_factory=lambda: get_config().geocoding)
    cache: CachePort[Optional[GeocodeHit]] = field(
        default_factory=lambda: InMemoryCache(name="geocode")
    )

    _geocode_fn: Optional[Any] = field(default=None, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _get_geocoder(self) -> Any:
        """Get or initialize the rate-limited geocode function."""
        if self._geocode_fn is not None:
            return self._geocode_fn

        if self.config.provider == "google":
            if not self.config.api_key:
                raise ConfigurationError(
                    "Google geocoding requires an API key",
                    setting_name="NDR_GEO_API_KEY",
                )
            geolocator: Any = GoogleV3(
                api_key=self.config.api_key, timeout=self.config.timeout_seconds
            )
        else:
            geolocator = Nominatim(
                user_agent=self.config.user_agent,
                timeout=self.config.timeout_seconds,
            )

        self._logger.debug(
            "Initializing geocoder",
            extra={"provider": self.config.provider},
        )

        # Errors must surface so the fallback stage can report them as failures
        self._geocode_fn = RateLimiter(
            geolocator.geocode,
            min_delay_seconds=self.config.rate_limit_delay,
            max_retries=self.config.max_retries,
            error_wait_seconds=self.config.error_wait_seconds,
            swallow_exceptions=False,
        )
        return self._geocode_fn

    def _query_kwargs(self, anchor: AreaAnchor) -> dict[str, Any]:
        box = search_box(anchor)
        if self.config.provider == "google":
            kwargs: dict[str, Any] = {"bounds": box}
            if anchor.country_code:
                kwargs["region"] = anchor.country_code
            return kwargs

        kwargs = {"viewbox": box, "bounded": True}
        if anchor.country_code:
            kwargs["country_codes"] = anchor.country_code
        return kwargs

    def search(self, query: str, anchor: AreaAnchor) -> Optional[GeocodeHit]:
        """Search a point of interest near the anchor.

        Args:
            query: The raw transcript.
            anchor: The city the search is restricted to.

        Returns:
            The best hit within the anchor radius, or None.

        Raises:
            GeocodingError: If the geocoding service failed.
        """
        if not query or not query.strip():
            return None

        full_query = f"{query.strip()} {anchor.name}"
        cache_key = f"{self.config.provider}:{full_query.lower()}"
        if self.cache.contains(cache_key):
            self._logger.debug("Geocode cache hit", extra={"query": full_query})
            return self.cache.get(cache_key)

        try:
            geocode_fn = self._get_geocoder()
            location = geocode_fn(
                full_query, exactly_one=True, **self._query_kwargs(anchor)
            )
        except (GeocoderRateLimited, GeocoderQuotaExceeded) as e:
            raise GeocodingError(
                "Geocoding rate limited",
                query=full_query,
                is_rate_limited=True,
                cause=e,
            )
        except GeopyError as e:
            raise GeocodingError("Geocoding failed", query=full_query, cause=e)

        hit = self._to_hit(location, anchor)
        self.cache.set(cache_key, hit)
        return hit

    def _to_hit(self, location: Any, anchor: AreaAnchor) -> Optional[GeocodeHit]:
        if location is None:
            self._logger.debug("Geocode returned no result")
            return None

        point = GeoLocation(float(location.latitude), float(location.longitude))
        distance_km = geodesic(
            (anchor.location.latitude, anchor.location.longitude),
            (point.latitude, point.longitude),
        ).km
        if distance_km > anchor.radius_km:
            self._logger.info(
                "Geocode result outside anchor radius",
                extra={"distance_km": round(distance_km, 1), "anchor": anchor.name},
            )
            return None

        return GeocodeHit(
            name=_hit_name(location),
            location=point,
            address=str(location.address or ""),
        )
