"""Geocoding fallback matcher - last stage of the resolution chain.

Searches an open-world index near the city anchor. Its hits are not
scored: they get a fixed, discounted confidence and a place outside the
gazetteer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ...domain.models import (
    AreaAnchor,
    DestinationMatch,
    Gazetteer,
    MatchMethod,
    MatchOutcome,
    Place,
)
from ...ports.geocoding import GeocodeSearchPort


@dataclass
class GeocodingFallbackMatcher:
    """Turns a geocode hit into an external destination.

    Implements MatcherPort. Collaborator errors become FAILED outcomes.

    Attributes:
        search: The geocode search collaborator
        anchor: City the search is restricted to
        confidence: Fixed confidence given to any hit
    """

    search: GeocodeSearchPort
    anchor: AreaAnchor
    confidence: float = 0.7

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(
                f"Confidence must be between 0 and 1, got {self.confidence}"
            )
        self._logger = logging.getLogger(__name__)

    @property
    def method(self) -> MatchMethod:
        return MatchMethod.GEOCODING_FALLBACK

    def attempt_match(self, transcript: str, gazetteer: Gazetteer) -> MatchOutcome:
        try:
            hit = self.search.search(transcript, self.anchor)
        except Exception as e:
            self._logger.warning(
                "Geocode search failed, skipping stage",
                extra={"search": type(self.search).__name__, "error": str(e)},
            )
            return MatchOutcome.failed(self.method, str(e))

        if hit is None:
            self._logger.info(
                "Geocode search found nothing", extra={"anchor": self.anchor.name}
            )
            return MatchOutcome.no_match(self.method)

        self._logger.info(
            "Geocode match found",
            extra={
                "hit_name": hit.name,
                "lat": hit.location.latitude,
                "lon": hit.location.longitude,
            },
        )
        return MatchOutcome.matched(
            DestinationMatch(
                place=Place.external(hit.name, hit.location),
                matched_variant=hit.name,
                confidence=self.confidence,
                method=self.method,
            )
        )
