"""Semantic fallback matcher - second stage of the resolution chain."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from ...domain.models import DestinationMatch, Gazetteer, MatchMethod, MatchOutcome
from ...ports.semantic import SemanticMatcherPort


@dataclass
class SemanticFallbackMatcher:
    """Asks the semantic matcher and enforces the semantic threshold.

    Implements MatcherPort. Collaborator errors become FAILED outcomes.

    Attributes:
        matcher: The semantic matcher collaborator
        threshold: Minimum reported confidence for acceptance
    """

    matcher: SemanticMatcherPort
    threshold: float = 0.85

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def method(self) -> MatchMethod:
        return MatchMethod.SEMANTIC_FALLBACK

    def attempt_match(self, transcript: str, gazetteer: Gazetteer) -> MatchOutcome:
        """Resolve through the semantic matcher.

        The matched variant of an accepted result is the place's
        canonical name.
        """
        try:
            result = self.matcher.match(transcript, gazetteer)
        except Exception as e:
            self._logger.warning(
                "Semantic matcher failed, skipping stage",
                extra={"matcher": type(self.matcher).__name__, "error": str(e)},
            )
            return MatchOutcome.failed(self.method, str(e))

        confidence = float(result.confidence)
        if math.isnan(confidence):
            confidence = 0.0
        confidence = min(1.0, max(0.0, confidence))

        if result.place_id is None:
            self._logger.info("Semantic matcher found no destination")
            return MatchOutcome.no_match(self.method, best_score=confidence)

        place = gazetteer.get(result.place_id)
        if place is None:
            self._logger.warning(
                "Semantic matcher returned an unknown place id",
                extra={"place_id": result.place_id},
            )
            return MatchOutcome.no_match(self.method)

        if confidence < self.threshold:
            self._logger.info(
                "Semantic match below threshold",
                extra={
                    "place": place.canonical_name,
                    "confidence": confidence,
                    "threshold": self.threshold,
                },
            )
            return MatchOutcome.no_match(self.method, best_score=confidence)

        self._logger.info(
            "Semantic match found",
            extra={
                "place": place.canonical_name,
                "confidence": confidence,
                "reasoning": result.reasoning,
            },
        )
        return MatchOutcome.matched(
            DestinationMatch(
                place=place,
                matched_variant=place.canonical_name,
                confidence=confidence,
                method=self.method,
            )
        )
