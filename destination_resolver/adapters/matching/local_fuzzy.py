"""Local fuzzy matcher - first stage of the resolution chain.

Compares the normalized transcript against every normalized variant of
every place, using span similarity and containment in both directions,
and accepts the best pairing when it clears the local threshold.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from ...domain.models import (
    DestinationMatch,
    Gazetteer,
    MatchCandidate,
    MatchMethod,
    MatchOutcome,
)
from ...nlp.normalization import (
    DEFAULT_MAX_SPAN_LENGTH,
    TextNormalizer,
    generate_spans,
    tokenize,
)
from ...nlp.similarity import containment, similarity


@dataclass
class LocalFuzzyMatcher:
    """Edit-distance matcher over the closed gazetteer.

    Implements MatcherPort.

    Attributes:
        threshold: Minimum score for acceptance
        max_span_length: Longest candidate span, in tokens
        normalizer: Normalizer shared with the rest of the pipeline
    """

    threshold: float = 0.75
    max_span_length: int = DEFAULT_MAX_SPAN_LENGTH
    normalizer: TextNormalizer = field(default_factory=TextNormalizer)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def method(self) -> MatchMethod:
        return MatchMethod.LOCAL_FUZZY

    def best_candidate(
        self, transcript: str, gazetteer: Gazetteer
    ) -> Optional[MatchCandidate]:
        """Score every (place, variant) pairing and keep the best one.

        Ties keep the earliest pairing in gazetteer order.

        Args:
            transcript: The raw transcript.
            gazetteer: The known places.

        Returns:
            The best candidate, or None if nothing scored above 0.
        """
        normalized = self.normalizer.normalize(transcript)
        spans = generate_spans(tokenize(normalized), self.max_span_length)
        # The whole transcript is a candidate too, whatever its length
        if normalized and normalized not in spans:
            spans.append(normalized)

        best: Optional[MatchCandidate] = None
        best_score = 0.0
        for place in gazetteer:
            for variant in place.variants:
                normalized_variant = self.normalizer.normalize(variant)
                score = self._score_variant(normalized, spans, normalized_variant)
                if score > best_score:
                    best_score = score
                    best = MatchCandidate(place=place, variant=variant, score=score)
        return best

    def _score_variant(
        self, normalized: str, spans: Sequence[str], normalized_variant: str
    ) -> float:
        span_score = max(
            (similarity(span, normalized_variant) for span in spans), default=0.0
        )
        return max(
            span_score,
            containment(normalized, normalized_variant),
            containment(normalized_variant, normalized),
        )

    def attempt_match(self, transcript: str, gazetteer: Gazetteer) -> MatchOutcome:
        """Accept the best local candidate if it clears the threshold."""
        candidate = self.best_candidate(transcript, gazetteer)
        if candidate is None or candidate.score < self.threshold:
            score = candidate.score if candidate else 0.0
            self._logger.info(
                "No confident local match",
                extra={"best_score": round(score, 3), "threshold": self.threshold},
            )
            return MatchOutcome.no_match(self.method, best_score=score)

        self._logger.info(
            "Local fuzzy match found",
            extra={
                "place": candidate.place.canonical_name,
                "variant": candidate.variant,
                "score": round(candidate.score, 3),
            },
        )
        return MatchOutcome.matched(
            DestinationMatch(
                place=candidate.place,
                matched_variant=candidate.variant,
                confidence=min(1.0, candidate.score),
                method=self.method,
            )
        )
