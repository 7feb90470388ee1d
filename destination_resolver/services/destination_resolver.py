"""Destination resolver service - Walks the matching chain.

The chain is an ordered list of matching strategies. Each strategy
applies its own acceptance rule; the first MATCHED outcome wins and
later strategies are never called.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..domain.models import DestinationMatch, Gazetteer, MatchOutcome
from ..ports.matching import MatcherPort


@dataclass
class DestinationResolverService:
    """Resolves a raw transcript to a destination.

    Attributes:
        matchers: Matching strategies, tried in order
    """

    matchers: Sequence[MatcherPort]

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def resolve(
        self, transcript: str, gazetteer: Gazetteer
    ) -> Optional[DestinationMatch]:
        """Resolve a transcript against the gazetteer.

        Args:
            transcript: The raw transcript.
            gazetteer: The known places.

        Returns:
            The first accepted match, or None. Never raises.
        """
        match, _ = self.resolve_with_trace(transcript, gazetteer)
        return match

    def resolve_with_trace(
        self, transcript: str, gazetteer: Gazetteer
    ) -> Tuple[Optional[DestinationMatch], List[MatchOutcome]]:
        """Resolve a transcript and report every stage that ran.

        Empty transcripts and empty gazetteers short-circuit to None
        without calling any strategy.

        Returns:
            The accepted match (or None) and the ordered stage outcomes.
        """
        outcomes: List[MatchOutcome] = []
        if not transcript or not transcript.strip() or len(gazetteer) == 0:
            self._logger.info(
                "Nothing to resolve",
                extra={
                    "transcript_length": len(transcript or ""),
                    "places": len(gazetteer),
                },
            )
            return None, outcomes

        for matcher in self.matchers:
            try:
                outcome = matcher.attempt_match(transcript, gazetteer)
            except Exception as e:
                self._logger.warning(
                    "Matching stage raised, treating as failed",
                    extra={"stage": matcher.method.value, "error": str(e)},
                )
                outcome = MatchOutcome.failed(matcher.method, str(e))
            outcomes.append(outcome)

            if outcome.is_match:
                match = outcome.match
                self._logger.info(
                    "Destination resolved",
                    extra={
                        "place": match.place.canonical_name,
                        "method": match.method.value,
                        "confidence": match.confidence,
                    },
                )
                return match, outcomes

        self._logger.info(
            "No destination resolved",
            extra={
                "stages": [o.stage.value for o in outcomes],
                "statuses": [o.status.name for o in outcomes],
            },
        )
        return None, outcomes
