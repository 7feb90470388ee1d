"""Matching port - One stage of the destination resolution chain.

Each stage wraps its own acceptance rule and reports a MatchOutcome;
the resolver walks an ordered list of stages and keeps the first match.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import Gazetteer, MatchMethod, MatchOutcome


class MatcherPort(Protocol):
    """Port for a destination matching strategy.

    Implementations:
    - adapters/matching/local_fuzzy.py (LocalFuzzyMatcher)
    - adapters/matching/semantic_fallback.py (SemanticFallbackMatcher)
    - adapters/matching/geocoding_fallback.py (GeocodingFallbackMatcher)
    """

    @property
    def method(self) -> MatchMethod:
        """Return the method tag this stage stamps on its matches."""
        ...

    def attempt_match(self, transcript: str, gazetteer: Gazetteer) -> MatchOutcome:
        """Try to resolve the raw transcript against the gazetteer.

        Args:
            transcript: The raw (non-normalized) transcript.
            gazetteer: The known places.

        Returns:
            A MATCHED, NO_MATCH or FAILED outcome. Implementations do not
            raise for collaborator failures.
        """
        ...
