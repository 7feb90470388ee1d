"""Semantic matcher port - Abstraction for the LLM destination picker."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import Gazetteer, SemanticMatchResult


class SemanticMatcherPort(Protocol):
    """Port for semantic matchers.

    Implementation: adapters/semantic/openai_adapter.py
    """

    def match(self, transcript: str, gazetteer: Gazetteer) -> SemanticMatchResult:
        """Pick the gazetteer place the transcript most likely names.

        Args:
            transcript: The raw transcript.
            gazetteer: The full candidate list.

        Returns:
            SemanticMatchResult; a None place_id with confidence 0 means
            "no confident match".

        Raises:
            SemanticMatchError: If the matcher itself failed.
        """
        ...
