"""OpenAI semantic matcher adapter.

Asks a chat model which gazetteer place a Hassaniya transcript names.
The model sees every place id with its canonical name and Arabic-script
variants and must answer with a JSON object:

    {"destinationId": <int or null>, "confidence": <0..1>, "reasoning": "..."}
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Optional

from ...config import SemanticConfig, get_config
from ...domain.errors import SemanticMatchError
from ...domain.models import Gazetteer, SemanticMatchResult
from ...ports.cache import CachePort
from ..cache.memory_cache import InMemoryCache

_ARABIC_SCRIPT_RE = re.compile("[؀-ۿ]")

SYSTEM_PROMPT = (
    "You are an expert in Hassaniya Arabic dialect and Mauritanian geography. "
    "You help match spoken destinations to known places."
)

USER_PROMPT_TEMPLATE = """You are helping match spoken Hassaniya (Mauritanian dialect) destinations to known areas in Nouakchott, Mauritania.

The user said (transcribed by speech recognition): "{transcript}"

Available destinations in Nouakchott:
{destinations}

Task: Determine which destination the user most likely intended to say. Only pick from the provided list. If you are not confident or the name is not in the list, respond with destinationId: null and confidence: 0.

Hassaniya filler words and intent phrases to IGNORE:
- "نبغي نمشي" (nabghi nemshi) - I want to go
- "باغي نمشي" (baghi nemshi) - I want to go
- "بغيت نروح" (bghit nrouh) - I want to go
- "ان گايس" (ana gayes) - I'm going to
- "ندور كورس گايس" (ndor course gayes) - I want a ride to
- "ندور كورس واعد" (ndor course waiid) - I want a ride going to

Consider:
1. Phonetic similarity (how words sound in Arabic/Hassaniya)
2. Common transcription errors (e.g., "كرافور" vs "كارفور")
3. Hassaniya dialect variations

Respond with JSON only:
{{
  "destinationId": <number or null if no match>,
  "confidence": <0.0 to 1.0>,
  "reasoning": "<brief explanation>"
}}"""


def build_destinations_list(gazetteer: Gazetteer) -> str:
    """Render one prompt line per place with its Arabic-script variants."""
    lines = []
    for place in gazetteer:
        arabic = [v for v in place.variants if _ARABIC_SCRIPT_RE.search(v)]
        lines.append(
            f"- ID {place.id}: {place.canonical_name} "
            f"(Arabic variants: {', '.join(arabic)})"
        )
    return "\n".join(lines)


def parse_match_response(content: Optional[str]) -> SemanticMatchResult:
    """Parse the model's JSON answer.

    Args:
        content: Raw message content.

    Returns:
        The parsed result, confidence clamped into [0, 1].

    Raises:
        ValueError: If the content is missing or not the expected JSON.
    """
    if not content:
        raise ValueError("empty response")

    data = json.loads(content)
    if not isinstance(data, dict):
        raise ValueError("response is not a JSON object")

    raw_id = data.get("destinationId")
    place_id: Optional[int]
    if raw_id is None or raw_id == "":
        place_id = None
    elif isinstance(raw_id, bool) or (
        isinstance(raw_id, float) and not raw_id.is_integer()
    ):
        raise ValueError(f"invalid destinationId {raw_id!r}")
    else:
        place_id = int(raw_id)

    confidence = float(data.get("confidence") or 0.0)
    confidence = min(1.0, max(0.0, confidence))
    if place_id is None:
        confidence = 0.0

    return SemanticMatchResult(
        place_id=place_id,
        confidence=confidence,
        reasoning=str(data.get("reasoning") or ""),
    )


@dataclass
class OpenAISemanticMatcher:
    """Semantic matcher backed by the OpenAI chat completions API.

    Implements SemanticMatcherPort.

    Attributes:
        config: Semantic matcher configuration
        cache: Cache holding the API client
    """

    config: SemanticConfig = field(default_factory=lambda: get_config().semantic)
    cache: CachePort[Any] = field(
        default_factory=lambda: InMemoryCache(name="openai_client")
    )

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _get_client(self) -> Any:
        """Get or lazily create the OpenAI client.

        Raises:
            SemanticMatchError: If no API key is configured.
        """
        if not self.config.api_key:
            raise SemanticMatchError(
                "OpenAI API key is not configured", model=self.config.model
            )

        def create_client() -> Any:
            from openai import OpenAI

            self._logger.debug("Creating OpenAI client")
            return OpenAI(
                api_key=self.config.api_key,
                timeout=self.config.timeout_seconds,
            )

        return self.cache.get_or_compute("client", create_client)

    def match(self, transcript: str, gazetteer: Gazetteer) -> SemanticMatchResult:
        """Ask the model which place the transcript names.

        Args:
            transcript: The raw transcript.
            gazetteer: The full candidate list.

        Returns:
            The model's answer.

        Raises:
            SemanticMatchError: If the API call fails or the answer is malformed.
        """
        client = self._get_client()
        prompt = USER_PROMPT_TEMPLATE.format(
            transcript=transcript,
            destinations=build_destinations_list(gazetteer),
        )

        self._logger.info(
            "Querying semantic matcher",
            extra={"model": self.config.model, "places": len(gazetteer)},
        )

        try:
            response = client.chat.completions.create(
                model=self.config.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                response_format={"type": "json_object"},
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
            )
        except Exception as e:
            raise SemanticMatchError(
                "Semantic matcher request failed", model=self.config.model, cause=e
            )

        content = response.choices[0].message.content if response.choices else None
        try:
            result = parse_match_response(content)
        except (ValueError, TypeError) as e:
            raise SemanticMatchError(
                "Semantic matcher returned an invalid answer",
                model=self.config.model,
                cause=e,
            )

        self._logger.debug(
            "Semantic matcher answered",
            extra={
                "place_id": result.place_id,
                "confidence": result.confidence,
                "reasoning": result.reasoning,
            },
        )
        return result
