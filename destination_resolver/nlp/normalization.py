"""Text normalization for Arabic/Hassaniya transcripts.

Transcripts and gazetteer variants go through the same canonical form
before being compared: Arabic diacritics are removed, letter variants
are unified and a leading "I want to go to..." phrase is dropped so
that only the destination name remains.

Example
-------
    >>> normalize_text("نبغي نمشي لتفرغ زينة")
    'تفرغ زينه'
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Pattern, Sequence

# Hassaniya ways of saying "I want to go to..."
INTENT_PHRASES: tuple[str, ...] = (
    "نبغي نمشي",
    "نبي نمشي",
    "نبغي نمشي لـ",
    "نبغي نمشي ل",
    "أبغي نمشي",
    "باغي نمشي",
    "باغي نروح",
    "نبغي نروح",
    "أبغي نروح",
    "بغيت نمشي",
    "بغيت نروح",
    "نمشي لـ",
    "نمشي ل",
    "نروح لـ",
    "نروح ل",
    "وديني",
    "وديني لـ",
    "وديني ل",
)

# Maximum number of tokens in a candidate span
DEFAULT_MAX_SPAN_LENGTH = 4

_DIACRITICS_RE = re.compile("[ً-ٰٟ]")
_ALIF_VARIANTS_RE = re.compile("[آأإٱ]")
_ALIF = "ا"
_ALIF_MAQSURA = "ى"
_YA = "ي"
_TA_MARBUTA = "ة"
_HA = "ه"
_TATWEEL = "ـ"
_WHITESPACE_RE = re.compile(r"\s+")


def _fold_characters(text: str) -> str:
    """Apply the character-level steps: trim, lowercase, diacritics, letters."""
    folded = text.strip().lower()
    folded = _DIACRITICS_RE.sub("", folded)
    folded = _ALIF_VARIANTS_RE.sub(_ALIF, folded)
    return (
        folded.replace(_ALIF_MAQSURA, _YA)
        .replace(_TA_MARBUTA, _HA)
        .replace(_TATWEEL, "")
    )


def _compile_intent_pattern(phrases: Sequence[str]) -> Pattern[str]:
    """Build one anchored alternation, longest phrase first.

    Phrases are folded like the text they are matched against, so a
    literal written with hamza or tatweel still matches.
    """
    folded = {_WHITESPACE_RE.sub(" ", _fold_characters(p)) for p in phrases}
    ordered = sorted((p for p in folded if p), key=lambda p: (-len(p), p))
    if not ordered:
        return re.compile(r"(?!)")
    alternation = "|".join(
        r"\s+".join(re.escape(word) for word in phrase.split(" "))
        for phrase in ordered
    )
    return re.compile(rf"^\s*(?:{alternation})\s*")


@dataclass(frozen=True)
class TextNormalizer:
    """Canonicalizes transcript and variant text.

    Attributes:
        intent_phrases: Leading phrases removed before matching
    """

    intent_phrases: tuple[str, ...] = INTENT_PHRASES
    _intent_re: Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "_intent_re", _compile_intent_pattern(self.intent_phrases)
        )

    def strip_intent_phrases(self, text: str) -> str:
        """Remove leading intent phrases from already folded text.

        Parameters
        ----------
        text : str
            Text after character folding

        Returns
        -------
        str
            The text without its leading intent phrase
        """
        # Repeat so stacked phrases ("نبغي نمشي نمشي ل...") leave a fixed point.
        while True:
            stripped = self._intent_re.sub("", text, count=1)
            if stripped == text:
                return stripped
            text = stripped

    def normalize(self, text: str) -> str:
        """Normalize a transcript or variant into its canonical form.

        Parameters
        ----------
        text : str
            Raw text, possibly empty

        Returns
        -------
        str
            Normalized text, empty string for empty input
        """
        if not text:
            return ""
        normalized = _fold_characters(text)
        normalized = self.strip_intent_phrases(normalized)
        return _WHITESPACE_RE.sub(" ", normalized).strip()


_DEFAULT_NORMALIZER = TextNormalizer()


def normalize_text(text: str) -> str:
    """Normalize text with the default intent phrase list."""
    return _DEFAULT_NORMALIZER.normalize(text)


def tokenize(text: str) -> List[str]:
    """Split on whitespace, dropping empty tokens."""
    return [token for token in text.split() if token]


def generate_spans(
    tokens: Sequence[str], max_length: int = DEFAULT_MAX_SPAN_LENGTH
) -> List[str]:
    """Enumerate contiguous token runs as match candidates.

    Spans are ordered by length, then by start offset. Repeated spans
    are kept.

    Parameters
    ----------
    tokens : Sequence[str]
        Whitespace tokens of the normalized transcript
    max_length : int
        Longest span, in tokens

    Returns
    -------
    List[str]
        Every span of 1..min(max_length, len(tokens)) tokens
    """
    spans: List[str] = []
    for n in range(1, min(max_length, len(tokens)) + 1):
        for start in range(len(tokens) - n + 1):
            spans.append(" ".join(tokens[start : start + n]))
    return spans
