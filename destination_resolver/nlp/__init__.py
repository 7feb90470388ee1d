"""Natural language processing helpers (normalization, spans, similarity)."""

from .normalization import (
    INTENT_PHRASES,
    TextNormalizer,
    generate_spans,
    normalize_text,
    tokenize,
)
from .similarity import containment, similarity

__all__ = [
    "INTENT_PHRASES",
    "TextNormalizer",
    "normalize_text",
    "tokenize",
    "generate_spans",
    "similarity",
    "containment",
]
