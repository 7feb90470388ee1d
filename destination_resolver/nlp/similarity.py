"""String similarity scores used by local fuzzy matching.

Uses rapidfuzz for the Levenshtein distance; the normalization into a
[0, 1] score and the containment rules live here.
"""

from __future__ import annotations

from rapidfuzz.distance import Levenshtein

# Score for a verbatim substring hit; context around it was ignored.
EXACT_CONTAINMENT_SCORE = 0.95

# Penalty applied when the needle is only approximately contained.
FUZZY_CONTAINMENT_FACTOR = 0.9


def similarity(a: str, b: str) -> float:
    """Normalized edit-distance similarity.

    Parameters
    ----------
    a, b : str
        Strings to compare

    Returns
    -------
    float
        1.0 for identical strings, 0.0 if either is empty, otherwise
        ``1 - distance / max(len(a), len(b))`` floored at 0
    """
    if not a or not b:
        return 0.0
    if a == b:
        return 1.0
    distance = Levenshtein.distance(a, b)
    return max(0.0, 1.0 - distance / max(len(a), len(b)))


def containment(haystack: str, needle: str) -> float:
    """Score how well ``needle`` appears inside ``haystack``.

    A verbatim substring scores 0.95. Otherwise the needle is compared
    token-wise (single token) or with a sliding window of the same
    token count (several tokens), and the best similarity is scaled
    by 0.9. A needle with more tokens than the haystack scores 0.

    Parameters
    ----------
    haystack : str
        Text to search in
    needle : str
        Text to look for

    Returns
    -------
    float
        Containment score in [0, 1]
    """
    if not haystack or not needle:
        return 0.0

    if needle in haystack:
        return EXACT_CONTAINMENT_SCORE

    haystack_tokens = haystack.split()
    needle_tokens = needle.split()
    if not haystack_tokens or not needle_tokens:
        return 0.0

    if len(needle_tokens) == 1:
        best = max(similarity(token, needle_tokens[0]) for token in haystack_tokens)
        return best * FUZZY_CONTAINMENT_FACTOR

    width = len(needle_tokens)
    if width > len(haystack_tokens):
        return 0.0

    best = 0.0
    for start in range(len(haystack_tokens) - width + 1):
        window = " ".join(haystack_tokens[start : start + width])
        best = max(best, similarity(window, needle))
    return best * FUZZY_CONTAINMENT_FACTOR
