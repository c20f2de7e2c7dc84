"""
String similarity metrics used by the fuzzy deduplication.

All metrics compare case-folded, trimmed strings and return scores in
``[0.0, 1.0]`` (except :func:`levenshtein_distance`, which is an edit count).
"""

from __future__ import annotations

from typing import List, Optional

FUZZY_SHORT_STRING_LENGTH = 10
JARO_WINKLER_MAX_PREFIX = 4
JARO_WINKLER_MAX_SCALE = 0.25


def _fold(text: Optional[str]) -> str:
    return (text or "").strip().lower()


def levenshtein_distance(a: str, b: str) -> int:
    s1 = _fold(a)
    s2 = _fold(b)
    if s1 == s2:
        return 0
    if not s1:
        return len(s2)
    if not s2:
        return len(s1)

    shorter, longer = (s1, s2) if len(s1) <= len(s2) else (s2, s1)
    previous: List[int] = list(range(len(shorter) + 1))
    current: List[int] = [0] * (len(shorter) + 1)
    for i in range(1, len(longer) + 1):
        current[0] = i
        long_char = longer[i - 1]
        for j in range(1, len(shorter) + 1):
            cost = 0 if long_char == shorter[j - 1] else 1
            current[j] = min(
                current[j - 1] + 1,
                previous[j] + 1,
                previous[j - 1] + cost,
            )
        previous, current = current, previous
    return previous[len(shorter)]


def levenshtein_similarity(a: str, b: str) -> float:
    s1 = _fold(a)
    s2 = _fold(b)
    if not s1 and not s2:
        return 1.0
    if not s1 or not s2:
        return 0.0
    distance = levenshtein_distance(s1, s2)
    return 1.0 - distance / max(len(s1), len(s2))


def jaro_similarity(a: str, b: str) -> float:
    s1 = _fold(a)
    s2 = _fold(b)
    if s1 == s2:
        return 1.0
    if not s1 or not s2:
        return 0.0

    window = max(0, max(len(s1), len(s2)) // 2 - 1)
    s1_matched = [False] * len(s1)
    s2_matched = [False] * len(s2)

    matches = 0
    for i, char in enumerate(s1):
        start = max(0, i - window)
        end = min(i + window + 1, len(s2))
        for j in range(start, end):
            if s2_matched[j] or s2[j] != char:
                continue
            s1_matched[i] = True
            s2_matched[j] = True
            matches += 1
            break

    if matches == 0:
        return 0.0

    transpositions = 0
    k = 0
    for i, char in enumerate(s1):
        if not s1_matched[i]:
            continue
        while not s2_matched[k]:
            k += 1
        if char != s2[k]:
            transpositions += 1
        k += 1

    return (
        matches / len(s1)
        + matches / len(s2)
        + (matches - transpositions / 2) / matches
    ) / 3


def common_prefix_length(a: str, b: str, limit: int = JARO_WINKLER_MAX_PREFIX) -> int:
    s1 = _fold(a)
    s2 = _fold(b)
    length = 0
    for c1, c2 in zip(s1[:limit], s2[:limit]):
        if c1 != c2:
            break
        length += 1
    return length


def jaro_winkler_similarity(a: str, b: str, prefix_scale: float = 0.1) -> float:
    jaro = jaro_similarity(a, b)
    if jaro == 0:
        return 0.0
    scale = min(prefix_scale, JARO_WINKLER_MAX_SCALE)
    return jaro + common_prefix_length(a, b) * scale * (1 - jaro)


def fuzzy_match(a: str, b: str) -> float:
    """
    Score two strings with the metric suited to their length.

    Short tokens such as names (both under ten characters) use Jaro-Winkler,
    which reacts to single typos; longer text uses Levenshtein similarity.
    """
    a = a or ""
    b = b or ""
    if len(a) < FUZZY_SHORT_STRING_LENGTH and len(b) < FUZZY_SHORT_STRING_LENGTH:
        return jaro_winkler_similarity(a, b)
    return levenshtein_similarity(a, b)


__all__ = [
    "common_prefix_length",
    "fuzzy_match",
    "jaro_similarity",
    "jaro_winkler_similarity",
    "levenshtein_distance",
    "levenshtein_similarity",
]
