from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Optional, Pattern, Sequence

from .models import ExtractedData

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PHONE_PATTERN = re.compile(
    r"(?:\+?1[-.\s]?)?(?:\(?\d{3}\)?[-.\s]?)?\d{3}[-.\s]?\d{4}(?:\s*(?:ext\.?|x)\s*\d+)?",
    re.IGNORECASE,
)
URL_PATTERN = re.compile(r"https?://[^\s<>\"{}|\\^`\[\]]+", re.IGNORECASE)
_MONTHS = r"(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*\.?"
DATE_PATTERNS: Sequence[Pattern[str]] = (
    re.compile(r"\b\d{1,2}/\d{1,2}/\d{2,4}\b"),
    re.compile(r"\b\d{4}-\d{2}-\d{2}\b"),
    re.compile(r"\b\d{1,2}-\d{1,2}-\d{2,4}\b"),
    re.compile(rf"\b{_MONTHS}\s+\d{{1,2}},?\s+\d{{4}}\b", re.IGNORECASE),
    re.compile(rf"\b\d{{1,2}}\s+{_MONTHS}\s+\d{{4}}\b", re.IGNORECASE),
)
AMOUNT_PATTERN = re.compile(
    r"(?:\$|€|£|¥|₹|USD|EUR|GBP)\s*\d[\d,]*(?:\.\d{2})?"
    r"|\d+(?:,\d{3})*(?:\.\d{2})?\s*(?:dollars?|euros?|pounds?)",
    re.IGNORECASE,
)
HASHTAG_PATTERN = re.compile(r"(?<![\w&])#[a-zA-Z][a-zA-Z0-9_]*")
MENTION_PATTERN = re.compile(r"(?<![\w.])@[a-zA-Z][a-zA-Z0-9_]*")
NUMBER_PATTERN = re.compile(r"\b\d+(?:,\d{3})*(?:\.\d+)?\b")

EXTRACT_CATEGORIES = (
    "emails",
    "phones",
    "urls",
    "dates",
    "amounts",
    "hashtags",
    "mentions",
    "numbers",
)

DEFAULT_SPLIT_DELIMITERS = (",", ";", "|", "\t", "\n")
DEFAULT_PAIR_SPLIT = re.compile(r"[\n;]")
DEFAULT_KV_SPLIT = re.compile(r"->|=>|[:=]")


def unique_in_order(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


def _matches(pattern: Pattern[str], text: str) -> List[str]:
    return [match.group(0) for match in pattern.finditer(text)]


def _looks_like_phone(candidate: str) -> bool:
    return len(re.sub(r"\D", "", candidate)) >= 7


def _is_bare_number(candidate: str) -> bool:
    return len(candidate) <= 10 and "/" not in candidate and "-" not in candidate


def extract_from_text(text: Any) -> ExtractedData:
    if not isinstance(text, str) or not text:
        return ExtractedData()

    dates: List[str] = []
    for pattern in DATE_PATTERNS:
        dates.extend(_matches(pattern, text))

    phones = (match.strip() for match in _matches(PHONE_PATTERN, text))
    numbers = _matches(NUMBER_PATTERN, text)

    return ExtractedData(
        emails=unique_in_order(_matches(EMAIL_PATTERN, text)),
        phones=unique_in_order(phone for phone in phones if _looks_like_phone(phone)),
        urls=unique_in_order(_matches(URL_PATTERN, text)),
        dates=unique_in_order(dates),
        amounts=unique_in_order(_matches(AMOUNT_PATTERN, text)),
        hashtags=unique_in_order(_matches(HASHTAG_PATTERN, text)),
        mentions=unique_in_order(_matches(MENTION_PATTERN, text)),
        numbers=unique_in_order(number for number in numbers if _is_bare_number(number)),
    )


def split_multiple(
    text: Any,
    delimiters: Optional[Sequence[str]] = None,
    trim_parts: bool = True,
) -> List[str]:
    if not isinstance(text, str) or not text:
        return []
    delimiters = [d for d in (delimiters or DEFAULT_SPLIT_DELIMITERS) if d]
    if not delimiters:
        return [text.strip()] if trim_parts and text.strip() else [text]
    pattern = "|".join(re.escape(delimiter) for delimiter in delimiters)
    parts = re.split(pattern, text)
    if trim_parts:
        return [part.strip() for part in parts if part.strip()]
    return parts


def split_key_value(
    text: Any,
    pair_delimiter: Optional[str] = None,
    kv_delimiter: Optional[str] = None,
) -> Dict[str, str]:
    result: Dict[str, str] = {}
    if not isinstance(text, str) or not text:
        return result

    pair_split = re.compile(re.escape(pair_delimiter)) if pair_delimiter else DEFAULT_PAIR_SPLIT
    kv_split = re.compile(re.escape(kv_delimiter)) if kv_delimiter else DEFAULT_KV_SPLIT

    for pair in pair_split.split(text):
        trimmed = pair.strip()
        if not trimmed:
            continue
        pieces = kv_split.split(trimmed, maxsplit=1)
        if len(pieces) < 2:
            continue
        key = pieces[0].strip()
        if key:
            result[key] = pieces[1].strip()
    return result


__all__ = [
    "EXTRACT_CATEGORIES",
    "extract_from_text",
    "split_key_value",
    "split_multiple",
    "unique_in_order",
]
