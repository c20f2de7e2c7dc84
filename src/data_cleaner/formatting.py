from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from .casing import (
    to_camel_case,
    to_pascal_case,
    to_sentence_case,
    to_snake_case,
    to_title_case,
)
from .errors import ValidationError

CASE_CONVERTERS: Dict[str, Callable[[str], str]] = {
    "lower": str.lower,
    "upper": str.upper,
    "title": to_title_case,
    "sentence": to_sentence_case,
    "snake": to_snake_case,
    "camel": to_camel_case,
    "pascal": to_pascal_case,
}

PUNCTUATION_RE = re.compile(r"[.,!?;:'\"()\[\]{}]")


@dataclass
class FormatTextOptions:
    trim_whitespace: bool = True
    remove_line_breaks: bool = False
    case_type: Optional[str] = None
    remove_special_chars: bool = False
    remove_numbers: bool = False
    remove_punctuation: bool = False
    max_length: Optional[int] = None
    truncation_indicator: str = "..."

    @classmethod
    def from_mapping(cls, payload: Dict[str, Any]) -> "FormatTextOptions":
        max_length = payload.get("max_length")
        indicator = payload.get("truncation_indicator")
        return cls(
            trim_whitespace=payload.get("trim_whitespace", True) is not False,
            remove_line_breaks=bool(payload.get("remove_line_breaks", False)),
            case_type=payload.get("case_type") or None,
            remove_special_chars=bool(payload.get("remove_special_chars", False)),
            remove_numbers=bool(payload.get("remove_numbers", False)),
            remove_punctuation=bool(payload.get("remove_punctuation", False)),
            max_length=int(max_length) if max_length else None,
            truncation_indicator="..." if indicator is None else str(indicator),
        )


def convert_case(text: str, case_type: Optional[str]) -> str:
    if not case_type or case_type == "none":
        return text
    try:
        converter = CASE_CONVERTERS[case_type]
    except KeyError:
        raise ValidationError(
            f"Unsupported case type {case_type!r}; expected one of {sorted(CASE_CONVERTERS)}"
        ) from None
    return converter(text)


def truncate(text: str, max_length: Optional[int], indicator: str = "...") -> str:
    if not max_length or max_length <= 0 or len(text) <= max_length:
        return text
    keep = max(0, max_length - len(indicator))
    return text[:keep] + indicator


def format_text(text: Any, options: Optional[FormatTextOptions] = None) -> str:
    """
    Apply the requested clean-up steps in a fixed order.

    Line breaks, whitespace collapsing, special characters, digits,
    punctuation, case conversion, then truncation.
    """
    if not isinstance(text, str) or not text:
        return ""
    options = options or FormatTextOptions()
    result = text

    if options.remove_line_breaks:
        result = re.sub(r"[\r\n]+", " ", result)
    if options.trim_whitespace:
        result = re.sub(r"\s+", " ", result).strip()
    if options.remove_special_chars:
        result = re.sub(r"[^a-zA-Z0-9\s]", "", result)
    if options.remove_numbers:
        result = re.sub(r"\d", "", result)
    if options.remove_punctuation:
        result = PUNCTUATION_RE.sub("", result)

    result = convert_case(result, options.case_type)
    return truncate(result, options.max_length, options.truncation_indicator)


__all__ = [
    "CASE_CONVERTERS",
    "FormatTextOptions",
    "convert_case",
    "format_text",
    "truncate",
]
