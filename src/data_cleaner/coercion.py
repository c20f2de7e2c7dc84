from __future__ import annotations

import json
import math
import re
from typing import Any, Optional

from .errors import ValidationError

TRUE_VALUES = frozenset({"true", "yes", "1", "on", "enabled", "active", "y"})
FALSE_VALUES = frozenset({"false", "no", "0", "off", "disabled", "inactive", "n"})

CURRENCY_AND_SPACE_RE = re.compile(r"[$€£¥₹\s]")
COMMA_DECIMAL_RE = re.compile(r",\d{1,2}$")
DOT_THOUSANDS_RE = re.compile(r"\.\d{3}")
LEADING_FLOAT_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

TARGET_TYPES = ("string", "number", "integer", "boolean")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def to_boolean(value: Any, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if _is_number(value):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
    return default


def _parse_float_prefix(text: str) -> Optional[float]:
    match = LEADING_FLOAT_RE.match(text)
    if not match:
        return None
    try:
        return float(match.group(0))
    except ValueError:
        return None


def to_number(value: Any, default: float = 0.0) -> float:
    """
    Convert ``value`` to a float, accepting currency and grouped digits.

    "1.234,56" is read as European style (dot thousands, comma decimals)
    and "1,234.56" as US style. Unparseable, NaN or infinite input returns
    ``default``.
    """
    if _is_number(value):
        if isinstance(value, float) and not math.isfinite(value):
            return default
        return value
    if not isinstance(value, str):
        return default

    cleaned = CURRENCY_AND_SPACE_RE.sub("", value)
    if COMMA_DECIMAL_RE.search(cleaned) and DOT_THOUSANDS_RE.search(cleaned):
        cleaned = cleaned.replace(".", "").replace(",", ".", 1)
    else:
        cleaned = cleaned.replace(",", "")

    parsed = _parse_float_prefix(cleaned)
    if parsed is None or not math.isfinite(parsed):
        return default
    return parsed


def round_half_up(number: float) -> int:
    return int(math.floor(number + 0.5))


def to_integer(value: Any, default: float = 0) -> int:
    number = to_number(value, default)
    if not math.isfinite(number):
        return 0
    return round_half_up(number)


def to_string(value: Any, default: str = "") -> str:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list, tuple)):
        try:
            return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
        except (TypeError, ValueError):
            return default
    return str(value)


def convert_value(value: Any, target_type: str, default: Any = None) -> Any:
    if target_type == "string":
        return to_string(value, "" if default is None else to_string(default))
    if target_type == "number":
        return to_number(value, to_number(default, 0.0))
    if target_type == "integer":
        return to_integer(value, to_number(default, 0.0))
    if target_type == "boolean":
        return to_boolean(value, to_boolean(default, False))
    raise ValidationError(
        f"Unsupported target type {target_type!r}; expected one of {list(TARGET_TYPES)}"
    )


__all__ = [
    "FALSE_VALUES",
    "TARGET_TYPES",
    "TRUE_VALUES",
    "convert_value",
    "to_boolean",
    "to_integer",
    "to_number",
    "to_string",
]
