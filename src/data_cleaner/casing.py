from __future__ import annotations

import re
from typing import Any, Callable, Dict, List

from .errors import ValidationError

TITLE_MINOR_WORDS = frozenset(
    {
        "a",
        "an",
        "the",
        "and",
        "but",
        "or",
        "for",
        "nor",
        "so",
        "yet",
        "at",
        "by",
        "in",
        "of",
        "on",
        "to",
        "up",
        "as",
        "is",
        "it",
    }
)

TITLE_ACRONYMS = frozenset(
    {
        "usa",
        "uk",
        "uae",
        "nyc",
        "la",
        "dc",
        "ibm",
        "nasa",
        "fbi",
        "cia",
        "ceo",
        "cfo",
        "cto",
        "coo",
        "vp",
        "svp",
        "evp",
        "md",
        "phd",
        "llc",
        "inc",
        "ltd",
        "ii",
        "iii",
        "iv",
        "vi",
        "vii",
        "viii",
        "ix",
        "xi",
    }
)

_LOWER_UPPER_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_SEPARATORS = re.compile(r"[\s\-._]+")
_SENTENCE_START = re.compile(r"(^\s*\w|[.!?]\s+\w)")


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def to_title_case(text: str) -> str:
    if not text:
        return ""
    pieces = re.split(r"(\s+)", text.lower())
    word_positions = [index for index, piece in enumerate(pieces) if piece and not piece.isspace()]
    if not word_positions:
        return "".join(pieces)
    first, last = word_positions[0], word_positions[-1]
    for index in word_positions:
        word = pieces[index]
        if word in TITLE_ACRONYMS:
            pieces[index] = word.upper()
        elif word in TITLE_MINOR_WORDS and index not in (first, last):
            pieces[index] = word
        else:
            pieces[index] = _capitalize(word)
    return "".join(pieces)


def to_sentence_case(text: str) -> str:
    if not text:
        return ""
    return _SENTENCE_START.sub(lambda match: match.group(0).upper(), text.lower())


def split_words(text: str) -> List[str]:
    """Split on camel/Pascal case boundaries and on space, hyphen, dot and underscore."""
    if not text:
        return []
    marked = _LOWER_UPPER_BOUNDARY.sub(r"\1_\2", text)
    marked = _ACRONYM_BOUNDARY.sub(r"\1_\2", marked)
    return [word for word in _WORD_SEPARATORS.split(marked) if word]


def to_snake_case(text: str) -> str:
    if not text:
        return ""
    joined = "_".join(split_words(text))
    joined = re.sub(r"[^a-zA-Z0-9_]", "", joined).lower()
    return re.sub(r"_+", "_", joined).strip("_")


def _word_initial(word: str) -> str:
    # all-caps words stay intact so "XYCoordinate" splits back into the same words
    if word.isupper():
        return word
    return _capitalize(word)


def to_camel_case(text: str) -> str:
    words = split_words(text)
    if not words:
        return ""
    return words[0].lower() + "".join(_word_initial(word) for word in words[1:])


def to_pascal_case(text: str) -> str:
    return "".join(_word_initial(word) for word in split_words(text))


KEY_FORMATTERS: Dict[str, Callable[[str], str]] = {
    "snake_case": to_snake_case,
    "camelCase": to_camel_case,
    "PascalCase": to_pascal_case,
}


def _key_formatter(key_format: str) -> Callable[[str], str]:
    try:
        return KEY_FORMATTERS[key_format]
    except KeyError:
        raise ValidationError(
            f"Unsupported key format {key_format!r}; expected one of {sorted(KEY_FORMATTERS)}"
        ) from None


def transform_object_keys(obj: Any, key_format: str) -> Any:
    """
    Return a copy of ``obj`` with every mapping key rewritten to ``key_format``.

    Values, sequence order and non-container leaves are left untouched; the
    input structure is never modified.
    """
    formatter = _key_formatter(key_format)
    return _transform(obj, formatter)


def _transform(obj: Any, formatter: Callable[[str], str]) -> Any:
    if isinstance(obj, dict):
        return {
            (formatter(key) if isinstance(key, str) else key): _transform(value, formatter)
            for key, value in obj.items()
        }
    if isinstance(obj, list):
        return [_transform(item, formatter) for item in obj]
    if isinstance(obj, tuple):
        return tuple(_transform(item, formatter) for item in obj)
    return obj


__all__ = [
    "KEY_FORMATTERS",
    "TITLE_ACRONYMS",
    "TITLE_MINOR_WORDS",
    "split_words",
    "to_camel_case",
    "to_pascal_case",
    "to_sentence_case",
    "to_snake_case",
    "to_title_case",
    "transform_object_keys",
]
