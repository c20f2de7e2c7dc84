from __future__ import annotations

import logging
import os
from io import StringIO
from typing import Any, List, Optional

import pandas as pd

from .addresses import normalize_state, parse_address
from .casing import (
    to_camel_case,
    to_pascal_case,
    to_sentence_case,
    to_snake_case,
    to_title_case,
    transform_object_keys,
)
from .coercion import convert_value, to_boolean, to_integer, to_number, to_string
from .config_loader import PipelineConfig, load_pipeline_config
from .errors import DataCleanerError, ValidationError
from .extraction import extract_from_text, split_key_value, split_multiple
from .formatting import FormatTextOptions, format_text
from .merge import MergeEvaluator, MergeSignals, deduplicate_fuzzy, find_fuzzy_duplicates
from .models import (
    DeduplicationResult,
    DuplicateGroup,
    ExtractedData,
    ParsedAddress,
    ParsedName,
    ParsedPhoneNumber,
)
from .normalization import (
    clean_phone_number,
    is_valid_e164,
    is_valid_email,
    normalize_email,
    parse_name,
    parse_phone_number,
    parse_username,
)
from .similarity import (
    fuzzy_match,
    jaro_similarity,
    jaro_winkler_similarity,
    levenshtein_distance,
    levenshtein_similarity,
)

logger = logging.getLogger(__name__)

__all__ = [
    "DataCleanerError",
    "DeduplicationResult",
    "DuplicateGroup",
    "ExtractedData",
    "FormatTextOptions",
    "MergeEvaluator",
    "MergeSignals",
    "ParsedAddress",
    "ParsedName",
    "ParsedPhoneNumber",
    "PipelineConfig",
    "ValidationError",
    "clean_phone_number",
    "convert_value",
    "deduplicate_fuzzy",
    "extract_from_text",
    "find_fuzzy_duplicates",
    "format_text",
    "fuzzy_match",
    "is_valid_e164",
    "is_valid_email",
    "jaro_similarity",
    "jaro_winkler_similarity",
    "levenshtein_distance",
    "levenshtein_similarity",
    "load_config",
    "load_pipeline_config",
    "normalize_email",
    "normalize_state",
    "parse_address",
    "parse_name",
    "parse_phone_number",
    "parse_username",
    "read_csv_records",
    "safe_get",
    "split_key_value",
    "split_multiple",
    "to_boolean",
    "to_camel_case",
    "to_integer",
    "to_number",
    "to_pascal_case",
    "to_sentence_case",
    "to_snake_case",
    "to_string",
    "to_title_case",
    "transform_object_keys",
    "warn_missing",
]


def load_config(args: Any) -> PipelineConfig:
    return load_pipeline_config(args)


HEADER_SCAN_LINES = 100


def _header_offset(lines: List[str], header_starts_with: str) -> int:
    for index, line in enumerate(lines[:HEADER_SCAN_LINES]):
        if line.strip().startswith(header_starts_with):
            return index
    return 0


def read_csv_records(path: Optional[str], header_starts_with: Optional[str] = None) -> pd.DataFrame:
    """
    Read ``path`` with every column as a string.

    Exports often carry a preamble above the real header; when
    ``header_starts_with`` is given, lines before the first line starting
    with it are dropped. No matching line means the file is read as is.
    """
    if not path:
        return pd.DataFrame()
    if not header_starts_with:
        return pd.read_csv(path, dtype=str, keep_default_na=False)

    with open(path, "r", encoding="utf-8", errors="ignore") as handle:
        lines = handle.read().splitlines()
    offset = _header_offset(lines, header_starts_with)
    if offset:
        logger.debug("Skipping %d preamble line(s) in %s", offset, path)
    return pd.read_csv(StringIO("\n".join(lines[offset:])), dtype=str, keep_default_na=False)


def _coerce_to_string(value: Any) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return to_string(value)


def safe_get(row: Any, key: str) -> str:
    try:
        return _coerce_to_string(row.get(key, ""))
    except (AttributeError, KeyError, TypeError):
        try:
            if hasattr(row, "__contains__") and key in row:
                return _coerce_to_string(row[key])
            return ""
        except (KeyError, TypeError, AttributeError):
            return ""


def warn_missing(path: Optional[str], label: str) -> bool:
    if not path or not os.path.exists(path):
        logger.warning("%s path missing: %s", label, path)
        return True
    return False
