from __future__ import annotations

import argparse
import csv
import logging
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from .addresses import parse_address
from .common import load_config, read_csv_records, safe_get, warn_missing
from .config_loader import PipelineConfig
from .formatting import format_text
from .logging_utils import configure_logging
from .merge import deduplicate_fuzzy
from .models import DuplicateGroup
from .normalization import (
    clean_phone_number,
    is_valid_email,
    normalize_email,
    parse_name,
    parse_username,
)

logger = logging.getLogger(__name__)

GROUP_COLUMNS = ["keep_index", "duplicate_index", "similarity_score"]


def _load_records(config: PipelineConfig) -> List[Dict[str, Any]]:
    path = config.inputs.get("input_csv")
    if warn_missing(path, "Input CSV"):
        return []
    df = read_csv_records(path, header_starts_with=config.inputs.get("header_starts_with"))
    return df.to_dict(orient="records")


def _clean_record(record: Dict[str, Any], config: PipelineConfig) -> Dict[str, Any]:
    cleaned = dict(record)
    settings = config.normalization

    for column in config.formatting.columns:
        if column in cleaned:
            cleaned[column] = format_text(safe_get(cleaned, column), config.formatting.options)

    for column in settings.email_columns:
        raw = safe_get(cleaned, column)
        if not raw:
            continue
        email = normalize_email(raw)
        cleaned[column] = email
        if not is_valid_email(email):
            logger.info("Invalid email in column %s: %s", column, raw)

    for column in settings.phone_columns:
        raw = safe_get(cleaned, column)
        if raw:
            cleaned[column] = clean_phone_number(raw, settings.default_country_code)

    if settings.name_column:
        cleaned.update(parse_name(safe_get(cleaned, settings.name_column)).to_prefixed_dict("name_"))
    if settings.username_column:
        cleaned.update(
            parse_username(safe_get(cleaned, settings.username_column)).to_prefixed_dict(
                "username_"
            )
        )
    if settings.address_column:
        cleaned.update(
            parse_address(safe_get(cleaned, settings.address_column)).to_prefixed_dict(
                "address_"
            )
        )
    return cleaned


def _group_rows(groups: List[DuplicateGroup]) -> List[Dict[str, Any]]:
    rows: List[Dict[str, Any]] = []
    for group in groups:
        for index, score in zip(group.duplicate_indices, group.similarity_scores):
            rows.append(
                {
                    "keep_index": group.keep_index,
                    "duplicate_index": index,
                    "similarity_score": round(score, 4),
                }
            )
    return rows


def build(
    args: argparse.Namespace, config: Optional[PipelineConfig] = None
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    config = config or load_config(args)

    raw_records = _load_records(config)
    cleaned_records = [_clean_record(record, config) for record in raw_records]

    groups: List[DuplicateGroup] = []
    if config.dedupe.enabled:
        result = deduplicate_fuzzy(cleaned_records, config.dedupe.fields, config.dedupe.threshold)
        cleaned_records = result.records
        groups = result.duplicate_groups
        logger.info(
            "Deduplicated %d record(s) to %d on %s",
            len(raw_records),
            result.kept_count,
            ", ".join(config.dedupe.fields),
        )

    records_df = pd.DataFrame(cleaned_records)
    groups_df = pd.DataFrame(_group_rows(groups), columns=GROUP_COLUMNS)
    return records_df, groups_df


def main() -> int:
    parser = argparse.ArgumentParser(description="Normalize and fuzzy-deduplicate CSV records.")
    parser.add_argument("--config", type=str, default=None, help="Path to YAML config.")
    parser.add_argument("--input-csv", type=str, default=None)
    parser.add_argument(
        "--header-starts-with",
        type=str,
        default=None,
        help="Skip preamble lines above the first line starting with this text.",
    )
    parser.add_argument("--out-dir", type=str, default=None)
    parser.add_argument("--default-country-code", type=str, default=None)
    parser.add_argument("--email-columns", type=str, default=None, help="Comma separated.")
    parser.add_argument("--phone-columns", type=str, default=None, help="Comma separated.")
    parser.add_argument("--name-column", type=str, default=None)
    parser.add_argument("--username-column", type=str, default=None)
    parser.add_argument("--address-column", type=str, default=None)
    parser.add_argument(
        "--dedupe-fields",
        type=str,
        default=None,
        help="Comma separated fields compared during fuzzy deduplication.",
    )
    parser.add_argument("--fuzzy-threshold", type=float, default=None)
    parser.add_argument("--log-level", type=str, default=None, help="Override logging level")
    args = parser.parse_args()

    config = load_config(args)
    configure_logging(config, level_override=args.log_level)
    records_df, groups_df = build(args, config=config)

    out_dir = config.outputs.dir
    out_dir.mkdir(parents=True, exist_ok=True)
    records_path = out_dir / "cleaned_records.csv"
    groups_path = out_dir / "duplicate_groups.csv"
    records_df.to_csv(str(records_path), index=False, encoding="utf-8", quoting=csv.QUOTE_ALL)
    groups_df.to_csv(str(groups_path), index=False, encoding="utf-8", quoting=csv.QUOTE_ALL)

    logger.info("Saved: %s", records_path)
    logger.info("Saved: %s", groups_path)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
