from __future__ import annotations

import argparse
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml  # type: ignore[import-untyped]

from .formatting import FormatTextOptions
from .merge import DEFAULT_THRESHOLD, parse_field_list


@dataclass
class OutputsConfig:
    dir: Path


@dataclass
class NormalizationConfig:
    default_country_code: str = "1"
    email_columns: List[str] = field(default_factory=list)
    phone_columns: List[str] = field(default_factory=list)
    name_column: Optional[str] = None
    username_column: Optional[str] = None
    address_column: Optional[str] = None


@dataclass
class DedupeConfig:
    fields: List[str] = field(default_factory=list)
    threshold: float = DEFAULT_THRESHOLD

    @property
    def enabled(self) -> bool:
        return bool(self.fields)


@dataclass
class FormattingConfig:
    columns: List[str] = field(default_factory=list)
    options: FormatTextOptions = field(default_factory=FormatTextOptions)


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class PipelineConfig:
    inputs: Dict[str, Optional[str]]
    outputs: OutputsConfig
    normalization: NormalizationConfig
    dedupe: DedupeConfig
    formatting: FormattingConfig
    logging: LoggingConfig


def _load_yaml(path: Optional[str]) -> Dict[str, Any]:
    if not path:
        return {}
    with open(path, "r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def _as_list(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return parse_field_list(value)
    return [str(item).strip() for item in value if str(item).strip()]


def load_pipeline_config(args: argparse.Namespace) -> PipelineConfig:
    config_data = _load_yaml(getattr(args, "config", None))
    inputs = config_data.get("inputs", {}) or {}
    outputs_cfg = config_data.get("outputs", {}) or {}
    normalization_cfg = config_data.get("normalization", {}) or {}
    dedupe_cfg = config_data.get("dedupe", {}) or {}
    formatting_cfg = config_data.get("formatting", {}) or {}
    logging_cfg = config_data.get("logging", {}) or {}

    outputs_dir = Path(getattr(args, "out_dir", None) or outputs_cfg.get("dir") or os.getcwd())
    outputs = OutputsConfig(dir=outputs_dir)

    normalization = NormalizationConfig(
        default_country_code=str(
            getattr(args, "default_country_code", None)
            or normalization_cfg.get("default_country_code", "1")
        ),
        email_columns=_as_list(
            getattr(args, "email_columns", None) or normalization_cfg.get("email_columns")
        ),
        phone_columns=_as_list(
            getattr(args, "phone_columns", None) or normalization_cfg.get("phone_columns")
        ),
        name_column=getattr(args, "name_column", None) or normalization_cfg.get("name_column"),
        username_column=getattr(args, "username_column", None)
        or normalization_cfg.get("username_column"),
        address_column=getattr(args, "address_column", None)
        or normalization_cfg.get("address_column"),
    )

    arg_threshold = getattr(args, "fuzzy_threshold", None)
    dedupe = DedupeConfig(
        fields=_as_list(getattr(args, "dedupe_fields", None) or dedupe_cfg.get("fields")),
        threshold=float(
            arg_threshold
            if arg_threshold is not None
            else dedupe_cfg.get("threshold", DEFAULT_THRESHOLD)
        ),
    )

    formatting = FormattingConfig(
        columns=_as_list(formatting_cfg.get("columns")),
        options=FormatTextOptions.from_mapping(formatting_cfg.get("options", {}) or {}),
    )

    arg_level = getattr(args, "log_level", None)
    effective_level = (arg_level or logging_cfg.get("level") or "WARNING").upper()
    logging_config = LoggingConfig(level=effective_level)

    resolved_inputs = {
        "input_csv": getattr(args, "input_csv", None) or inputs.get("input_csv"),
        "header_starts_with": getattr(args, "header_starts_with", None)
        or inputs.get("header_starts_with"),
    }

    return PipelineConfig(
        inputs=resolved_inputs,
        outputs=outputs,
        normalization=normalization,
        dedupe=dedupe,
        formatting=formatting,
        logging=logging_config,
    )
