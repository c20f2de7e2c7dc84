from __future__ import annotations

import logging
import os
from typing import Optional

from .config_loader import PipelineConfig

LOG_LEVEL_ENV_VAR = "DATA_CLEANER_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DEFAULT_LEVEL = "WARNING"


def level_from_name(name: Optional[str], fallback: int = logging.INFO) -> int:
    """Map ``"debug"``, ``"10"`` and the like to a numeric level; unknown names give ``fallback``."""
    text = (name or "").strip().upper()
    if not text:
        return fallback
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text)
    return level if isinstance(level, int) else fallback


def effective_level_name(config: PipelineConfig, level_override: Optional[str] = None) -> str:
    for candidate in (os.getenv(LOG_LEVEL_ENV_VAR), level_override, config.logging.level):
        if candidate and candidate.strip():
            return candidate.strip().upper()
    return DEFAULT_LEVEL


def configure_logging(config: PipelineConfig, level_override: Optional[str] = None) -> int:
    """
    Set the root logger level and return it.

    ``DATA_CLEANER_LOG_LEVEL`` wins over ``level_override`` (the CLI flag),
    which wins over ``logging.level`` from the YAML config.
    """
    level_value = level_from_name(effective_level_name(config, level_override))

    root_logger = logging.getLogger()
    if root_logger.handlers:
        root_logger.setLevel(level_value)
    else:
        logging.basicConfig(level=level_value, format=LOG_FORMAT)
    logging.getLogger(__name__).debug("Logging level set to %s", logging.getLevelName(level_value))
    return level_value
