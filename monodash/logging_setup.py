"""Logging configuration shared by the dashboard and the offline scripts."""

from __future__ import annotations

import logging
import logging.config
import os
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure logging from an INI file when LOGGING_CONFIG points at one.

    Falls back to ``logging.basicConfig`` at ``level`` (or ``LOG_LEVEL``).
    """
    config_env = os.getenv("LOGGING_CONFIG")
    if config_env:
        config_path = Path(config_env)
        if config_path.exists() and config_path.suffix.lower() in {".ini", ".cfg"}:
            logging.config.fileConfig(config_path, disable_existing_loggers=False)
            return
        logging.getLogger(__name__).warning(
            "Ignoring logging config %s; only existing .ini/.cfg files are supported.",
            config_path,
        )

    logging.basicConfig(
        level=(level or os.getenv("LOG_LEVEL", "INFO")).upper(),
        format=LOG_FORMAT,
    )
