"""Logging configuration for the command line entry point.

Library modules only create module loggers. Handlers are installed here,
once, by the CLI. Output goes to stderr so stdout stays free for reports.
"""
from __future__ import annotations

import logging
import os
from logging.config import dictConfig
from typing import Optional

LOG_LEVEL_ENV = "CHECKLIST_MODEL_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


def resolve_log_level(level: Optional[str] = None) -> str:
    """Explicit level, else the environment variable, else WARNING."""
    chosen = level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL
    chosen = chosen.upper()
    if not isinstance(logging.getLevelName(chosen), int):
        raise ValueError(f"Unknown log level: {chosen}")
    return chosen


def configure_logging(level: Optional[str] = None) -> None:
    """Configure logging once.

    If the root logger already has handlers, only the level is adjusted, to
    avoid duplicate output when called repeatedly (e.g. under test).
    """
    resolved = resolve_log_level(level)
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(resolved)
        return
    dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": "%(asctime)s %(levelname)s:%(name)s:%(message)s"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stderr",
            },
        },
        "root": {"level": resolved, "handlers": ["console"]},
    })
