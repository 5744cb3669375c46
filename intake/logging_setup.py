"""Process-wide logging for the intake wizard.

Everything goes to stdout through one handler configured with dictConfig.
Wizard modules log `key=value` style messages (`page_saved application_id=...`);
the level comes from LOG_LEVEL and defaults to INFO.
"""

from __future__ import annotations

import logging
import os
from logging.config import dictConfig
from typing import Any, Dict, Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def build_logging_config(level: str = "INFO") -> Dict[str, Any]:
    stdout = {"level": level, "handlers": ["stdout"], "propagate": False}
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"wizard": {"format": LOG_FORMAT}},
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": "wizard",
                "stream": "ext://sys.stdout",
            }
        },
        "root": {"level": level, "handlers": ["stdout"]},
        "loggers": {
            "intake": {"level": level},
            "uvicorn.error": stdout,
            "uvicorn.access": stdout,
            # one line per upstream call is too chatty at INFO
            "httpx": {"level": "WARNING", "handlers": ["stdout"], "propagate": False},
        },
    }


def configure_logging(level: Optional[str] = None) -> None:
    """Install the stdout handler unless something (pytest, a reloader) already did."""
    if logging.getLogger().handlers:
        return
    dictConfig(build_logging_config((level or os.getenv("LOG_LEVEL") or "INFO").upper()))


__all__ = ["configure_logging", "build_logging_config", "LOG_FORMAT"]
