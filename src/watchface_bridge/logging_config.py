"""Centralized logging configuration."""

import logging.config
from typing import Any, Dict

from watchface_bridge.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Libraries that install their own handlers; routed to ours without propagating
THIRD_PARTY_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error", "httpx", "fastapi")


def build_logging_config(level: str = LOG_LEVEL) -> Dict[str, Any]:
    """Build a dictConfig schema with a single console handler.

    Args:
        level: Level name applied to the root and library loggers

    Returns:
        Mapping accepted by logging.config.dictConfig
    """
    library_logger = {"level": level, "handlers": ["console"], "propagate": False}
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"format": LOG_FORMAT, "datefmt": DATE_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "standard",
            },
        },
        "root": {"level": level, "handlers": ["console"]},
        "loggers": {name: dict(library_logger) for name in THIRD_PARTY_LOGGERS},
    }


def configure_logging(level: str = LOG_LEVEL):
    """Apply the application's logging setup. Safe to call more than once."""
    logging.config.dictConfig(build_logging_config(level))
