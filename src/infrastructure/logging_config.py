"""Process-wide logging setup.

Modules log through ``logging.getLogger(__name__)``; this only decides where
records go and at which level.  Call once at application start.
"""

from __future__ import annotations

import logging.config

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_logging_config(level: str) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": LOG_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "src": {"level": level, "handlers": ["console"], "propagate": False},
            "sqlalchemy.engine": {"level": "WARNING", "handlers": ["console"], "propagate": False},
        },
    }


def configure_logging(level: str | None = None) -> None:
    """Apply the logging config; defaults to Settings.log_level."""
    if level is None:
        from src.infrastructure.database import settings

        level = settings.log_level
    logging.config.dictConfig(build_logging_config(level.upper()))
