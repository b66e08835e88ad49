"""Logging configuration"""

import logging
from logging.config import dictConfig
from typing import Any

from dockerflow import logging as dockerflow_logging

from linkmark.configs import settings

# Handler used by each `logging.format`.
FORMAT_HANDLERS: dict[str, dict[str, Any]] = {
    "mozlog": {
        "class": "logging.StreamHandler",
        "formatter": "mozlog",
        "stream": "ext://sys.stdout",
    },
    "pretty": {
        "class": "rich.logging.RichHandler",
        "formatter": "text",
        "rich_tracebacks": True,
    },
}

# A resolution sends up to a dozen requests and httpx logs each one at INFO.
QUIET_LOGGERS: tuple[str, ...] = ("httpx", "httpcore", "hpack")


def configure_logging() -> None:
    """Route the `linkmark` loggers to MozLog JSON lines or to a rich console."""
    log_format = settings.logging.format
    if log_format not in FORMAT_HANDLERS:
        raise ValueError(
            f"Invalid log format: {log_format}. Should either be 'mozlog' or 'pretty'."
        )
    if settings.current_env.lower() == "production" and log_format != "mozlog":
        raise ValueError("Log format must be 'mozlog' in production")

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "text": {"format": "%(message)s"},
                "mozlog": {"()": MozLogFormatter, "logger_name": "linkmark"},
            },
            "handlers": {
                "console": {"level": settings.logging.level, **FORMAT_HANDLERS[log_format]},
            },
            "loggers": {
                "linkmark": {
                    "handlers": ["console"],
                    "level": settings.logging.level,
                    "propagate": settings.logging.can_propagate,
                },
                **{name: {"level": "WARNING"} for name in QUIET_LOGGERS},
            },
        }
    )


class MozLogFormatter(dockerflow_logging.JsonLogFormatter):
    """MozLog JSON with the numeric `severity` expected by GCP log ingestion."""

    def convert_record(self, record: logging.LogRecord) -> dict[str, Any]:
        """Add `severity` next to MozLog's own `Severity`."""
        out = super().convert_record(record)
        out["severity"] = {
            logging.CRITICAL: 600,
            logging.ERROR: 500,
            logging.WARNING: 400,
            logging.INFO: 200,
            logging.DEBUG: 100,
        }.get(record.levelno, 0)
        return out
