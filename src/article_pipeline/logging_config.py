"""Structured JSON logging configuration.

Configures Python stdlib logging to emit one JSON object per record with
`severity`, `timestamp`, and `logger` fields, which log collectors pick up
from stdout without extra parsing.

The pipeline itself only calls ``logging.getLogger(__name__)``; the host
application (HTTP handler, worker, script) calls ``configure_logging()`` once.

Usage:
    from article_pipeline.logging_config import configure_logging
    configure_logging()
"""

import copy
import logging
import logging.config

from article_pipeline.config import get_settings

LOGGING_CONFIG: dict = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(levelname)s %(name)s %(funcName)s %(message)s",
            "rename_fields": {
                "levelname": "severity",
                "asctime": "timestamp",
                "name": "logger",
            },
            "static_fields": {
                "service": "article-pipeline",
            },
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "stream": "ext://sys.stdout",
        },
    },
    "root": {
        "level": "INFO",
        "handlers": ["console"],
    },
}


def configure_logging(level: str | None = None) -> None:
    """Apply structured JSON logging configuration.

    The root level defaults to ``Settings.log_level`` (ARTICLE_PIPELINE_LOG_LEVEL).
    """
    config = copy.deepcopy(LOGGING_CONFIG)
    config["root"]["level"] = (level or get_settings().log_level).upper()
    logging.config.dictConfig(config)
