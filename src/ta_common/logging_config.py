"""Logging setup via dictConfig.

Call setup_logging() once at startup; modules then use named loggers:
    logger = logging.getLogger(__name__)
"""

import logging
import logging.config
from typing import Any

from config.settings import settings

_DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def get_logging_config_dict(level: str | None = None) -> dict[str, Any]:
    log_level = (level or settings.LOG_LEVEL).upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": _DEFAULT_FORMAT,
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": log_level,
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
        },
        "root": {"level": log_level, "handlers": ["console"]},
        "loggers": {
            # httpx logs every request at INFO; the backend client logs its own
            "httpx": {"level": "WARNING"},
        },
    }


def setup_logging(level: str | None = None) -> None:
    config_dict = get_logging_config_dict(level)
    logging.config.dictConfig(config_dict)
    logging.getLogger("ta").debug("Logging initialized at %s", config_dict["root"]["level"])
