from __future__ import annotations

import logging.config

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    normalized = (level or "INFO").strip().upper()
    if normalized not in logging.getLevelNamesMapping():
        normalized = "INFO"

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"default": {"format": LOG_FORMAT}},
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "loggers": {
                "app": {"level": normalized},
                "uvicorn.error": {"level": normalized},
            },
            "root": {"handlers": ["console"], "level": "WARNING"},
        }
    )
