import logging
import logging.config
import os

from pricecast.config import Settings


def build_logging_config(log_path: str) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "level": "INFO",
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "filename": log_path,
                "maxBytes": 10_485_760,
                "backupCount": 5,
                "formatter": "standard",
                "level": "DEBUG",
            },
        },
        "root": {
            "level": "INFO",
            "handlers": ["console", "file"],
        },
    }


def setup_logging(settings: Settings | None = None):
    settings = settings or Settings()
    os.makedirs(settings.log_dir, exist_ok=True)
    logging.config.dictConfig(
        build_logging_config(os.path.join(settings.log_dir, settings.log_file))
    )
