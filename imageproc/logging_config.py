import logging
from logging.config import dictConfig

LOG_FORMAT = "%(asctime)s %(levelname)-5s [pid:%(process)d] %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    level = level.upper()
    if level not in logging.getLevelNamesMapping():
        level = "INFO"

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "plain": {
                    "format": LOG_FORMAT,
                    "datefmt": "%Y-%m-%dT%H:%M:%S",
                },
            },
            "handlers": {
                "stream": {
                    "class": "logging.StreamHandler",
                    "level": level,
                    "formatter": "plain",
                }
            },
            "root": {
                "level": level,
                "handlers": ["stream"],
            },
            # uvicorn loggers bubble up to the root handler
            "loggers": {
                "uvicorn": {"level": "INFO", "handlers": [], "propagate": True},
                "uvicorn.error": {"level": "INFO", "handlers": [], "propagate": True},
                "uvicorn.access": {"level": "INFO", "handlers": [], "propagate": True},
            },
        }
    )
