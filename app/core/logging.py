"""
Logging configuration
"""

import logging
import logging.config

from .config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

def setup_logging(level: str = None) -> None:
    """Configure root logging once at startup"""
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": LOG_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
            },
        },
        "root": {
            "handlers": ["console"],
            "level": (level or settings.LOG_LEVEL).upper(),
        },
        "loggers": {
            "uvicorn.access": {"level": "WARNING"},
        },
    })

def mask_token(token: str) -> str:
    """Shorten a session token for log output"""
    if not token:
        return "missing"
    return f"{token[:8]}..."
