import logging
import os
import sys

from pythonjsonlogger import jsonlogger

from chalet.core.config import settings

# Keys whose values must never reach log output
SENSITIVE_KEYS = (
    "password",
    "confirmpassword",
    "token",
    "access_token",
    "refresh_token",
    "authorization",
    "creditcard",
    "cvv",
    "card_number",
)

REDACTED = "[REDACTED]"

# Attributes every LogRecord has; anything else came in through `extra`
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime"}


def is_sensitive(key: str) -> bool:
    lowered = str(key).lower()
    return any(sensitive in lowered for sensitive in SENSITIVE_KEYS)


def redact(data):
    """Recursively mask sensitive keys in dicts and lists."""
    if isinstance(data, dict):
        return {
            key: REDACTED if is_sensitive(key) else redact(value)
            for key, value in data.items()
        }
    if isinstance(data, (list, tuple)):
        return [redact(item) for item in data]
    return data


class RedactingFilter(logging.Filter):
    """Scrubs `extra` context before any handler formats the record."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in list(record.__dict__.items()):
            if key in _RESERVED_ATTRS:
                continue
            if is_sensitive(key):
                setattr(record, key, REDACTED)
            else:
                setattr(record, key, redact(value))
        return True


def setup_logging() -> None:
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear existing handlers to avoid duplication
    root_logger.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RedactingFilter())

    if settings.log_format.lower() == "json":
        formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            json_ensure_ascii=False,
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Adjust external loggers
    logging.getLogger("uvicorn").setLevel(level)
    logging.getLogger("uvicorn.error").setLevel(level)
    logging.getLogger("uvicorn.access").setLevel(level)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
