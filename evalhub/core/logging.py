"""Logging setup."""
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_FORMAT_DEBUG = "%(asctime)s %(levelname)s [%(name)s] %(message)s - %(pathname)s:%(lineno)d"

_VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def configure_logging(log_level: str = "INFO") -> None:
    """Configure root logging once. Unknown levels fall back to INFO."""
    level = str(log_level).upper()
    if level not in _VALID_LEVELS:
        level = "INFO"

    fmt = LOG_FORMAT_DEBUG if level == "DEBUG" else LOG_FORMAT
    logging.basicConfig(level=getattr(logging, level), format=fmt)
