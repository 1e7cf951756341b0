"""Logging for invoicelines.

Every module logs under the "invoicelines" namespace. Runtime, application
and CLI modules call get_logger(__name__); the pure extraction package uses
plain logging.getLogger(__name__), which lands in the same tree because its
module names already start with the namespace.

Environment variables:
    INVOICELINES_LOG_LEVEL: DEBUG, INFO, WARNING or ERROR. Default: INFO
"""

import logging
import os
import sys

LOG_NAMESPACE = "invoicelines"
LOG_LEVEL_ENV = "INVOICELINES_LOG_LEVEL"
DEFAULT_LOG_LEVEL = logging.INFO

LOG_FORMAT = "%(levelname)s [%(name)s] %(message)s"
# Debug output adds the line number; pattern tracing is easier to follow
LOG_FORMAT_DEBUG = "%(levelname)s [%(name)s:%(lineno)d] %(message)s"

_LEVEL_NAMES = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}

_handler: logging.Handler | None = None


def _level_from_environment() -> int:
    return _LEVEL_NAMES.get(os.environ.get(LOG_LEVEL_ENV, "").strip().upper(), DEFAULT_LOG_LEVEL)


def _formatter_for(level: int) -> logging.Formatter:
    return logging.Formatter(LOG_FORMAT_DEBUG if level <= logging.DEBUG else LOG_FORMAT)


def configure_logging(level: int | None = None) -> None:
    """Attach a stderr handler to the namespace logger, once per process.

    Args:
        level: Explicit level; None reads INVOICELINES_LOG_LEVEL.
    """
    global _handler

    if _handler is not None:
        return

    if level is None:
        level = _level_from_environment()

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(_formatter_for(level))

    namespace_logger = logging.getLogger(LOG_NAMESPACE)
    namespace_logger.setLevel(level)
    namespace_logger.addHandler(_handler)
    namespace_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module, placed under the invoicelines namespace."""
    configure_logging()

    if name == LOG_NAMESPACE or name.startswith(f"{LOG_NAMESPACE}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOG_NAMESPACE}.{name}")


def set_log_level(level: int) -> None:
    """Change the namespace level at runtime; the debug format follows the level."""
    logging.getLogger(LOG_NAMESPACE).setLevel(level)
    if _handler is not None:
        _handler.setFormatter(_formatter_for(level))
