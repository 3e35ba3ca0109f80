"""
Logging utilities.

Loggers live under the ``fdm_schemes`` namespace, write to stderr and are
cached so repeated calls never stack handlers.
"""

import logging
import sys
from typing import Optional, Union

_DEFAULT_LEVEL = logging.WARNING
_FORMAT = '[%(levelname)s] %(name)s: %(message)s'

_loggers: dict[str, logging.Logger] = {}


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get or create a logger for the given module name.

    Args:
        name: Logger name, typically ``__name__``. Names outside the
            ``fdm_schemes`` namespace are prefixed with it.

    Returns:
        Configured logger instance.
    """
    if name is None:
        name = "fdm_schemes"
    logger_name = name if name.startswith("fdm_schemes") else f"fdm_schemes.{name}"

    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)
    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(_DEFAULT_LEVEL)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def _as_level(level: Union[int, str]) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def configure_logging(
    level: Union[int, str] = logging.WARNING,
    stream: Optional[object] = None,
) -> None:
    """
    Replace the handlers of all package loggers.

    Args:
        level: Logging level (default: WARNING).
        stream: Output stream (default: sys.stderr).
    """
    global _DEFAULT_LEVEL
    level = _as_level(level)
    formatter = logging.Formatter(_FORMAT)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    _DEFAULT_LEVEL = level
