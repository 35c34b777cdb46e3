"""
Logging utilities for dualfallback

All package loggers live under the ``dualfallback`` namespace and write
``[LEVEL] name: message`` lines to stderr.
"""

import logging
import sys
from typing import Dict, Optional, Union

_DEFAULT_LEVEL = logging.WARNING
_FORMAT = '[%(levelname)s] %(name)s: %(message)s'

_loggers: Dict[str, logging.Logger] = {}


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get or create a logger for the given module name.

    Loggers are cached so a logger never gets two handlers.

    Parameters
    ----------
    name : str, optional
        Logger name, typically ``__name__`` (default: the package logger)

    Returns
    -------
    logging.Logger
        Configured logger instance
    """
    if name is None:
        name = "dualfallback"
    logger_name = name if name.startswith("dualfallback") else f"dualfallback.{name}"

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


def set_log_level(level: Union[int, str]) -> None:
    """Set the logging level (``logging.DEBUG``, ... or its name) of all dualfallback loggers"""
    global _DEFAULT_LEVEL
    level = _as_level(level)
    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
    _DEFAULT_LEVEL = level


def configure_logging(
    level: Union[int, str] = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[object] = None,
) -> None:
    """
    Replace the handlers of all dualfallback loggers.

    Parameters
    ----------
    level : int or str, optional
        Logging level (default: WARNING)
    format_string : str, optional
        Format of the records (default: ``[LEVEL] name: message``)
    stream : file-like, optional
        Output stream (default: sys.stderr)
    """
    global _DEFAULT_LEVEL
    level = _as_level(level)
    formatter = logging.Formatter(format_string or _FORMAT)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    _DEFAULT_LEVEL = level
