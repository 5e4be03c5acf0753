"""Logging setup for TraceQuery.

Every module logs through a child of the ``tracequery`` logger obtained with
`get_logger(__name__)`. The package logger owns a single stderr handler;
query answers are printed on stdout, so the two never interleave. The CLI
picks the level once per invocation with `configure_logging`.
"""

import logging
import sys
from typing import Optional, TextIO

ROOT_LOGGER_NAME = "tracequery"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Marks the handler installed by this module so it is never added twice
_HANDLER_NAME = "tracequery-stderr"


def _package_logger() -> logging.Logger:
    return logging.getLogger(ROOT_LOGGER_NAME)


def install_handler(
    stream: Optional[TextIO] = None, format_string: str = DEFAULT_FORMAT
) -> logging.Handler:
    """Attach the package handler, replacing a previously installed one.

    Handlers added by other code (for example pytest's capture) are kept.

    Args:
        stream: Destination stream (default: ``sys.stderr``).
        format_string: Record format.

    Returns:
        The installed handler.
    """
    root_logger = _package_logger()
    for existing in list(root_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr if stream is None else stream)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(format_string))
    root_logger.addHandler(handler)
    root_logger.propagate = True
    return handler


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``tracequery`` hierarchy.

    Args:
        name: Logger name (typically __name__ from calling module).
    """
    root_logger = _package_logger()
    if not any(h.get_name() == _HANDLER_NAME for h in root_logger.handlers):
        install_handler()
        if root_logger.level == logging.NOTSET:
            root_logger.setLevel(logging.INFO)
    return logging.getLogger(name)


def set_global_log_level(level: int) -> None:
    """Set the level of the package logger and its handlers."""
    root_logger = _package_logger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        if handler.get_name() == _HANDLER_NAME:
            handler.setLevel(level)


def configure_logging(verbose: bool = False, quiet: bool = False) -> int:
    """Apply the CLI verbosity flags.

    ``verbose`` wins over ``quiet``: DEBUG, then WARNING, otherwise INFO.

    Returns:
        The level that was set.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    set_global_log_level(level)
    return level
