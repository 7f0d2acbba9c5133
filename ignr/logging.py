"""Logging utilities for ignr commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "ignr"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the ignr hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def level_for(verbose: int = 0, *, quiet: bool = False, debug: bool = False) -> int:
    """Map CLI verbosity flags onto a logging level."""
    if debug:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    if verbose <= 0:
        return logging.WARNING
    if verbose == 1:
        return logging.INFO
    return logging.DEBUG


def configure_logging(
    *,
    verbose: int = 0,
    quiet: bool = False,
    debug: bool = False,
    log_file: Path | None = None,
) -> logging.Logger:
    """Attach console (and optional file) handlers to the ``ignr`` logger.

    The console honours ``verbose``/``quiet``; a log file always receives
    DEBUG records so a failed run can be inspected afterwards.
    """
    console_level = level_for(verbose, quiet=quiet, debug=debug)
    logger = logging.getLogger(_LOGGER_NAME)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter("[ignr] %(levelname)s %(message)s"))
    logger.addHandler(console)

    if log_file is None:
        logger.setLevel(console_level)
        return logger

    log_file.parent.mkdir(parents=True, exist_ok=True)
    sink = logging.FileHandler(log_file, encoding="utf-8")
    sink.setLevel(logging.DEBUG)
    sink.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(sink)
    logger.setLevel(logging.DEBUG)
    return logger


__all__ = ["configure_logging", "get_logger", "level_for"]
