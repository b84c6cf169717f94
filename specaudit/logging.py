"""Logging setup shared by the CLI and the service."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

ROOT_LOGGER = "specaudit"
CONSOLE_FORMAT = "[specaudit] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(component: Optional[str] = None) -> logging.Logger:
    """Return the logger for a pipeline component, e.g. ``get_logger("engine")``."""
    if not component:
        return logging.getLogger(ROOT_LOGGER)
    return logging.getLogger(f"{ROOT_LOGGER}.{component}")


def _console_level(verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def _with_format(handler: logging.Handler, fmt: str, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
) -> logging.Logger:
    """Send specaudit records to stderr and, when given, to ``log_file``.

    ``quiet`` keeps only warnings on the console so machine-readable output is
    not interleaved with progress lines; ``verbose`` takes precedence. The log
    file always receives debug records. Handlers from an earlier call are
    closed and replaced.
    """
    console_level = _console_level(verbose, quiet)
    logger = get_logger()
    logger.setLevel(logging.DEBUG if log_file is not None else console_level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(_with_format(logging.StreamHandler(), CONSOLE_FORMAT, console_level))
    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        logger.addHandler(_with_format(file_handler, FILE_FORMAT, logging.DEBUG))

    return logger


__all__ = ["configure_logging", "get_logger"]
