"""Logging configuration for tidydisk."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "tidydisk"


def log_level(verbose: bool = False, quiet: bool = False) -> int:
    """Pick a level from the CLI flags; verbose wins over quiet."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.INFO


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    silent: bool = False,
) -> logging.Logger:
    """
    Configure logging for the ``tidydisk`` package.

    Args:
        verbose: Log at DEBUG
        quiet: Log errors only
        silent: Emit nothing; used while the TUI owns the terminal

    Returns:
        The package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    if silent:
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.CRITICAL + 1)
        logger.propagate = False
        return logger

    level = log_level(verbose, quiet)
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=True,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
