"""
Console output helpers.

Thin wrappers over the ``stereonix`` logger so processors and the CLI
report progress and problems the same way.
"""

import logging
import sys

LOGGER_NAME = "stereonix"

logger = logging.getLogger(LOGGER_NAME)


def configure_console(verbose: bool = False) -> None:
    """
    Attach a plain stderr handler to the package logger.

    Args:
        verbose: Emit info-level messages when True, warnings and errors otherwise
    """
    if not any(getattr(h, "_stereonix_console", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler._stereonix_console = True
        logger.addHandler(handler)
    logger.setLevel(logging.INFO if verbose else logging.WARNING)
    logger.propagate = False


def info(message: str) -> None:
    logger.info(message)


def success(message: str) -> None:
    logger.info(f"✅ {message}")


def warning(message: str) -> None:
    logger.warning(f"Warning: {message}")


def error(message: str) -> None:
    logger.error(f"❌ {message}")
