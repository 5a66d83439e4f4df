"""Logging configuration for entity_codegen.

Usage in any module:
    from .logging_config import get_logger
    logger = get_logger(__name__)

Every logger lives under the ``entity_codegen`` hierarchy. Levels are
controlled by the CLI through :func:`configure_logging`.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "entity_codegen"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the entity_codegen hierarchy.

    Args:
        name: Module ``__name__``, or None for the package logger.

    Returns:
        logging.Logger instance.
    """
    if not name or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def configure_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Configure the entity_codegen logger hierarchy.

    Levels:
        --verbose -> DEBUG
        (default) -> INFO
        --quiet   -> WARNING

    Calling this more than once only adjusts the level.

    Args:
        verbose: Enable DEBUG-level output.
        quiet: Only report warnings and errors.

    Returns:
        The package logger.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=verbose,
            rich_tracebacks=True,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        logger.addHandler(handler)
        # Keep generator output off the root logger
        logger.propagate = False

    for handler in logger.handlers:
        handler.setLevel(level)

    return logger
