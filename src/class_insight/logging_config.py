"""
Logging configuration for Class Insight.

All loggers live under the ``class_insight`` namespace. Handlers are
attached to that package logger, never to the root logger, so embedding
applications keep control of their own logging.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "class_insight"

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

VERBOSITY_LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

# Marks handlers installed here so a second setup call replaces them.
_OWNED = "_class_insight_handler"


def resolve_level(verbose: bool = False, quiet: bool = False) -> int:
    """Quiet beats verbose; neither gives WARNING."""
    if quiet:
        return VERBOSITY_LEVELS["quiet"]
    if verbose:
        return VERBOSITY_LEVELS["verbose"]
    return VERBOSITY_LEVELS["normal"]


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure the class_insight logger with a rich stderr handler.

    Args:
        verbose: DEBUG level, with source paths and traceback locals
        quiet: ERROR level only
        log_file: Optional file that also receives every record

    Returns:
        The configured class_insight logger
    """
    level = resolve_level(verbose, quiet)
    logger = logging.getLogger(ROOT_LOGGER)

    for handler in [h for h in logger.handlers if getattr(h, _OWNED, False)]:
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=True,
            show_path=verbose,
        )
    ]
    handlers[0].setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    for handler in handlers:
        setattr(handler, _OWNED, True)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


def setup_logging_for(verbosity: str, log_file: Optional[str] = None) -> logging.Logger:
    """Configure logging from an ``AnalysisConfig.verbosity`` value."""
    if verbosity not in VERBOSITY_LEVELS:
        raise ValueError(f"unknown verbosity {verbosity!r}")
    return setup_logging(
        verbose=verbosity == "verbose", quiet=verbosity == "quiet", log_file=log_file
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under the class_insight namespace.

    ``get_logger("graph.builder")`` and ``get_logger("class_insight.graph.builder")``
    return the same logger.
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)

    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
