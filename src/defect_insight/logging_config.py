"""
Logging for the defect-insight CLI and HTTP server.

Verdicts, tables and JSON/CSV exports go to stdout through the CLI's own
consoles. Log records (rule firings at DEBUG, skipped persistence at WARNING,
failed downloads) go to stderr through a rich handler, and optionally to a
plain-text file for unattended batch runs.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "defect_insight"

LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

# Chatty libraries pulled in by `batch --url` and `serve`
_NOISY_LOGGERS = ("urllib3", "requests", "uvicorn.access")

_FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbosity: str = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Install the stderr (and optional file) handlers for a CLI or server run.

    Args:
        verbosity: ``quiet`` (errors only), ``normal`` (warnings, e.g. a
            result that could not be stored) or ``verbose`` (every rule
            evaluation, with source paths and tracebacks with locals)
        log_file: Append plain-text records here as well

    Returns:
        The ``defect_insight`` package logger
    """
    level = LEVELS.get(verbosity, logging.WARNING)
    verbose = level == logging.DEBUG

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            # Reasons like "(vg > 10)" contain brackets rich would eat as markup
            markup=False,
            show_time=True,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    # force: the CLI may be invoked repeatedly in one process (tests, serve reloads)
    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the ``defect_insight`` namespace (``get_logger(__name__)``)."""
    if name is None:
        return logging.getLogger(ROOT_LOGGER)
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
