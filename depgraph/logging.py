"""Logger hierarchy and handler setup for depgraph.

Every component logs below the ``depgraph`` logger: ``depgraph.pipeline`` for
the conversion facade and ``depgraph.converters.<name>`` for each converter.
References a converter cannot resolve are reported at the ``SKIP`` level,
between DEBUG and INFO, so ``--verbose`` surfaces them while a normal run
only prints the per-conversion summary.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

ROOT_LOGGER = "depgraph"

SKIPPED = 15
logging.addLevelName(SKIPPED, "SKIP")


class ScopedFormatter(logging.Formatter):
    """Console format that names the emitting component relative to ``depgraph``."""

    def __init__(self) -> None:
        super().__init__("[%(scope)s] %(levelname)s %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        scope = ROOT_LOGGER
        if record.name.startswith(f"{ROOT_LOGGER}."):
            scope = f"{ROOT_LOGGER} {record.name[len(ROOT_LOGGER) + 1:]}"
        record.scope = scope
        return super().format(record)


def get_logger(name: str | None = None) -> logging.Logger:
    full_name = f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER
    return logging.getLogger(full_name)


def converter_logger(converter_name: str) -> logging.Logger:
    return get_logger(f"converters.{converter_name}")


def log_skipped(logger: logging.Logger, kind: str, source: str, reference: Optional[str]) -> None:
    """Report a relationship dropped because its target is not a node of the graph."""
    logger.log(SKIPPED, "%s edge from %s dropped: '%s' is not in the graph", kind, source, reference)


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Attach console (and optional file) handlers to the ``depgraph`` logger.

    Output goes to stderr by default so graph JSON written to stdout stays
    clean. Calling this again replaces and closes the previous handlers.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console.setLevel(level)
    console.setFormatter(ScopedFormatter())
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        # The file keeps skipped references even without --verbose.
        file_handler.setLevel(min(level, SKIPPED))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)
        logger.setLevel(min(level, SKIPPED))

    return logger


__all__ = [
    "ROOT_LOGGER",
    "SKIPPED",
    "ScopedFormatter",
    "configure_logging",
    "converter_logger",
    "get_logger",
    "log_skipped",
]
