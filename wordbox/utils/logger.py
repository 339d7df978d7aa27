"""Logging setup shared by the CLI and the search engine."""

from __future__ import annotations

import logging
from typing import Optional, TextIO

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(threadName)s | %(name)s | %(message)s"


def configure_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> None:
    """Install a single root handler writing to ``stream`` (stderr by default).

    Node visits are far too frequent to log; the engine reports dictionary
    size, seed counts and the final search outcome. The thread name is part
    of the format so fan-out workers can be told apart.
    """

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or "wordbox")
