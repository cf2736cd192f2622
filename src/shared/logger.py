"""Logging setup shared by the console and the monitor thread."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(threadName)s | %(name)s | %(message)s"


def setup_logging(level: str = "INFO", stream=None) -> None:
    """Configure the root logger with a compact format.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR).
        stream: Target stream; stderr by default so log lines never mix
            with console output on stdout.
    """
    numeric = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        stream=stream or sys.stderr,
        force=True,
    )
