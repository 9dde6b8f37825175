#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcard/utils/decorators.py
"""Timing helper used around card rendering."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Generator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Log how long the enclosed block took, at DEBUG level.

    Nothing is measured unless ``logger`` has DEBUG enabled. The elapsed
    time is logged even when the block raises, so a failed render still
    shows how far it got.

    Parameters
    ----------
    logger : logging.Logger
        Logger that receives the timing record.
    operation : str
        Label for the timed block, e.g. ``"Rendering book card"``.

    Examples
    --------
        >>> with debug_timer(logging.getLogger("mdcard"), "Rendering card"):
        ...     image = render_card("Q", "A")

    """
    if not logger.isEnabledFor(logging.DEBUG):
        yield
        return

    started = time.perf_counter()
    outcome = "failed"
    try:
        yield
        outcome = "completed"
    finally:
        logger.debug("%s %s in %.3fs", operation, outcome, time.perf_counter() - started)
