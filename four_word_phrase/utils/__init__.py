"""Utility helpers shared across the :mod:`four_word_phrase` package."""

from __future__ import annotations

from .logging_config import configure_logging
from .observability import (
    StructuredLoggerAdapter,
    add_span_attributes,
    create_counter,
    create_histogram,
    get_logger,
    record_exception,
    start_span,
    timed,
)

__all__ = [
    "configure_logging",
    "StructuredLoggerAdapter",
    "add_span_attributes",
    "create_counter",
    "create_histogram",
    "get_logger",
    "record_exception",
    "start_span",
    "timed",
]
