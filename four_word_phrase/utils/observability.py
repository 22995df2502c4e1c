"""Observability helpers shared by the tokenizer, generator and services.

Logging goes through :class:`StructuredLoggerAdapter` so every component can
bind its own context.  Metrics are Prometheus collectors and spans come from
the OpenTelemetry API, which is a no-op until an SDK is configured.
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, Optional

from opentelemetry import trace
from prometheus_client import REGISTRY, Counter, Histogram

_TRACER_NAME = "four_word_phrase"


class StructuredLoggerAdapter(logging.LoggerAdapter):
    """Adapter that renders bound and per-call context after the message."""

    def bind(self, **context: Any) -> "StructuredLoggerAdapter":
        merged = dict(self.extra)
        merged.update(context)
        return StructuredLoggerAdapter(self.logger, merged)

    def process(self, msg: str, kwargs: Dict[str, Any]):
        event_context: Dict[str, Any] = dict(self.extra)
        provided = kwargs.pop("context", None)
        if isinstance(provided, dict):
            event_context.update(provided)
        if event_context:
            try:
                payload = json.dumps(event_context, sort_keys=True, default=str)
            except TypeError:
                payload = json.dumps({str(k): str(v) for k, v in event_context.items()})
            msg = f"{msg} | {payload}"
        return msg, kwargs


def get_logger(name: str, **context: Any) -> StructuredLoggerAdapter:
    """Return a project logger with optional bound context."""

    return StructuredLoggerAdapter(logging.getLogger(name), context)


def _registered_collector(name: str) -> Any:
    # prometheus_client has no public lookup by name.
    return REGISTRY._names_to_collectors.get(name)  # type: ignore[attr-defined]


def create_counter(
    name: str,
    documentation: str,
    label_names: Optional[Iterable[str]] = None,
) -> Counter:
    """Create a counter, or return the one already registered as ``name``."""

    try:
        return Counter(name, documentation, labelnames=tuple(label_names or ()))
    except ValueError:
        existing = _registered_collector(name)
        if existing is None:
            raise
        return existing


def create_histogram(
    name: str,
    documentation: str,
    label_names: Optional[Iterable[str]] = None,
) -> Histogram:
    """Create a histogram, or return the one already registered as ``name``."""

    try:
        return Histogram(name, documentation, labelnames=tuple(label_names or ()))
    except ValueError:
        existing = _registered_collector(name)
        if existing is None:
            raise
        return existing


@contextmanager
def start_span(name: str, attributes: Optional[Dict[str, Any]] = None) -> Iterator[Any]:
    """Run the block inside an OpenTelemetry span named ``name``."""

    tracer = trace.get_tracer(_TRACER_NAME)
    with tracer.start_as_current_span(name) as span:
        if attributes:
            add_span_attributes(span, attributes)
        yield span


def add_span_attributes(span: Any, attributes: Dict[str, Any]) -> None:
    """Attach primitive ``attributes`` to ``span``."""

    if span is None:
        return
    for key, value in attributes.items():
        if not isinstance(key, str) or value is None:
            continue
        if not isinstance(value, (str, bool, int, float)):
            value = str(value)
        span.set_attribute(key, value)


def record_exception(span: Any, error: BaseException) -> None:
    """Mark ``span`` as failed with ``error``."""

    if span is None:
        return
    span.record_exception(error)
    span.set_attribute("error", True)


@contextmanager
def timed(histogram: Histogram) -> Iterator[None]:
    """Observe the wall-clock duration of the block on ``histogram``."""

    start = time.perf_counter()
    try:
        yield
    finally:
        histogram.observe(time.perf_counter() - start)


__all__ = [
    "StructuredLoggerAdapter",
    "get_logger",
    "create_counter",
    "create_histogram",
    "start_span",
    "add_span_attributes",
    "record_exception",
    "timed",
]
