"""Utility helpers shared across the :mod:`phrase_hunter` package."""

from __future__ import annotations

from .logging_config import configure_logging
from .telemetry import StructuredTelemetry, TelemetryLogger
from .observability import (
    StructuredLoggerAdapter,
    add_span_attributes,
    create_counter,
    create_histogram,
    get_logger,
    record_exception,
    start_span,
)

__all__ = [
    "configure_logging",
    "StructuredTelemetry",
    "TelemetryLogger",
    "StructuredLoggerAdapter",
    "add_span_attributes",
    "create_counter",
    "create_histogram",
    "get_logger",
    "record_exception",
    "start_span",
]
