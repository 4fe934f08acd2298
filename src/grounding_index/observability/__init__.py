"""Observability module: structured logging, OpenTelemetry spans, Prometheus metrics."""

from grounding_index.observability.logging import JsonFormatter, configure_logging
from grounding_index.observability.metrics import (
    BUILD_LATENCY,
    INDEXED_DOCUMENTS,
    SEARCH_LATENCY,
    STATE_IMPORT_FAILURES,
    get_metrics,
    track_latency,
)
from grounding_index.observability.tracing import create_span, get_trace_context, get_tracer, init_tracing


__all__ = [
    "BUILD_LATENCY",
    "INDEXED_DOCUMENTS",
    "SEARCH_LATENCY",
    "STATE_IMPORT_FAILURES",
    "JsonFormatter",
    "configure_logging",
    "create_span",
    "get_metrics",
    "get_trace_context",
    "get_tracer",
    "init_tracing",
    "track_latency",
]
