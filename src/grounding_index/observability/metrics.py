"""Prometheus metrics for index builds and queries."""

from __future__ import annotations

from contextlib import contextmanager
import time
from typing import TYPE_CHECKING

from prometheus_client import Counter, Gauge, Histogram, generate_latest


if TYPE_CHECKING:
    from collections.abc import Generator


BUILD_LATENCY = Histogram(
    "grounding_index_build_seconds",
    "Time spent rebuilding the index",
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0),
)

SEARCH_LATENCY = Histogram(
    "grounding_index_search_seconds",
    "Search query latency",
    buckets=(0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1),
)

INDEXED_DOCUMENTS = Gauge(
    "grounding_index_documents",
    "Documents in the published snapshot",
    ["kind"],
)

STATE_IMPORT_FAILURES = Counter(
    "grounding_index_state_import_failures_total",
    "Index state payloads rejected on import",
)


@contextmanager
def track_latency(histogram: Histogram) -> Generator[None, None, None]:
    """Context manager to track operation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        histogram.observe(time.perf_counter() - start)


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()
