"""OpenTelemetry tracing helpers."""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
import logging
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.trace import Status, StatusCode


if TYPE_CHECKING:
    from collections.abc import Generator

    from opentelemetry.trace import Span, Tracer

logger = logging.getLogger(__name__)

SERVICE_NAME = "grounding-index"

# Fallback ids when no recording span is active
trace_context: ContextVar[dict[str, str] | None] = ContextVar("trace_context", default=None)

_tracer_holder: dict[str, Tracer | None] = {"tracer": None}


def init_tracing(
    service_name: str = SERVICE_NAME,
    resource_attributes: dict[str, str] | None = None,
) -> TracerProvider:
    """Install an SDK tracer provider for this process."""
    attributes = {"service.name": service_name}
    if resource_attributes:
        attributes.update(resource_attributes)
    provider = TracerProvider(resource=Resource.create(attributes))
    trace.set_tracer_provider(provider)
    _tracer_holder["tracer"] = trace.get_tracer(__name__)
    logger.debug("Tracing initialized for service: %s", service_name)
    return provider


def get_tracer() -> Tracer:
    """Return the package tracer; a no-op tracer until a provider is installed."""
    tracer = _tracer_holder["tracer"]
    if tracer is None:
        tracer = trace.get_tracer(__name__)
        _tracer_holder["tracer"] = tracer
    return tracer


def _span_ids(span: Span) -> dict[str, str] | None:
    ctx = span.get_span_context()
    if not ctx.is_valid:
        return None
    return {
        "trace_id": format(ctx.trace_id, "032x"),
        "span_id": format(ctx.span_id, "016x"),
    }


def get_trace_context() -> dict[str, str]:
    """Return trace/span ids for log correlation.

    Prefers the active OpenTelemetry span; otherwise falls back to ids kept
    in a context variable, generating them on first use.
    """
    ids = _span_ids(trace.get_current_span())
    if ids is not None:
        return ids
    ctx = trace_context.get()
    if ctx is None:
        ctx = {"trace_id": uuid4().hex, "span_id": uuid4().hex[:16]}
        trace_context.set(ctx)
    return ctx


@contextmanager
def create_span(name: str, **attributes: Any) -> Generator[Span, None, None]:
    """Start a span, recording an error status if the body raises."""
    with get_tracer().start_as_current_span(
        name, attributes=attributes, record_exception=False, set_status_on_exception=False
    ) as span:
        try:
            yield span
        except Exception as exc:
            span.set_status(Status(StatusCode.ERROR, str(exc)))
            span.record_exception(exc)
            raise
