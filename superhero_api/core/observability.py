"""OpenTelemetry tracing.

Incoming requests get a server span from the FastAPI instrumentation and
every store operation opens a child span through ``trace_operation``. Both
carry the request's correlation ID. Where spans end up depends on
``ObservabilityConfig.exporter_type``:

- ``console``: one Loguru debug record per span
- ``otlp``: an OTLP collector over gRPC
- ``none``: spans are recorded but not exported
"""

from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Final

from loguru import logger
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import ReadableSpan, TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    SpanExporter,
    SpanExportResult,
)
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased

from superhero_api.core.constants import NANOSECONDS_PER_MILLISECOND
from superhero_api.core.context import RequestContext

if TYPE_CHECKING:
    from collections.abc import Generator, Sequence

    from fastapi import FastAPI

    from superhero_api.core.config import Settings

DEFAULT_OTLP_ENDPOINT: Final[str] = "http://localhost:4317"
# Comma separated, as FastAPIInstrumentor expects
EXCLUDED_URLS: Final[str] = "/health,/docs,/redoc,/openapi.json"
CORRELATION_ATTRIBUTE: Final[str] = "correlation_id"
# Per-message ASGI spans, one pair per body chunk
SKIPPED_SPAN_NAMES: Final[frozenset[str]] = frozenset({"http send", "http receive"})


class LoguruSpanExporter(SpanExporter):
    """Write finished spans to the log at debug level."""

    def export(self, spans: Sequence[ReadableSpan]) -> SpanExportResult:
        for span in spans:
            context = span.get_span_context()
            if context is None or span.name in SKIPPED_SPAN_NAMES:
                continue

            attributes = dict(span.attributes or {})
            elapsed = None
            if span.start_time and span.end_time:
                elapsed = span.end_time - span.start_time
                elapsed //= NANOSECONDS_PER_MILLISECOND

            logger.bind(
                span_name=span.name,
                trace_id=f"0x{context.trace_id:032x}",
                span_id=f"0x{context.span_id:016x}",
                duration_ms=elapsed,
                status=span.status.status_code.name,
                correlation_id=attributes.pop(CORRELATION_ATTRIBUTE, None),
                attributes=attributes,
            ).debug("Span {} finished", span.name)

        return SpanExportResult.SUCCESS


def get_span_exporter(settings: Settings) -> SpanExporter | None:
    """Build the exporter named by the settings, or None for ``none``."""
    config = settings.observability_config
    match config.exporter_type:
        case "console":
            return LoguruSpanExporter()
        case "otlp":
            endpoint = config.exporter_endpoint or DEFAULT_OTLP_ENDPOINT
            logger.info("Exporting spans to {}", endpoint)
            # Plaintext gRPC only towards a local development collector
            return OTLPSpanExporter(
                endpoint=endpoint, insecure=settings.environment == "development"
            )
        case _:
            return None


@lru_cache(maxsize=1)
def get_tracer(name: str) -> trace.Tracer:
    return trace.get_tracer(name)


def setup_tracing(settings: Settings) -> None:
    """Install a global tracer provider for this service.

    Does nothing when tracing is disabled.
    """
    config = settings.observability_config
    if not config.enable_tracing:
        logger.debug("Tracing disabled")
        return

    provider = TracerProvider(
        resource=Resource.create(
            {
                "service.name": settings.app_name,
                "service.version": settings.app_version,
                "deployment.environment": settings.environment,
            }
        ),
        sampler=TraceIdRatioBased(config.trace_sample_rate),
    )
    if exporter := get_span_exporter(settings):
        provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)

    logger.info(
        "Tracing enabled",
        exporter_type=config.exporter_type,
        sample_rate=config.trace_sample_rate,
    )


def instrument_app(app: FastAPI, settings: Settings) -> None:
    """Open a server span for each request, except the excluded URLs."""
    if settings.observability_config.enable_tracing:
        FastAPIInstrumentor.instrument_app(
            app,
            excluded_urls=EXCLUDED_URLS,
            server_request_hook=add_correlation_id_to_span,
        )


def add_correlation_id_to_span(span: trace.Span, scope: dict[str, Any]) -> None:
    """Tag a server span with the request's correlation and request IDs.

    The instrumentation calls this before the middleware has run, so the
    request headers are the fallback when the context is still empty.
    """
    if not span or not span.is_recording():
        return

    headers = dict(scope.get("headers", []))
    correlation_id = RequestContext.get_correlation_id() or headers.get(
        b"x-correlation-id", b""
    ).decode()
    if correlation_id:
        span.set_attribute(CORRELATION_ATTRIBUTE, correlation_id)
    if request_id := headers.get(b"x-request-id", b"").decode():
        span.set_attribute("request_id", request_id)


@contextmanager
def trace_operation(
    name: str, **attributes: str | int | float | bool
) -> Generator[trace.Span]:
    """Run the enclosed block inside a span called ``name``.

    Example:
        >>> with trace_operation("superhero_store.get_by_id", superhero_id=2):
        ...     ...
    """
    with get_tracer(__name__).start_as_current_span(name) as span:
        span.set_attributes(attributes)
        if correlation_id := RequestContext.get_correlation_id():
            span.set_attribute(CORRELATION_ATTRIBUTE, correlation_id)
        yield span
