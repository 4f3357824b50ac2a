# userdemo\shared\telemetry.py
from typing import Optional

import structlog
from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

from userdemo import __version__
from userdemo.shared.config import settings

logger = structlog.get_logger()

# Comma-separated, matched against the request path
EXCLUDED_URLS = "health/live,health/ready"

_provider: Optional[TracerProvider] = None


def setup_telemetry(service_name: str = settings.OTEL_SERVICE_NAME) -> bool:
    """
    Installs a tracer provider exporting spans over OTLP/HTTP.

    Only runs when OTEL_EXPORTER_OTLP_ENDPOINT is configured, and only once
    per process. Returns True if a provider is installed.
    """
    global _provider

    if not settings.OTEL_EXPORTER_OTLP_ENDPOINT:
        logger.info("telemetry_disabled", reason="no OTEL_EXPORTER_OTLP_ENDPOINT")
        return False
    if _provider is not None:
        return True

    resource = Resource.create(attributes={
        "service.name": service_name,
        "service.version": __version__,
        "deployment.environment": settings.APP_ENV.value,
    })
    sampler = ParentBased(TraceIdRatioBased(settings.OTEL_TRACES_SAMPLE_RATIO))
    provider = TracerProvider(resource=resource, sampler=sampler)

    endpoint = settings.OTEL_EXPORTER_OTLP_ENDPOINT.rstrip("/") + "/v1/traces"
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint)))
    if settings.DEBUG:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    _provider = provider
    logger.info("telemetry_init", service=service_name, endpoint=endpoint, sample_ratio=settings.OTEL_TRACES_SAMPLE_RATIO)
    return True


def shutdown_telemetry() -> None:
    """Flushes pending spans. Safe to call when telemetry is disabled."""
    if _provider is not None:
        _provider.shutdown()


def instrument_fastapi(app: FastAPI) -> None:
    """Traces incoming requests, except the health probes."""
    if settings.OTEL_EXPORTER_OTLP_ENDPOINT:
        FastAPIInstrumentor.instrument_app(app, excluded_urls=EXCLUDED_URLS)


def get_tracer(name: str) -> trace.Tracer:
    return trace.get_tracer(name, __version__)
