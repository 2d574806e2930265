"""
OpenTelemetry Distributed Tracing

Configures the tracer provider and Django auto-instrumentation. Services open
custom spans through ``tracer`` / ``get_tracer``; when tracing is disabled the
OpenTelemetry API hands out no-op spans.
"""

import logging
from typing import Optional

from opentelemetry import trace
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

logger = logging.getLogger(__name__)

_tracer: Optional[trace.Tracer] = None
_initialized = False


def setup_tracing(service_name: str = "vendora-backend", console_export: bool = False, enable: bool = True) -> None:
    """
    Initialize OpenTelemetry tracing.

    Args:
        service_name: Name of the service for tracing
        console_export: Print finished spans to stdout
        enable: Enable/disable tracing
    """
    global _initialized

    if _initialized:
        logger.debug("Tracing already initialized. Skipping.")
        return

    if not enable:
        logger.info("Tracing disabled via configuration")
        return

    from opentelemetry.instrumentation.django import DjangoInstrumentor

    resource = Resource(attributes={SERVICE_NAME: service_name})
    tracer_provider = TracerProvider(resource=resource)
    if console_export:
        tracer_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(tracer_provider)

    # Auto-instrument Django (traces all HTTP requests)
    DjangoInstrumentor().instrument()

    _initialized = True
    logger.info(f"OpenTelemetry tracing initialized for service: {service_name}")


def get_tracer(name: str = "vendora") -> trace.Tracer:
    """
    Get tracer instance for creating custom spans.

    Example:
        with get_tracer().start_as_current_span("my_operation"):
            ...
    """
    global _tracer

    if _tracer is None:
        _tracer = trace.get_tracer(name)

    return _tracer


tracer = get_tracer()
