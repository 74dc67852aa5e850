"""
A11y Docs Service - OpenTelemetry Tracing Module

Patterns Applied:
- One-time configure_tracing() at startup
- Manual spans around search, fetch and list operations only
- Resource attributes name the service, version and deployment environment

Until configure_tracing() runs, get_tracer() hands out the no-op tracer of
the OpenTelemetry API, so instrumented code works unconfigured.
"""

from typing import Any

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor

from a11y_docs import __version__

# Module-level flag for one-time configuration
_configured: bool = False

SERVICE_NAME = "a11y-docs-service"


def build_resource(
    service_name: str = SERVICE_NAME,
    environment: str = "development",
) -> Resource:
    """Resource describing this service on every exported span."""
    return Resource.create(
        {
            "service.name": service_name,
            "service.version": __version__,
            "deployment.environment": environment,
        }
    )


def configure_tracing(
    service_name: str = SERVICE_NAME,
    console_export: bool = True,
    environment: str = "development",
) -> None:
    """Configure OpenTelemetry tracing for the application.

    Args:
        service_name: Name of the service for trace attribution
        console_export: Whether to export spans to console (for development)
        environment: Deployment environment recorded on every span
    """
    global _configured

    if _configured:
        return

    provider = TracerProvider(resource=build_resource(service_name, environment))

    if console_export:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)

    _configured = True


def get_tracer(name: str) -> Any:
    """Get a tracer instance for creating spans.

    Args:
        name: Tracer name (typically module name)

    Returns:
        OpenTelemetry Tracer instance
    """
    return trace.get_tracer(name)


def reset_tracing() -> None:
    """Reset tracing configuration for testing."""
    global _configured
    _configured = False
