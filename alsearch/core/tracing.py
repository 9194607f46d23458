"""
Search Public API Client - OpenTelemetry Tracing

SearchClient opens one span per operation on a tracer from ``get_tracer``.
A provider passed to the client is used directly; otherwise the tracer
follows the process-wide provider installed by the host application, and is
a no-op when none is installed. The library never installs a global
provider itself.
"""

from typing import Any

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor

SERVICE_NAME = "alsearch-client"
SERVICE_VERSION = "0.1.0"


def build_tracer_provider(
    service_name: str = SERVICE_NAME,
    console_export: bool = False,
) -> TracerProvider:
    """Build a standalone TracerProvider for a SearchClient.

    The provider is returned, not installed globally; pass it to
    ``create_search_client(tracer_provider=...)`` or install it yourself.

    Args:
        service_name: Value of the service.name resource attribute
        console_export: Whether to print finished spans to stdout

    Returns:
        TracerProvider tagged with the service name and client version
    """
    provider = TracerProvider(
        resource=Resource.create(
            {
                "service.name": service_name,
                "service.version": SERVICE_VERSION,
            }
        )
    )
    if console_export:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
    return provider


def get_tracer(name: str, tracer_provider: Any = None) -> Any:
    """Get a tracer for creating spans.

    Args:
        name: Tracer name (typically module name)
        tracer_provider: Provider to use; the global provider when None

    Returns:
        OpenTelemetry Tracer instance
    """
    return trace.get_tracer(
        name,
        instrumenting_library_version=SERVICE_VERSION,
        tracer_provider=tracer_provider,
    )
