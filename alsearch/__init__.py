"""
alsearch - async client for the Search Public API.

Usage:
    settings = Settings(base_url="https://api.example.com", auth_token="...")
    async with create_search_client(settings) as client:
        job = await client.submit_search("1234", "logmsgs", {"aql": "SELECT *"})
"""

from __future__ import annotations

from typing import Any

from alsearch.clients.search import SearchClient
from alsearch.clients.transport import (
    APIRequestParams,
    FakeTransport,
    HttpxTransport,
    TransportProtocol,
)
from alsearch.core.config import Settings, get_settings
from alsearch.core.exceptions import (
    ConfigurationError,
    SearchClientLibraryError,
    TransportClosedError,
)
from alsearch.core.logging import configure_logging
from alsearch.core.tracing import build_tracer_provider
from alsearch.models.search import (
    FetchSearchResponse,
    JSONValue,
    LogMessageSearchResult,
    ReadMessagesRequest,
    SearchResultsQueryParams,
    SearchStatusResponse,
    SubmitSearchResponse,
)

__version__ = "0.1.0"


def create_search_client(
    settings: Settings | None = None,
    *,
    transport: TransportProtocol | None = None,
    tracer_provider: Any = None,
) -> SearchClient:
    """Build a SearchClient from settings.

    Construct one per application and pass it to the code that needs it.

    Args:
        settings: Client settings; read from the environment when None
        transport: Transport to use instead of an HttpxTransport; left
            open by the client, the caller closes it
        tracer_provider: OpenTelemetry provider for operation spans

    Returns:
        Configured SearchClient

    Raises:
        ConfigurationError: If no transport is given and base_url is unset
    """
    settings = settings or get_settings()

    if settings.configure_logging:
        configure_logging(settings.log_level, json_output=settings.log_json)

    owns_transport = transport is None
    if transport is None:
        if not settings.base_url:
            raise ConfigurationError(
                "base_url is required (set ALSEARCH_BASE_URL or pass Settings)"
            )
        transport = HttpxTransport(
            settings.base_url,
            auth_token=settings.auth_token,
            timeout=settings.timeout,
            max_retries=settings.max_retries,
            retry_delay=settings.retry_delay,
            api_version=settings.api_version,
            retry_methods=settings.retry_methods,
        )

    return SearchClient(
        transport,
        service_name=settings.service_name,
        ttl=settings.ttl,
        owns_transport=owns_transport,
        tracer_provider=tracer_provider,
    )


__all__ = [
    "APIRequestParams",
    "ConfigurationError",
    "FakeTransport",
    "FetchSearchResponse",
    "HttpxTransport",
    "JSONValue",
    "LogMessageSearchResult",
    "ReadMessagesRequest",
    "SearchClient",
    "SearchClientLibraryError",
    "SearchResultsQueryParams",
    "SearchStatusResponse",
    "Settings",
    "SubmitSearchResponse",
    "TransportClosedError",
    "TransportProtocol",
    "__version__",
    "build_tracer_provider",
    "configure_logging",
    "create_search_client",
    "get_settings",
]
