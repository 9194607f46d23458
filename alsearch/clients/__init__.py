"""
Search Public API Client

SearchClient facade plus the transport seam it delegates to.
"""

from alsearch.clients.search import SearchClient
from alsearch.clients.transport import (
    APIRequestParams,
    FakeTransport,
    HttpxTransport,
    TransportProtocol,
)

__all__ = [
    "APIRequestParams",
    "FakeTransport",
    "HttpxTransport",
    "SearchClient",
    "TransportProtocol",
]
