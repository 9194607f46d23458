"""
Search Public API Client

Async facade over the search service: submit a search job, poll its status,
fetch results as JSON or CSV, release the job and batch-read stored
messages. Each method maps to exactly one transport request; responses and
transport errors reach the caller unchanged.

Patterns Applied:
- Dependency injection: transport passed in, no module-level singleton
- Repository Pattern: any TransportProtocol implementation works
"""

from __future__ import annotations

from typing import Any, Final, cast

from alsearch.clients.transport import APIRequestParams, TransportProtocol
from alsearch.core.logging import get_logger
from alsearch.core.tracing import get_tracer
from alsearch.models.search import (
    FetchSearchResponse,
    JSONValue,
    ReadMessagesRequest,
    SearchResultsQueryParams,
    SearchStatusResponse,
    SubmitSearchResponse,
)

logger = get_logger(__name__)

# =============================================================================
# Module Constants
# =============================================================================

DEFAULT_SERVICE_NAME: Final[str] = "search"
DEFAULT_TTL: Final[int] = 0
CSV_MEDIA_TYPE: Final[str] = "text/csv"
MESSAGES_PATH: Final[str] = "/messages/logmsgs"


class SearchClient:
    """Client for the search service public API.

    Holds only static configuration, so one instance can be shared by any
    number of concurrent callers.

    Attributes:
        service_name: Service namespace requests are addressed to
        ttl: Cache-control hint sent with fetch and status reads
    """

    def __init__(
        self,
        transport: TransportProtocol,
        *,
        service_name: str = DEFAULT_SERVICE_NAME,
        ttl: int = DEFAULT_TTL,
        owns_transport: bool = False,
        tracer_provider: Any = None,
    ) -> None:
        """Initialize the search client.

        Args:
            transport: Request executor used for every call
            service_name: Service namespace
            ttl: Cache-control hint for reads (0 = always revalidate)
            owns_transport: Close the transport in aclose(); False for a
                transport the caller manages
            tracer_provider: OpenTelemetry provider for operation spans;
                the global provider when None
        """
        self.transport = transport
        self.service_name = service_name
        self.ttl = ttl
        self._owns_transport = owns_transport
        self._tracer = get_tracer(__name__, tracer_provider)

    async def __aenter__(self) -> SearchClient:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the transport when this client owns it and it supports closing."""
        if not self._owns_transport:
            return
        close = getattr(self.transport, "aclose", None)
        if callable(close):
            await close()

    # -------------------------------------------------------------------------
    # Search job operations
    # -------------------------------------------------------------------------

    async def submit_search(
        self,
        account_id: str,
        data_type: str,
        search_query: JSONValue = None,
    ) -> SubmitSearchResponse:
        """Start a search job in the backend.

        Args:
            account_id: Account to search in
            data_type: Data type to search, e.g. "logmsgs"
            search_query: Caller-defined query body, sent as is

        Returns:
            Job handle with the initial status
        """
        request = self._request(
            "POST",
            account_id,
            f"/search/{data_type}",
            data=search_query,
        )
        result = await self._send("submit_search", request, data_type=data_type)
        return cast(SubmitSearchResponse, result)

    async def fetch_search_results(
        self,
        account_id: str,
        search_id: str,
        query_params: SearchResultsQueryParams | None = None,
    ) -> FetchSearchResponse:
        """Access the results of a submitted search.

        Args:
            account_id: Account the search belongs to
            search_id: search_uuid returned by submit_search
            query_params: Optional limit/offset/starting_token

        Returns:
            One results page, with next_token when more results exist
        """
        request = self._fetch_request(account_id, search_id, query_params)
        result = await self._send("fetch_search_results", request, search_id=search_id)
        return cast(FetchSearchResponse, result)

    async def fetch_search_results_as_csv(
        self,
        account_id: str,
        search_id: str,
        query_params: SearchResultsQueryParams | None = None,
    ) -> bytes:
        """Access the results of a submitted search in CSV format.

        The body is returned as received; it is not parsed.
        """
        request = self._fetch_request(
            account_id,
            search_id,
            query_params,
            accept_header=CSV_MEDIA_TYPE,
            response_type="blob",
        )
        result = await self._send(
            "fetch_search_results_as_csv", request, search_id=search_id
        )
        return cast(bytes, result)

    async def search_status(
        self, account_id: str, search_id: str
    ) -> SearchStatusResponse:
        """Get the latest status of a submitted search."""
        request = self._request(
            "GET",
            account_id,
            f"/status/{search_id}",
            ttl=self.ttl,
        )
        result = await self._send("search_status", request, search_id=search_id)
        return cast(SearchStatusResponse, result)

    async def release_search(self, account_id: str, search_id: str) -> JSONValue:
        """Free the resources held by a search.

        A pending search is cancelled. The service also releases completed
        searches on its own 24 hours after completion.

        Returns:
            The service acknowledgement, untyped
        """
        request = self._request("POST", account_id, f"/release/{search_id}")
        return await self._send("release_search", request, search_id=search_id)

    async def read_messages(
        self,
        account_id: str,
        message_ids: list[str],
        field_names: list[str] | None = None,
    ) -> JSONValue:
        """Read a set of stored messages by ID.

        Log messages come back parsed and tokenised.

        Args:
            account_id: Account the messages belong to
            message_ids: Message IDs to read
            field_names: Restrict the returned fields; sent whenever given

        Returns:
            The service response, untyped
        """
        body = ReadMessagesRequest(ids=message_ids, fields=field_names)
        request = self._request(
            "POST",
            account_id,
            MESSAGES_PATH,
            data=body.to_payload(),
        )
        return await self._send("read_messages", request)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _request(
        self, method: str, account_id: str, path: str, **kwargs: Any
    ) -> APIRequestParams:
        return APIRequestParams(
            method=method,
            service_name=self.service_name,
            account_id=account_id,
            path=path,
            **kwargs,
        )

    def _fetch_request(
        self,
        account_id: str,
        search_id: str,
        query_params: SearchResultsQueryParams | None,
        **kwargs: Any,
    ) -> APIRequestParams:
        params = query_params.to_params() if query_params is not None else None
        return self._request(
            "GET",
            account_id,
            f"/fetch/{search_id}",
            params=params,
            ttl=self.ttl,
            **kwargs,
        )

    async def _send(
        self, operation: str, request: APIRequestParams, **attributes: str
    ) -> Any:
        """Run one request inside a span named after the operation."""
        span_attributes = {
            "search.service": request.service_name,
            "search.account_id": request.account_id,
            "search.path": request.path,
        }
        span_attributes.update({f"search.{k}": v for k, v in attributes.items()})

        logger.debug(
            "search_operation",
            operation=operation,
            method=request.method,
            path=request.path,
            account_id=request.account_id,
        )
        with self._tracer.start_as_current_span(
            f"search.{operation}", attributes=span_attributes
        ):
            return await self.transport.request(request)
