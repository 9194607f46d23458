"""
Account-scoped HTTP request executor.

SearchClient describes each call with an APIRequestParams and hands it to a
transport. HttpxTransport is the default implementation; anything with a
matching ``request`` coroutine can be injected instead.

Patterns Applied:
- Connection pooling (reuse one httpx.AsyncClient)
- Retry with exponential backoff on timeouts, connection errors and 5xx,
  for GET requests unless configured otherwise
- Repository Pattern: Protocol for duck typing to enable FakeTransport
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Final, Iterable, Literal, Mapping, Protocol

import httpx

from alsearch.core.exceptions import TransportClosedError
from alsearch.core.logging import get_logger

logger = get_logger(__name__)

# =============================================================================
# Module Constants
# =============================================================================

DEFAULT_API_VERSION: Final[str] = "v1"
DEFAULT_TIMEOUT: Final[float] = 30.0
DEFAULT_MAX_RETRIES: Final[int] = 3
DEFAULT_RETRY_DELAY: Final[float] = 1.0

# A retried POST could start a second search job
DEFAULT_RETRY_METHODS: Final[frozenset[str]] = frozenset({"GET"})

AUTH_HEADER: Final[str] = "X-AIMS-Auth-Token"
JSON_MEDIA_TYPE: Final[str] = "application/json"

ResponseType = Literal["json", "blob"]


# =============================================================================
# Request Descriptor
# =============================================================================


@dataclass(frozen=True)
class APIRequestParams:
    """Description of one account-scoped API request.

    Attributes:
        method: HTTP verb
        service_name: Service namespace, e.g. "search"
        account_id: Account the request is scoped to
        path: Path below the account, starting with "/"
        data: JSON body, omitted when None
        params: Query parameters, omitted when None
        headers: Extra request headers
        ttl: Cache-control hint in seconds, omitted when None
        accept_header: Requested media type, JSON when None
        response_type: "json" to decode the body, "blob" for raw bytes
    """

    method: str
    service_name: str
    account_id: str
    path: str
    data: Any = None
    params: Mapping[str, Any] | None = None
    headers: Mapping[str, str] | None = None
    ttl: int | None = None
    accept_header: str | None = None
    response_type: ResponseType = "json"


class TransportProtocol(Protocol):
    """Protocol for transport duck typing.

    Enables FakeTransport for testing without real HTTP calls.
    """

    async def request(self, params: APIRequestParams) -> Any:
        """Execute one request and return the decoded response body."""
        ...


def cache_control_for(ttl: int | None) -> str | None:
    """Translate a ttl hint into a Cache-Control header value."""
    if ttl is None:
        return None
    if ttl <= 0:
        return "no-cache"
    return f"max-age={ttl}"


# =============================================================================
# HttpxTransport Implementation
# =============================================================================


class HttpxTransport:
    """httpx-based transport for the account-scoped public API.

    Requests go to ``{base_url}/{service_name}/{api_version}/{account_id}{path}``.
    Failures are raised as the httpx exceptions that caused them.

    Attributes:
        base_url: API root (e.g., https://api.example.com)
        api_version: Version segment inserted after the service name
        timeout: Request timeout in seconds (default: 30)
        max_retries: Total attempts per request (default: 3)
        retry_delay: Initial delay between attempts in seconds (default: 1.0)
        retry_methods: HTTP methods that are retried (default: GET only)
    """

    def __init__(
        self,
        base_url: str,
        *,
        auth_token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        api_version: str = DEFAULT_API_VERSION,
        retry_methods: Iterable[str] = DEFAULT_RETRY_METHODS,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            base_url: API root URL
            auth_token: Token sent in the X-AIMS-Auth-Token header
            timeout: Request timeout in seconds
            max_retries: Total attempts per request, at least 1
            retry_delay: Initial delay between attempts
            api_version: Version path segment
            retry_methods: HTTP methods retried on timeouts and 5xx
            client: Pre-built httpx.AsyncClient; not closed by aclose()
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self.api_version = api_version
        self.retry_methods = frozenset(m.upper() for m in retry_methods)
        self._auth_token = auth_token
        self._closed = False

        # Connection pooling: single client instance
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    def build_url(self, params: APIRequestParams) -> str:
        """Return the absolute URL for one request."""
        return (
            f"{self.base_url}/{params.service_name}/{self.api_version}"
            f"/{params.account_id}{params.path}"
        )

    def build_headers(self, params: APIRequestParams) -> dict[str, str]:
        """Return the headers for one request."""
        headers = {"Accept": params.accept_header or JSON_MEDIA_TYPE}
        cache_control = cache_control_for(params.ttl)
        if cache_control is not None:
            headers["Cache-Control"] = cache_control
        if self._auth_token:
            headers[AUTH_HEADER] = self._auth_token
        if params.headers:
            headers.update(params.headers)
        return headers

    async def request(self, params: APIRequestParams) -> Any:
        """Execute one request with retry.

        Args:
            params: Request descriptor

        Returns:
            Decoded JSON (None for an empty body), or bytes for "blob"

        Raises:
            httpx.HTTPStatusError: On 4xx, or 5xx once attempts are exhausted
            httpx.TransportError: On timeouts/connection errors once attempts are exhausted
            TransportClosedError: If aclose() was already called
        """
        if self._closed:
            raise TransportClosedError("Transport is closed")

        response = await self._execute_request(params)
        return self._decode(response, params.response_type)

    async def _execute_request(self, params: APIRequestParams) -> httpx.Response:
        """Send the request, retrying with exponential backoff.

        Only methods in ``retry_methods`` are retried. The final attempt
        runs outside the retry loop so its exception reaches the caller
        unchanged.

        Args:
            params: Request descriptor

        Returns:
            Successful httpx.Response
        """
        url = self.build_url(params)
        headers = self.build_headers(params)
        kwargs: dict[str, Any] = {"headers": headers}
        if params.params is not None:
            kwargs["params"] = dict(params.params)
        if params.data is not None:
            kwargs["json"] = params.data

        attempts = self.max_retries if params.method.upper() in self.retry_methods else 1

        for attempt in range(attempts - 1):
            try:
                return await self._send_once(params, url, kwargs, attempt)
            except httpx.HTTPStatusError as e:
                if e.response.status_code < 500:
                    raise
                error: Exception = e
            except httpx.TransportError as e:
                error = e

            # Exponential backoff before retry
            delay = self.retry_delay * (2**attempt)
            logger.warning(
                "search_api_retry",
                method=params.method,
                path=params.path,
                attempt=attempt + 1,
                delay=delay,
                error=str(error),
            )
            await asyncio.sleep(delay)

        return await self._send_once(params, url, kwargs, attempts - 1)

    async def _send_once(
        self,
        params: APIRequestParams,
        url: str,
        kwargs: dict[str, Any],
        attempt: int,
    ) -> httpx.Response:
        logger.debug(
            "search_api_request",
            method=params.method,
            path=params.path,
            account_id=params.account_id,
            attempt=attempt + 1,
        )
        response = await self._client.request(params.method, url, **kwargs)
        response.raise_for_status()
        return response

    @staticmethod
    def _decode(response: httpx.Response, response_type: ResponseType) -> Any:
        if response_type == "blob":
            return response.content
        if not response.content:
            return None
        return response.json()

    async def aclose(self) -> None:
        """Close the HTTP connection pool.

        Idempotent - safe to call multiple times.
        """
        if self._closed:
            return
        self._closed = True
        if self._owns_client:
            await self._client.aclose()
            logger.debug("search_transport_closed", base_url=self.base_url)


# =============================================================================
# FakeTransport for Testing
# =============================================================================


class FakeTransport:
    """Fake transport for unit testing without real HTTP.

    Implements TransportProtocol. Every request is recorded in ``requests``.
    """

    def __init__(
        self,
        responses: Mapping[tuple[str, str], Any] | None = None,
        default: Any = None,
    ) -> None:
        """Initialize fake transport with optional preset responses.

        Args:
            responses: Responses keyed by (method, path)
            default: Response for requests with no preset entry
        """
        self.requests: list[APIRequestParams] = []
        self._responses = dict(responses or {})
        self._default = default
        self._error: BaseException | None = None
        self.closed = False

    async def request(self, params: APIRequestParams) -> Any:
        """Record the request and return its preset response."""
        await asyncio.sleep(0)
        self.requests.append(params)
        if self._error is not None:
            raise self._error
        return self._responses.get((params.method, params.path), self._default)

    def set_response(self, method: str, path: str, response: Any) -> None:
        """Preset the response for one (method, path) pair."""
        self._responses[(method, path)] = response

    def set_error(self, error: BaseException | None) -> None:
        """Raise ``error`` from every following request; None clears it."""
        self._error = error

    async def aclose(self) -> None:
        self.closed = True
