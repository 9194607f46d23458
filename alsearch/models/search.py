"""
Search Public API - Data Transfer Shapes

Response shapes are TypedDicts: the client returns the decoded JSON body
unchanged and the types only describe it. Request-shaping structs are
dataclasses that emit a payload containing only the fields that were set.

The service publishes no stable schema for the CSV, release and read
messages responses, so those stay untyped (JSONValue / bytes).
"""

from dataclasses import dataclass
from typing import Any, Literal, NotRequired, TypedDict, Union

# Unstructured JSON value as decoded by the transport
JSONValue = Union[dict[str, Any], list[Any], str, int, float, bool, None]

SearchStatus = Literal["suspended", "pending", "complete", "failed"]
SearchType = Literal["batch", "interactive", "report"]


# =============================================================================
# Log Message Records
# =============================================================================


class LogMessageMetadata(TypedDict):
    """One metadata entry attached to a log message."""

    create_ts: int
    data: str
    meta_id: str
    uuid: str


class LogMessageFields(TypedDict):
    """Parsed fields of a stored log message."""

    ingest_id: str
    message: str
    metadata: list[LogMessageMetadata]
    pid: int
    priority: int
    time_recv: int
    source_id: str
    host_name: str
    facility: str
    program: str


class LogMessageId(TypedDict):
    """Identity triple of a stored message."""

    account: int
    aid: int
    msgid: str


class LogMessageSearchResult(TypedDict):
    """A log message returned in a results page."""

    fields: LogMessageFields
    id: LogMessageId


# =============================================================================
# Search Job Responses
# =============================================================================


class SubmitSearchResponse(TypedDict):
    """Search job handle with its current status."""

    search_uuid: str
    search_status: SearchStatus
    start_ts: int
    update_ts: int
    status_details: str
    progress: float


class FetchSearchResponse(SubmitSearchResponse):
    """One page of search results.

    Only log messages are modelled today; the service may return other
    message types in ``results`` later.
    """

    results: list[LogMessageSearchResult]
    next_token: NotRequired[str]
    estimated: NotRequired[int]
    remaining: NotRequired[int]


class SearchStatusResponse(SubmitSearchResponse):
    """Search job status with the echoed query and search type."""

    query: str
    search_type: SearchType


# =============================================================================
# Request Shaping
# =============================================================================


@dataclass(frozen=True)
class SearchResultsQueryParams:
    """Optional paging parameters for fetching results.

    Attributes:
        limit: Maximum number of records in the page
        offset: Number of records to skip
        starting_token: Continuation token from a previous page's next_token
    """

    limit: int | None = None
    offset: int | None = None
    starting_token: str | None = None

    def to_params(self) -> dict[str, Any]:
        """Return only the parameters that were supplied."""
        params: dict[str, Any] = {}
        if self.limit is not None:
            params["limit"] = self.limit
        if self.offset is not None:
            params["offset"] = self.offset
        if self.starting_token is not None:
            params["starting_token"] = self.starting_token
        return params


@dataclass(frozen=True)
class ReadMessagesRequest:
    """Body of a batch message read.

    ``fields`` is sent whenever it is given, including an empty list.
    """

    ids: list[str]
    fields: list[str] | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"ids": list(self.ids)}
        if self.fields is not None:
            payload["fields"] = list(self.fields)
        return payload
