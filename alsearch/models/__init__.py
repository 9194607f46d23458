"""Data transfer shapes for the search service API."""

from alsearch.models.search import (
    FetchSearchResponse,
    JSONValue,
    LogMessageFields,
    LogMessageId,
    LogMessageMetadata,
    LogMessageSearchResult,
    ReadMessagesRequest,
    SearchResultsQueryParams,
    SearchStatus,
    SearchStatusResponse,
    SearchType,
    SubmitSearchResponse,
)

__all__ = [
    "FetchSearchResponse",
    "JSONValue",
    "LogMessageFields",
    "LogMessageId",
    "LogMessageMetadata",
    "LogMessageSearchResult",
    "ReadMessagesRequest",
    "SearchResultsQueryParams",
    "SearchStatus",
    "SearchStatusResponse",
    "SearchType",
    "SubmitSearchResponse",
]
