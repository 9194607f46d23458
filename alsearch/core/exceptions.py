"""
Search Public API Client - Custom Exceptions

These cover failures of the library itself. HTTP, network and decoding
errors raised by the transport are never wrapped in these types; they reach
the caller unchanged.

Anti-Patterns Avoided:
- Exception shadowing: namespaced names instead of builtins like ConnectionError
"""


class SearchClientLibraryError(Exception):
    """Base exception for errors raised by this library.

    All custom exceptions inherit from this base class.
    """
    pass


class ConfigurationError(SearchClientLibraryError):
    """Raised when configuration is invalid or missing."""
    pass


class TransportClosedError(SearchClientLibraryError):
    """Raised when a request is issued on a transport after aclose()."""
    pass
