from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    INVALID_INPUT = "INVALID_INPUT"
    DOCUMENT_NOT_FOUND = "DOCUMENT_NOT_FOUND"
    DOCUMENT_FETCH_FAILED = "DOCUMENT_FETCH_FAILED"
    DOCUMENT_MALFORMED = "DOCUMENT_MALFORMED"
    FRAMEWORK_SEARCH_FAILED = "FRAMEWORK_SEARCH_FAILED"
    GLOBAL_SEARCH_FAILED = "GLOBAL_SEARCH_FAILED"


class AppleDocsError(Exception):
    """Raised by tool handlers and business logic for all expected failures.

    Caught by server.py and serialised into the MCP error response. Only
    the documented degradation points (partial global search failures and
    the documentation fallback) catch it internally.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.recoverable = recoverable

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "suggestion": self.suggestion,
                "recoverable": self.recoverable,
            }
        }


class FetchError(AppleDocsError):
    """An upstream document could not be obtained.

    ``resource`` is the URL that failed, or the logical name (e.g. a
    framework) the failed fetch was made for.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str,
        *,
        resource: str,
        recoverable: bool = False,
    ) -> None:
        super().__init__(code, message, suggestion, recoverable)
        self.resource = resource
