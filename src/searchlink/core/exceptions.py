"""searchlink exceptions."""

from __future__ import annotations


class SearchLinkError(Exception):
    """Base exception for searchlink errors."""


class ConfigurationError(SearchLinkError):
    """Raised when configuration is invalid or incomplete."""


class SearchClientConstructionError(ConfigurationError):
    """Raised when the search client cannot be built from the current settings.

    Nothing is cached after this error; the next access attempts construction again.
    """

    def __init__(self, message: str, host: str) -> None:
        super().__init__(message)
        self.host = host


class PayloadValidationError(SearchLinkError, ValueError):
    """Raised when a payload misses a required key or holds a malformed value."""

    def __init__(self, message: str, field: str) -> None:
        super().__init__(message)
        self.field = field


class StatusError(SearchLinkError):
    """An error tagged with the status code a transport layer should report."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def error_with_status(message: str, status_code: int) -> StatusError:
    """Build an error carrying ``message`` and a numeric ``status_code``.

    Example:
        >>> err = error_with_status("not found", 404)
        >>> str(err), err.status_code
        ('not found', 404)
    """
    return StatusError(message, status_code)
