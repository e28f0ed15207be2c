"""Exceptions and payload helpers shared by every searchlink module."""

from searchlink.core.exceptions import (
    ConfigurationError,
    PayloadValidationError,
    SearchClientConstructionError,
    SearchLinkError,
    StatusError,
    error_with_status,
)
from searchlink.core.validation import validate_required_keys

__all__ = [
    "ConfigurationError",
    "PayloadValidationError",
    "SearchClientConstructionError",
    "SearchLinkError",
    "StatusError",
    "error_with_status",
    "validate_required_keys",
]
