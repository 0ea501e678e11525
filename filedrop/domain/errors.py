"""
Error Handling Module

Defines domain exceptions and error categories for the transfer service.
Domain exceptions are pure and have no external dependencies.
Application exceptions carry the user-facing message and HTTP mapping.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(Enum):
    """Error category enumeration for structured error handling."""

    TRANSFER_NOT_FOUND = "transfer_not_found"
    UPLOAD_FAILED = "upload_failed"
    INVALID_REQUEST = "invalid_request"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    LINK_EXPIRED = "link_expired"
    INVALID_SIGNATURE = "invalid_signature"
    SYSTEM_ERROR = "system_error"


# User-friendly error messages with actionable guidance
ERROR_MESSAGES: Dict[ErrorCategory, Dict[str, str]] = {
    ErrorCategory.TRANSFER_NOT_FOUND: {
        "title": "Transfer Not Found",
        "message": "This link does not exist or can no longer be used.",
        "action": "Ask the sender to upload the file again.",
    },
    ErrorCategory.UPLOAD_FAILED: {
        "title": "Upload Failed",
        "message": "The file could not be stored.",
        "action": "Please try the upload again in a moment.",
    },
    ErrorCategory.INVALID_REQUEST: {
        "title": "Invalid Request",
        "message": "The request is missing required information or contains invalid data.",
        "action": "Please check the file name and try again.",
    },
    ErrorCategory.METHOD_NOT_ALLOWED: {
        "title": "Method Not Allowed",
        "message": "Transfers only accept PUT for uploads and GET for downloads.",
        "action": "Use PUT to upload a file or GET to download it.",
    },
    ErrorCategory.LINK_EXPIRED: {
        "title": "Download Link Expired",
        "message": "This download link is no longer valid.",
        "action": "Open the transfer link again to get a fresh download link.",
    },
    ErrorCategory.INVALID_SIGNATURE: {
        "title": "Invalid Download Link",
        "message": "The download link signature does not match.",
        "action": "Open the transfer link again to get a fresh download link.",
    },
    ErrorCategory.SYSTEM_ERROR: {
        "title": "System Error",
        "message": "An unexpected error occurred while processing your request.",
        "action": "Please try again later. If the problem persists, contact support.",
    },
}


# ============================================================================
# Domain Exceptions (Pure - No External Dependencies)
# ============================================================================

class DomainError(Exception):
    """
    Base exception for all domain errors.

    Domain exceptions can optionally wrap the original error for context.
    """

    def __init__(self, message: str, original_error: Exception = None):
        """
        Initialize domain error.

        Args:
            message: Error message
            original_error: Optional original exception that caused this error
        """
        super().__init__(message)
        self.original_error = original_error


class EntropyUnavailableError(DomainError):
    """Raised when the operating system randomness source cannot be read."""
    pass


class KeyspaceExhaustedError(DomainError):
    """
    Raised when every candidate key collided with an existing record.

    Only reachable with a pathologically small key length or a broken
    generator; the attempt budget keeps registration from looping forever.
    """
    pass


class StoreUnavailableError(DomainError):
    """
    Raised when the record store or the blob store is unreachable or
    rejects a call for a reason other than a failed condition.
    """
    pass


class MalformedInputError(DomainError):
    """Raised when a filename or download path cannot be interpreted."""
    pass


class UploadFailedError(DomainError):
    """Raised when the file bytes could not be written after the key was reserved."""

    def __init__(self, message: str, key: str, original_error: Exception = None):
        super().__init__(message, original_error)
        self.key = key


class ConfigurationError(DomainError):
    """Raised at start-up when the environment holds an unusable setting."""
    pass


# ============================================================================
# Application Layer Exceptions
# ============================================================================

class ApplicationError(Exception):
    """
    Base application error with category and user-friendly messaging.

    Bridges domain errors with user-facing error messages and HTTP responses.
    """

    def __init__(
        self,
        category: ErrorCategory,
        technical_message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize application error.

        Args:
            category: Error category
            technical_message: Technical error details for logging
            context: Additional context information
        """
        self.category = category
        self.technical_message = technical_message or ""
        self.context = context or {}

        error_info = ERROR_MESSAGES.get(
            category, ERROR_MESSAGES[ErrorCategory.SYSTEM_ERROR]
        )
        self.title = error_info["title"]
        self.message = error_info["message"]
        self.action = error_info["action"]

        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for API response.

        The technical message is deliberately left out of the payload.

        Returns:
            Dictionary with error information
        """
        return {
            "error": self.category.value,
            "title": self.title,
            "message": self.message,
            "action": self.action,
        }


def create_error_response(
    category: ErrorCategory,
    technical_message: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = 400,
) -> tuple[Dict[str, Any], int]:
    """
    Create a structured error response for API endpoints.

    Args:
        category: Error category
        technical_message: Technical error details for logging
        context: Additional context information
        status_code: HTTP status code

    Returns:
        Tuple of (error_dict, status_code)
    """
    error = ApplicationError(category, technical_message, context)
    return error.to_dict(), status_code
