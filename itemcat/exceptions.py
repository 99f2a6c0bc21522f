"""Custom exceptions for ItemCat.

Defines specific exception types for better error handling and reporting.
Only ValidationError ever reaches a client; the classifier errors are
recovered by the keyword fallback.
"""

from typing import Any, Dict, Optional


class ItemCatException(Exception):
    """Base exception for ItemCat errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize exception.

        Args:
            message: Human-readable error message
            status_code: HTTP status code for API responses
            details: Additional error details for debugging
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}


class ValidationError(ItemCatException):
    """Raised when a categorization request is malformed."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, status_code=400, details=details)


class ClassifierUnavailable(ItemCatException):
    """Raised when no classifier credential is configured."""

    def __init__(self, message: str = "No classifier credential configured"):
        super().__init__(message=message, status_code=503)


class ClassifierFailure(ItemCatException):
    """Raised when the remote classifier call fails or returns garbage."""

    def __init__(self, reason: str, error: Optional[Exception] = None):
        message = f"Classifier request failed: {reason}"
        details: Dict[str, Any] = {"reason": reason}
        if error is not None:
            details["error"] = str(error)
            details["error_type"] = type(error).__name__
        super().__init__(message=message, status_code=502, details=details)
