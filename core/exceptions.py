"""Custom exception classes for the application.

Defines the meal plan pipeline's error taxonomy. Every exception carries a
user-facing message and an HTTP status so the handlers in
`core.error_handlers` can render them consistently.
"""

from typing import Optional, Any, Dict


class AppException(Exception):
    """Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code to return.
        details: Optional additional error details (logged, not returned).
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize application exception.

        Args:
            message: Error message.
            status_code: HTTP status code (default: 500).
            details: Optional dictionary with additional error context.
        """
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Raised when a caller credential is missing, malformed, expired or untrusted."""

    def __init__(self, reason: Optional[str] = None):
        """Initialize authentication error.

        Args:
            reason: Optional operator-facing reason (never shown to the caller).
        """
        details = {"reason": reason} if reason else {}
        super().__init__("Please sign in again.", status_code=401, details=details)


class UpstreamUnavailable(AppException):
    """Raised when the recipe search service does not answer successfully."""

    def __init__(self, service: str, status: Optional[int] = None, reason: Optional[str] = None):
        details: Dict[str, Any] = {"service": service}
        if status is not None:
            details["status"] = status
        if reason:
            details["reason"] = reason
        super().__init__("Recipe search is currently unavailable.", status_code=502, details=details)


class GenerationFailed(AppException):
    """Raised when the model call errors or its final answer fails validation.

    The caller only ever sees a generic message; `details["reason"]` carries
    the diagnosis for operators.
    """

    def __init__(self, reason: str):
        """Initialize generation failure.

        Args:
            reason: Operator-facing description of what went wrong.
        """
        super().__init__(
            "An unexpected error occurred while generating your meal plan. Please try again.",
            status_code=502,
            details={"reason": reason}
        )
        self.reason = reason


class PersistenceError(AppException):
    """Exception raised when writing or reading stored plans fails."""

    def __init__(self, message: str = "Could not save your meal plan.", operation: Optional[str] = None):
        """Initialize persistence error.

        Args:
            message: Error message.
            operation: Optional operation that failed (e.g., 'persist', 'persist_recipes').
        """
        details = {"operation": operation} if operation else {}
        super().__init__(message, status_code=500, details=details)


class NotFoundError(AppException):
    """Exception raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: Any):
        """Initialize not found error.

        Args:
            resource: Type of resource (e.g., 'MealPlan').
            identifier: ID or identifier that was not found.
        """
        message = f"{resource} with id '{identifier}' not found"
        super().__init__(message, status_code=404, details={"resource": resource, "id": identifier})


class ConfigurationError(AppException):
    """Exception raised when application configuration is invalid."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        """Initialize configuration error.

        Args:
            message: Configuration error message.
            config_key: Optional configuration key that is invalid.
        """
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, status_code=500, details=details)
