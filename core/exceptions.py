"""Custom exception classes for the application.

Handlers and services raise these; `core.error_handlers` turns them into
the JSON error envelope with the matching HTTP status.
"""

from typing import Optional, Any, Dict


class AppException(Exception):
    """Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code to return.
        details: Optional additional error details.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Raised when a requested resource does not exist for the current user."""

    def __init__(self, resource: str, identifier: Any = None, message: Optional[str] = None):
        """Initialize not found error.

        Args:
            resource: Type of resource (e.g., 'Diet plan', 'Health goal').
            identifier: ID that was not found, if the lookup was by id.
            message: Overrides the generated message.
        """
        if message is None:
            if identifier is None:
                message = f"{resource} not found"
            else:
                message = f"{resource} with id '{identifier}' not found"
        details = {"resource": resource}
        if identifier is not None:
            details["id"] = identifier
        super().__init__(message, status_code=404, details=details)


class ValidationError(AppException):
    """Exception raised when input validation fails."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, status_code=400, details=details)


class AuthenticationError(AppException):
    """Raised when a request carries no valid session."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, status_code=401)


class DatabaseError(AppException):
    """Exception raised when database operations fail."""

    def __init__(self, message: str, operation: Optional[str] = None):
        details = {"operation": operation} if operation else {}
        super().__init__(message, status_code=500, details=details)


class AIServiceError(AppException):
    """Raised by the AI client when the upstream generative API fails.

    Callers normally catch this and fall back to static content.
    """

    def __init__(self, message: str, service: Optional[str] = None):
        details = {"service": service} if service else {}
        super().__init__(message, status_code=502, details=details)


class GenerationError(AppException):
    """Raised when AI output cannot be turned into something worth persisting."""

    def __init__(self, message: str):
        super().__init__(message, status_code=500, details={"type": "generation_error"})
