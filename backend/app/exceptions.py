"""
BoxShip API - Custom Exception Hierarchy

Provides structured, typed exceptions with error codes for consistent
error handling across the application.

Usage:
    from app.exceptions import NotFoundError, IllegalTransitionError

    # In a service
    raise NotFoundError("Shipment", shipment_id)

    # With custom message
    raise DuplicateError("Country", field="code", value="SE")
"""
from typing import Any, Dict, List, Optional


class BoxShipException(Exception):
    """
    Base exception for all BoxShip errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code (e.g., "NOT_FOUND", "VALIDATION_ERROR")
        status_code: HTTP status code to return
        details: Additional context for debugging
    """

    error_code: str = "BOXSHIP_ERROR"
    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API response."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


# ===================
# 400 Bad Request Errors
# ===================


class ValidationError(BoxShipException):
    """Raised when a request is well-formed but breaks a business rule."""

    error_code = "VALIDATION_ERROR"
    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        *,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details=details)


class InvalidReferenceError(BoxShipException):
    """Raised when a referenced record does not resolve or is inactive."""

    error_code = "INVALID_REFERENCE"
    status_code = 400

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Any = None,
        *,
        reason: str = "not found",
        details: Optional[Dict[str, Any]] = None,
    ):
        details = details or {}
        details["resource"] = resource
        details["reason"] = reason
        if resource_id is not None:
            details["resource_id"] = str(resource_id)
        message = f"Invalid {resource.lower()} reference"
        if resource_id is not None:
            message = f"Invalid {resource.lower()} reference {resource_id}: {reason}"
        super().__init__(message, details=details)


class IllegalTransitionError(BoxShipException):
    """Raised when a status change is not reachable from the current status."""

    error_code = "ILLEGAL_TRANSITION"
    status_code = 400

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        current_state: Optional[str] = None,
        requested_state: Optional[str] = None,
        allowed_states: Optional[List[str]] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = details or {}
        if current_state:
            details["current_state"] = current_state
        if requested_state:
            details["requested_state"] = requested_state
        if allowed_states is not None:
            details["allowed_states"] = allowed_states
        if message is None:
            message = f"Invalid status transition: '{current_state}' -> '{requested_state}'"
        super().__init__(message, details=details)


# ===================
# 401 Unauthorized Errors
# ===================


class AuthenticationError(BoxShipException):
    """Raised when a request carries no usable identity. Answered with a Bearer challenge."""

    error_code = "AUTHENTICATION_ERROR"
    status_code = 401

    def __init__(
        self,
        message: str = "Not authenticated",
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details=details)


class InvalidCredentialsError(AuthenticationError):
    error_code = "INVALID_CREDENTIALS"

    def __init__(
        self,
        message: str = "Incorrect email or password",
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details=details)


class InvalidTokenError(AuthenticationError):
    error_code = "INVALID_TOKEN"

    def __init__(
        self,
        message: str = "Could not validate credentials",
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details=details)


class TokenExpiredError(AuthenticationError):
    error_code = "TOKEN_EXPIRED"

    def __init__(
        self,
        message: str = "Token has expired",
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details=details)


# ===================
# 403 Forbidden Errors
# ===================


class ForbiddenError(BoxShipException):
    """Raised when the actor lacks rights on an existing resource."""

    error_code = "FORBIDDEN"
    status_code = 403

    def __init__(
        self,
        message: str = "Permission denied",
        *,
        action: Optional[str] = None,
        resource: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = details or {}
        if action:
            details["action"] = action
        if resource:
            details["resource"] = resource
        super().__init__(message, details=details)


# ===================
# 404 Not Found Errors
# ===================


class NotFoundError(BoxShipException):
    """Raised when a resource is not found."""

    error_code = "NOT_FOUND"
    status_code = 404

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Any = None,
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = details or {}
        details["resource"] = resource
        if resource_id is not None:
            details["resource_id"] = str(resource_id)
        message = f"{resource} not found"
        if resource_id is not None:
            message = f"{resource} with ID {resource_id} not found"
        super().__init__(message, details=details)


# ===================
# 409 Conflict Errors
# ===================


class ConflictError(BoxShipException):
    """Raised when there's a resource conflict or a concurrent write race."""

    error_code = "CONFLICT"
    status_code = 409

    def __init__(
        self,
        message: str = "Resource conflict",
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details=details)


class DuplicateError(ConflictError):
    """Raised when attempting to create a duplicate resource."""

    error_code = "DUPLICATE_ERROR"

    def __init__(
        self,
        resource: str = "Resource",
        *,
        field: Optional[str] = None,
        value: Any = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = details or {}
        details["resource"] = resource
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        message = f"{resource} already exists"
        if field and value:
            message = f"{resource} with {field}='{value}' already exists"
        super().__init__(message, details=details)



# ===================
# 500 Internal Server Errors
# ===================


class DatabaseError(BoxShipException):
    """Body of the response sent when SQLAlchemy raises out of a request."""

    error_code = "DATABASE_ERROR"
    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred. Please try again.",
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details=details)
