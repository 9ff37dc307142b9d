"""
Custom Exception Classes
"""
from typing import Optional, Dict, Any, Iterable


class DomainFinderException(Exception):
    """Base exception for all application exceptions"""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "internal_error"
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API response"""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details
        }


# Validation Exceptions
class ValidationError(DomainFinderException):
    """Raised when input validation fails"""

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[list] = None,
        **kwargs
    ):
        details = kwargs.pop("details", {})
        if errors:
            details["errors"] = errors
        kwargs.setdefault("error_code", "validation_error")

        super().__init__(
            message=message,
            status_code=400,
            details=details,
            **kwargs
        )


class EmptyQueryError(ValidationError):
    """Raised when a query yields no usable keywords"""

    def __init__(self, query: str = "", message: str = "No valid keywords found", **kwargs):
        super().__init__(
            message=message,
            error_code="empty_query",
            details={"query": query},
            **kwargs
        )


class InvalidFilterError(ValidationError):
    """Raised when a filter set is malformed"""

    def __init__(self, message: str = "Invalid filters", field: Optional[str] = None, **kwargs):
        details = {"field": field} if field else {}
        super().__init__(
            message=message,
            error_code="invalid_filter",
            details=details,
            **kwargs
        )


class UnsupportedExtensionError(InvalidFilterError):
    """Raised when a filter names an extension outside the catalog"""

    def __init__(self, extensions: Iterable[str], **kwargs):
        names = sorted(extensions)
        super().__init__(
            message=f"Unsupported extension(s): {', '.join(names)}",
            field="extensions",
            **kwargs
        )
        self.details["extensions"] = names


# Rate Limiting Exceptions
class RateLimitExceeded(DomainFinderException):
    """Raised when the inbound rate limit is exceeded"""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: Optional[int] = None,
        **kwargs
    ):
        details = kwargs.pop("details", {})
        if retry_after:
            details["retry_after"] = retry_after

        super().__init__(
            message=message,
            error_code="rate_limit_exceeded",
            status_code=429,
            details=details,
            **kwargs
        )


# Database Exceptions
class DatabaseError(DomainFinderException):
    """Raised when the result store cannot complete an operation"""

    def __init__(self, message: str = "Database operation failed", **kwargs):
        super().__init__(
            message=message,
            error_code="database_error",
            status_code=503,
            **kwargs
        )


# Resource Exceptions
class NotFoundError(DomainFinderException):
    """Raised when a resource is not found"""

    def __init__(self, resource: str, resource_id: Any = None, **kwargs):
        message = f"{resource} not found"
        if resource_id is not None:
            message += f": {resource_id}"
        super().__init__(
            message=message,
            error_code="not_found",
            status_code=404,
            details={"resource": resource, "id": resource_id},
            **kwargs
        )


# Exports
__all__ = [
    "DomainFinderException",
    "ValidationError",
    "EmptyQueryError",
    "InvalidFilterError",
    "UnsupportedExtensionError",
    "RateLimitExceeded",
    "DatabaseError",
    "NotFoundError"
]
