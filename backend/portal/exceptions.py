"""
Institute Portal Backend: Exception Hierarchy
==============================================

What:  Application exceptions mapped to HTTP responses by the global handlers
       registered in `portal.main`.
Who:   Raised by services; never by the transform layer, which degrades to
       documented fallbacks instead of raising.

Exception Hierarchy:
    PortalError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found
    ├── ConflictError     → 409 Conflict (slug already taken)
    └── DatabaseError     → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class PortalError(Exception):
    """
    Base exception for all portal application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info, logged or returned as `details`
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PortalError):
    """
    Raised when client input fails a business rule.

    When:    Missing name, a name that slugifies to nothing, an unknown
             service center id on a product.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(PortalError):
    """
    Raised when a requested row does not exist.

    SQLAlchemy returns None for missing rows; services convert that None into
    this exception so routes stay free of lookup checks.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id:
                message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(PortalError):
    """
    Raised when a write would violate a uniqueness rule.

    When:    Slug pre-check finds another row with the candidate slug, or the
             UNIQUE constraint fires on flush (a concurrent creator won).
    HTTP:    409 Conflict
    """

    def __init__(
        self,
        message: str = "A record with this slug already exists",
        slug: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if slug:
            ctx["slug"] = slug
        super().__init__(message=message, context=ctx)
        self.slug = slug


class DatabaseError(PortalError):
    """
    Raised when a database operation fails unexpectedly.

    The response message is always generic; the context is only logged.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
