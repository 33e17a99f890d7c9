"""
Wildtrail Backend: Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for the content API.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching status code.
Who:   Raised by the collection repository and middleware; caught by handlers.

Exception Hierarchy:
    WildtrailError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── NotFoundError            → 404 Not Found (client should re-fetch)
    ├── InvalidOperationError    → 409 Conflict
    ├── StorageError             → 500 Internal Server Error
    └── RateLimitExceededError   → 429 Too Many Requests
"""

from typing import Any, Dict, List, Optional


class WildtrailError(Exception):
    """
    Base exception for all Wildtrail application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(WildtrailError):
    """
    Raised when a payload fails its collection schema or a business rule.

    Carries one entry per failing field so the admin form can mark each
    input. A single-field error may be built with ``field=``; a schema
    failure passes the full ``errors`` list.

    Example response:
        {
            "error": "validation_error",
            "message": "Invalid favorite destination: title, image",
            "details": {"errors": [
                {"field": "title", "message": "String should have at least 2 characters"},
                {"field": "image", "message": "Image must be a valid http(s) URL"}
            ]}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        errors: Optional[List[Dict[str, str]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        error_list = list(errors or [])
        if field and not error_list:
            error_list.append({"field": field, "message": message})
        if error_list:
            ctx["errors"] = error_list
        super().__init__(message=message, context=ctx)
        self.field = field or (error_list[0]["field"] if error_list else None)
        self.errors = error_list

    @property
    def fields(self) -> List[str]:
        """Names of every field that failed, in report order."""
        return [e["field"] for e in self.errors]


class NotFoundError(WildtrailError):
    """
    Raised when a requested item or collection does not exist.

    The repository converts SQLAlchemy's ``None`` lookups into this error,
    so update/delete/reorder on a stale id all fail the same way.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class InvalidOperationError(WildtrailError):
    """
    Raised for a well-formed request that cannot be applied.

    Only reorder uses this: moving the first item up or the last item down
    when strict boundaries are enabled.
    """

    def __init__(
        self,
        message: str = "This operation cannot be applied",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StorageError(WildtrailError):
    """
    Raised when the backing store fails.

    The message returned to the client is always generic; the original
    exception type is kept in ``context`` for the server log only.
    """

    def __init__(
        self,
        message: str = "A storage error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(WildtrailError):
    """Raised when a client exceeds the per-IP write budget."""

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after
