"""
Tenistas API — Custom Exception Hierarchy
===========================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services, repositories and routes; caught by global handlers.

Exception Hierarchy:
    TenistasError (base)       → 500 Internal Server Error
    ├── ValidationError        → 400 Bad Request (client can fix)
    ├── NotFoundError          → 404 Not Found
    └── DatabaseError          → 500 Internal Server Error (backing store failed)

Repositories never raise NotFoundError from lookups: absence is returned as
None and the service layer decides whether it is an error.
"""

from typing import Any, Dict, List, Optional

from tenistas.schemas.raqueta import FieldError


class TenistasError(Exception):
    """
    Base exception for all Tenistas application errors.

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


class ValidationError(TenistasError):
    """
    Raised when client input fails validation.

    When:    Missing/blank brand or model, missing or negative price,
             malformed JSON body or path parameter.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Request validation failed",
            "details": {"errors": [{"field": "price", "message": "..."}]}
        }
    """

    def __init__(
        self,
        errors: Optional[List[FieldError]] = None,
        message: str = "Request validation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.errors = list(errors or [])
        ctx = context or {}
        ctx["errors"] = [error.model_dump() for error in self.errors]
        super().__init__(message=message, context=ctx)


class NotFoundError(TenistasError):
    """
    Raised when a requested resource does not exist.

    When:    Unknown id or external id on lookup, update or delete.
    HTTP:    404 Not Found
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


class DatabaseError(TenistasError):
    """
    Raised when the relational backing store fails unexpectedly.

    When:    Connection lost, constraint violation, deadlock.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the original
    error type is kept in context and logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
