"""
Records Service - Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions raised by routes and services.
How:   Each exception carries a message and an optional context dict. The
       handlers registered in main.py map them to status codes; error
       responses carry no body, details only go to the server log.

Exception Hierarchy:
    RecordsServiceError (base)
    ├── ValidationError   → 400 Bad Request (unparsable id, malformed JSON body)
    ├── NotFoundError     → 404 Not Found (no row for a keyed read/update/delete)
    └── DatabaseError     → 500 Internal Server Error (acquire, query, exec failures)
"""

from typing import Any, Dict, Optional


class RecordsServiceError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Short description of the failure (logged, never returned)
        context:  Additional debug info for the log entry
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(RecordsServiceError):
    """
    Raised when client input cannot be parsed.

    When:    Non-numeric or out-of-range record id, body that is not a JSON
             object with string `name` and `type`.
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


class NotFoundError(RecordsServiceError):
    """
    Raised when no row matches the requested id.

    When:    Get finds no row; Replace or Delete affect zero rows.
    HTTP:    404 Not Found

    Replace reports zero affected rows the same way whether the id never
    existed or the update matched nothing; callers cannot tell the two apart.
    """

    def __init__(
        self,
        resource: str = "record",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(RecordsServiceError):
    """
    Raised when a database operation fails.

    When:    Pool exhausted or unreachable, statement failed, row could not be read.
    HTTP:    500 Internal Server Error

    The original driver exception is chained (`raise ... from e`) so the
    handler can log the full cause.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
