"""
VSRAdmin Backend - Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the failures a request can hit.
How:   Each exception carries a message and optional context dict. Handlers
       translate them into Failure envelopes with the matching HTTP status.
Who:   Raised by the logo store and the SQL collaborators; caught by routes.

Exception Hierarchy:
    VSRAdminError (base)
    ├── MalformedPayloadError   → 400 Bad Request (input could not be parsed)
    ├── InvalidPageError        → 400 Bad Request (pageno < 1 under the reject policy)
    ├── FileWriteError          → 500 Internal Server Error (logo not persisted)
    └── CollaboratorError       → 500 Internal Server Error (service/persistence call failed)

Expected input failures do not travel as exceptions: validators return a
`PayloadResult` (see `vsradmin.results`) whose messages come from these classes.
"""

from typing import Any, Dict, Optional


class VSRAdminError(Exception):
    """
    Base exception for all VSRAdmin application errors.

    Attributes:
        message:     Human-readable description (returned in the envelope message)
        context:     Additional debug info (logged, not returned to the client)
        status_code: HTTP status the handlers answer with
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class MalformedPayloadError(VSRAdminError):
    """
    Raised when inbound data cannot be turned into a typed request model.

    When:    Missing `customerdata`, invalid JSON, null/empty object, wrong field types.
    HTTP:    400 Bad Request; the request is aborted before any side effect.
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Invalid request payload",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class InvalidPageError(VSRAdminError):
    """Raised for a non-positive page number when the page policy is `reject`."""

    status_code = 400

    def __init__(self, pageno: int, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["pageno"] = pageno
        super().__init__(
            message=f"Invalid page number {pageno}. Page numbers start at 1.",
            context=ctx,
        )
        self.pageno = pageno


class FileWriteError(VSRAdminError):
    """
    Raised when an uploaded logo could not be persisted.

    When:    Permission denied, disk full, storage root unreachable.
    HTTP:    500 Internal Server Error. The record creation fails as a whole,
             since a Success envelope cannot say "saved without image".
    """

    def __init__(
        self,
        message: str = "Failed to save the restaurant logo.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class CollaboratorError(VSRAdminError):
    """
    Raised when a service/persistence collaborator fails.

    The underlying error text is kept in the message: the admin
    console shows it to the operator for diagnosis.
    """

    def __init__(
        self,
        message: str = "A backing service error occurred.",
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if operation:
            ctx["operation"] = operation
        super().__init__(message=message, context=ctx)
        self.operation = operation
