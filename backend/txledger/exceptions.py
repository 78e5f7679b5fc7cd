"""
Transaction Ledger Backend — Custom Exception Hierarchy
========================================================

What:  Application-specific exceptions for each failure class of a request.
Why:   Each class maps to exactly one HTTP status, so services can raise
       without knowing about HTTP and the global handlers in main.py can
       render one consistent error envelope.
How:   Every exception carries a message, an optional context dict (logged,
       not returned) and the status code its handler responds with.

Exception Hierarchy:
    TxLedgerError (base)
    ├── ValidationError       → 400 Bad Request (payload failed its schema)
    ├── AuthenticationError   → 401 Unauthorized (no valid session cookie)
    ├── NotFoundError         → 404 Not Found (record or referenced type missing)
    └── StoreError            → 500 Internal Server Error (persistence failed)
"""

from typing import Any, Dict, List, Optional


class TxLedgerError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:      User-facing error description (returned in the envelope)
        context:      Additional debug info (logged but NOT returned to client)
        status_code:  HTTP status the global handler responds with
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


class ValidationError(TxLedgerError):
    """
    Raised when a request body fails its schema.

    `details` holds every violation found, never only the first one:

        [
            {"type": "required", "field": "mid", "message": "The 'mid' field is required."},
            {"type": "datePattern", "field": "date", "message": "...",
             "expected": "MM/DD/YYYY", "actual": "2024-03-15"},
        ]
    """

    status_code = 400

    def __init__(
        self,
        details: Optional[List[Dict[str, Any]]] = None,
        message: str = "Validation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.details = details or []


class AuthenticationError(TxLedgerError):
    """Raised when the session cookie is missing, expired or not verifiable."""

    status_code = 401

    def __init__(
        self,
        message: str = "Please login to continue",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(TxLedgerError):
    """
    Raised when a record does not exist.

    The resource label is part of the message so clients can tell a missing
    transaction ("Transaction not found") from a missing referenced type
    ("Transaction type not found").
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)
        self.resource = resource


class StoreError(TxLedgerError):
    """
    Raised when a persistence operation fails.

    The message is the driver's own text (e.g. a constraint violation). The
    handler returns it to the client only while `expose_store_errors` is on.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
