"""
Transaction Ledger Backend — Response Envelope Schemas
=======================================================

What:  The single JSON envelope every endpoint answers with, plus the
       violation and health models.
Why:   Clients parse one shape everywhere:

           {"code": 200, "status": "success", "message": "...", "data": ...}
           {"code": 404, "status": "error", "message": "Transaction not found",
            "data": {"error": "Transaction not found"}, "request_id": "a1b2c3d4"}
"""

from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

DataT = TypeVar("DataT")


class Envelope(BaseModel, Generic[DataT]):
    """Success envelope; `data` is the record, the list, or null."""

    code: int = Field(description="HTTP status code, repeated in the body")
    status: str = Field(default="success", description="'success' or 'error'")
    message: str = Field(description="Human-readable outcome")
    data: Optional[DataT] = Field(default=None)


class Violation(BaseModel):
    """One failed rule for one field of a request body."""

    type: str = Field(description="Rule that failed, e.g. required, numberMin, datePattern")
    field: str = Field(description="Offending field name ('body' for the whole payload)")
    message: str
    expected: Optional[Any] = None
    actual: Optional[Any] = None


class ErrorData(BaseModel):
    error: str
    details: Optional[List[Violation]] = None


class ErrorEnvelope(BaseModel):
    """Error envelope rendered by the global exception handlers."""

    code: int
    status: str = "error"
    message: str
    data: ErrorData
    request_id: Optional[str] = None


class HealthResponse(BaseModel):
    """Health report for load balancers and monitoring."""

    status: str = Field(description="healthy or unhealthy")
    version: str
    database: str = Field(description="connected or disconnected")
    uptime_seconds: float
