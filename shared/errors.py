"""
Shared error handling for the Hello Graph sample.
"""

from typing import Dict, Any, Optional

from opentelemetry import trace
from pydantic import BaseModel, Field

from shared.logging import get_request_id


class ErrorResponse(BaseModel):
    """Standard error response format."""

    request_id: Optional[str] = None
    trace_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


def current_trace_id() -> Optional[str]:
    """Trace ID of the active span, if one is recording."""
    current_span = trace.get_current_span()
    if current_span and current_span.is_recording():
        span_context = current_span.get_span_context()
        if span_context.trace_id != 0:
            return f"{span_context.trace_id:032x}"
    return None


class HelloServiceException(Exception):
    """Base exception for service errors that reach the routing layer."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None,
                 status_code: int = 500):
        self.code = code
        self.message = message
        self.details = details or {}
        self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            request_id=get_request_id(),
            trace_id=current_trace_id(),
            code=self.code,
            message=self.message,
            details=self.details
        )


def internal_error_response() -> ErrorResponse:
    """Payload for exceptions nobody handled."""
    return ErrorResponse(
        request_id=get_request_id(),
        trace_id=current_trace_id(),
        code="INTERNAL_ERROR",
        message="Internal server error",
    )
