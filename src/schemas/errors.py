"""
Error response schemas for API endpoints.

Every error the API returns uses the same envelope:
``{"error": {"message": "..."}}``.
"""
from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Human-readable error message."""

    message: str


class ErrorResponse(BaseModel):
    """Error envelope returned for 4xx/5xx responses."""

    error: ErrorDetail

    @classmethod
    def from_message(cls, message: str) -> "ErrorResponse":
        """Build an envelope around a single message."""
        return cls(error=ErrorDetail(message=message))
