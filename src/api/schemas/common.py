"""Common Pydantic schemas shared across the API."""

from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standardized error response."""

    error_code: str
    message: str
    details: Any | None = None


class MessageResponse(BaseModel):
    """Simple message response."""

    message: str


def not_blank(value: str) -> str:
    """Reject strings that are empty once surrounding whitespace is removed."""
    if not value.strip():
        raise ValueError("must not be blank")
    return value
