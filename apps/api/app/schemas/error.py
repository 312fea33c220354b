"""API error response schemas."""

from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    code: int
    message: str
    details: dict[str, Any] | None = None
