"""Application exception types."""

from app.domain.failures import FailureKind
from app.schemas.error import ErrorResponse

_STATUS_BY_KIND: dict[FailureKind, tuple[int, str]] = {
    FailureKind.BAD_INPUT: (400, "Bad Request"),
    FailureKind.CONFLICT: (409, "Conflict"),
    FailureKind.NOT_FOUND: (404, "Not Found"),
    FailureKind.INTERNAL: (500, "Internal Server Error"),
}


class ApiError(Exception):
    """Structured API error that maps directly to contract error payloads."""

    def __init__(self, status_code: int, message: str, details: dict | None = None) -> None:
        self.status_code = status_code
        self.payload = ErrorResponse(code=status_code, message=message, details=details)
        super().__init__(message)


def api_error_for(kind: FailureKind, details: dict | None = None) -> ApiError:
    """Build the boundary error for a classified failure."""
    status_code, message = _STATUS_BY_KIND[kind]
    if kind is FailureKind.INTERNAL:
        details = None
    return ApiError(status_code=status_code, message=message, details=details)


__all__ = ["ApiError", "api_error_for"]
