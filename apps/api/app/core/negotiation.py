"""JSON content negotiation checks applied to every request."""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse

from app.schemas.error import ErrorResponse

_JSON_RANGES = frozenset({"*/*", "application/*", "application/json"})


def _media_type(value: str) -> str:
    return value.split(";", 1)[0].strip().lower()


def _quality(parameters: list[str]) -> float:
    for parameter in parameters:
        name, _, raw = parameter.partition("=")
        if name.strip().lower() == "q":
            try:
                return float(raw.strip())
            except ValueError:
                return 0.0
    return 1.0


def is_json_media_type(media_type: str) -> bool:
    return media_type == "application/json" or media_type.endswith("+json")


def accepts_json(accept: str | None) -> bool:
    """Return whether an ``Accept`` header admits a JSON response.

    A missing or blank header accepts anything.
    """
    if accept is None or not accept.strip():
        return True
    for media_range in accept.split(","):
        media_type, *parameters = media_range.split(";")
        media_type = media_type.strip().lower()
        if not media_type or _quality(parameters) <= 0:
            continue
        if media_type in _JSON_RANGES or is_json_media_type(media_type):
            return True
    return False


def has_body(request: Request) -> bool:
    if "transfer-encoding" in request.headers:
        return True
    length = request.headers.get("content-length")
    if length is None:
        return False
    try:
        return int(length) > 0
    except ValueError:
        return True


def _error(status_code: int, message: str) -> JSONResponse:
    payload = ErrorResponse(code=status_code, message=message)
    return JSONResponse(status_code=status_code, content=payload.model_dump(exclude_none=True))


async def enforce_json_negotiation(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    if not accepts_json(request.headers.get("accept")):
        return _error(status.HTTP_406_NOT_ACCEPTABLE, "Not Acceptable")

    if has_body(request) and not is_json_media_type(_media_type(request.headers.get("content-type", ""))):
        return _error(status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, "Unsupported Media Type")

    return await call_next(request)
