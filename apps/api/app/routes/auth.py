"""Token issuance and identity routes."""

from datetime import timedelta
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from app.adapters.auth import TokenVerifier
from app.core.config import Settings
from app.core.logging_safety import safe_log_identifier
from app.routes.dependencies import (
    AUTH_COOKIE_NAME,
    AUTH_HEADER_NAME,
    get_app_settings,
    get_current_identity,
    get_token_verifier,
)
from app.schemas.auth import Identity, IssuedToken, IssueTokenRequest
from app.schemas.error import ErrorResponse

router = APIRouter(tags=["Auth"])
logger = logging.getLogger(__name__)


@router.post(
    "/auth/token",
    response_model=IssuedToken,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def issue_token(
    payload: IssueTokenRequest,
    response: Response,
    settings: Annotated[Settings, Depends(get_app_settings)],
    verifier: Annotated[TokenVerifier, Depends(get_token_verifier)],
) -> IssuedToken:
    ttl_seconds = settings.token_ttl_seconds
    token = verifier.issue_token(payload.username, timedelta(seconds=ttl_seconds))

    response.set_cookie(
        AUTH_COOKIE_NAME,
        token,
        max_age=ttl_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )
    response.headers[AUTH_HEADER_NAME] = f"Bearer {token}"
    logger.info(
        "auth.token_issued subject=%s ttl_seconds=%s",
        safe_log_identifier(payload.username, prefix="sub"),
        ttl_seconds,
    )
    return IssuedToken(token=token, expires_in=ttl_seconds)


@router.delete(
    "/auth/token",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def clear_token(settings: Annotated[Settings, Depends(get_app_settings)]) -> Response:
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(AUTH_COOKIE_NAME, httponly=True, samesite="lax", secure=settings.cookie_secure)
    logger.info("auth.token_cleared")
    return response


@router.get("/user", response_model=Identity | None)
async def current_user(
    identity: Annotated[Identity | None, Depends(get_current_identity)],
) -> Identity | None:
    return identity
