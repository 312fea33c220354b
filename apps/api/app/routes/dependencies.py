"""Dependency wiring for routes."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, Request, Security
from fastapi.security import APIKeyCookie, APIKeyHeader

from app.adapters.auth import TokenVerifier
from app.core.config import Settings
from app.core.logging_safety import safe_log_identifier
from app.repositories.base import MovieRepository
from app.schemas.auth import Identity
from app.services.identity import resolve_identity
from app.services.movies import MovieService

AUTH_COOKIE_NAME = "authorization"
AUTH_HEADER_NAME = "Authorization"

cookie_token_scheme = APIKeyCookie(name=AUTH_COOKIE_NAME, auto_error=False, scheme_name="cookieAuth")
header_token_scheme = APIKeyHeader(name=AUTH_HEADER_NAME, auto_error=False, scheme_name="bearerAuth")
logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_verifier(request: Request) -> TokenVerifier:
    return request.app.state.token_verifier


async def get_current_identity(
    request: Request,
    cookie_token: Annotated[str | None, Security(cookie_token_scheme)],
    header_token: Annotated[str | None, Security(header_token_scheme)],
    verifier: Annotated[TokenVerifier, Depends(get_token_verifier)],
) -> Identity | None:
    """Resolve the optional request identity; never rejects the request."""
    identity = resolve_identity([cookie_token, header_token], verifier)
    if identity is None:
        logger.debug(
            "auth.anonymous method=%s path=%s has_cookie=%s has_header=%s",
            request.method,
            request.url.path,
            cookie_token is not None,
            header_token is not None,
        )
        return None

    logger.info(
        "auth.accepted method=%s path=%s subject=%s",
        request.method,
        request.url.path,
        safe_log_identifier(identity.subject, prefix="sub"),
    )
    request.state.identity = identity
    return identity


def get_repository(request: Request) -> MovieRepository:
    return request.app.state.repository


def get_movie_service(repository: Annotated[MovieRepository, Depends(get_repository)]) -> MovieService:
    return MovieService(repository)
