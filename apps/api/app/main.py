"""FastAPI application entrypoint.

Run with ``uvicorn --factory app.main:create_app``.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.adapters.auth import JwtTokenVerifier, TokenVerifier
from app.core.config import Settings, get_settings
from app.core.logging_safety import configure_app_logging
from app.core.negotiation import enforce_json_negotiation
from app.domain.failures import classify
from app.errors import ApiError, api_error_for
from app.repositories.base import MovieRepository
from app.repositories.factory import build_movie_repository
from app.routes import auth_router, meta_router, movies_router

logger = logging.getLogger(__name__)


def _validation_details(exc: RequestValidationError) -> dict:
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in exc.errors()
    ]
    return {"errors": errors}


def create_app(
    settings: Settings | None = None,
    *,
    repository: MovieRepository | None = None,
    token_verifier: TokenVerifier | None = None,
) -> FastAPI:
    """Build the application; the secret and the store are fixed for its lifetime."""
    settings = settings or get_settings()
    configure_app_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        app.state.repository.close()
        logger.info("store.closed backend=%s", settings.storage_backend)

    app = FastAPI(title="Movies API", version=settings.api_version, lifespan=lifespan)
    app.state.settings = settings
    app.state.repository = repository or build_movie_repository(settings)
    app.state.token_verifier = token_verifier or JwtTokenVerifier(
        settings.token_secret,
        algorithm=settings.token_algorithm,
    )
    logger.info("app.started backend=%s version=%s", settings.storage_backend, settings.api_version)

    app.middleware("http")(enforce_json_negotiation)

    @app.exception_handler(ApiError)
    async def handle_api_error(_, exc: ApiError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.payload.model_dump(mode="json", exclude_none=True),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        error = api_error_for(classify(exc), details=_validation_details(exc))
        return JSONResponse(
            status_code=error.status_code,
            content=error.payload.model_dump(mode="json", exclude_none=True),
        )

    app.include_router(meta_router)
    app.include_router(movies_router)
    app.include_router(auth_router)

    return app
