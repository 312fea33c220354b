"""Movie service layer."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from app.domain.failures import FailureKind, StorageUnavailableError, classify
from app.errors import ApiError, api_error_for
from app.repositories.base import MovieRecord, MovieRepository
from app.schemas.movie import Movie, MovieFields

logger = logging.getLogger(__name__)


class MovieService:
    def __init__(self, repository: MovieRepository) -> None:
        self._repository = repository

    def list_movies(self) -> list[Movie]:
        try:
            return [self._to_movie(record) for record in self._repository.list_movies()]
        except Exception as exc:
            raise self._rejected("list", exc) from exc

    def get_movie(self, *, movie_id: str) -> Movie:
        try:
            return self._to_movie(self._repository.get_movie(movie_id))
        except Exception as exc:
            raise self._rejected("get", exc, movie_id=movie_id) from exc

    def create_movie(self, *, fields: MovieFields) -> Movie:
        try:
            movie = self._to_movie(self._repository.create_movie(fields))
        except Exception as exc:
            raise self._rejected("create", exc) from exc
        logger.info("movies.created movie_id=%s", movie.id)
        return movie

    def update_movie(self, *, movie_id: str, fields: MovieFields) -> Movie:
        try:
            movie = self._to_movie(self._repository.update_movie(movie_id, fields))
        except Exception as exc:
            raise self._rejected("update", exc, movie_id=movie_id) from exc
        logger.info("movies.updated movie_id=%s", movie.id)
        return movie

    def delete_movie(self, *, movie_id: str) -> None:
        try:
            self._repository.delete_movie(movie_id)
        except Exception as exc:
            raise self._rejected("delete", exc, movie_id=movie_id) from exc
        logger.info("movies.deleted movie_id=%s", movie_id)

    @staticmethod
    def _rejected(operation: str, exc: Exception, *, movie_id: str | None = None) -> ApiError:
        kind = classify(exc)
        if kind is FailureKind.INTERNAL:
            logger.exception("movies.storage_failure operation=%s movie_id=%s", operation, movie_id)
            return api_error_for(kind)

        logger.info(
            "movies.rejected operation=%s movie_id=%s kind=%s",
            operation,
            movie_id,
            kind.value,
        )
        if kind is FailureKind.NOT_FOUND:
            return api_error_for(kind)
        return api_error_for(kind, details={"reason": str(exc)})

    @staticmethod
    def _to_movie(record: MovieRecord) -> Movie:
        try:
            return Movie(
                id=record.id,
                title=record.title,
                description=record.description,
                year=record.year,
                director=record.director,
                producers=list(record.producers),
            )
        except ValidationError as exc:
            raise StorageUnavailableError(f"Stored movie {record.id!r} has an unexpected shape") from exc
