"""In-process movie collection mirrored to an optional snapshot store."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
import logging
import threading
from typing import Any, Protocol
from uuid import uuid4

from pydantic import ValidationError

from app.domain.failures import (
    DuplicateTitleError,
    MovieNotFoundError,
    StorageUnavailableError,
)
from app.repositories.base import MovieRecord, MovieRepository, coerce_movie_fields
from app.schemas.movie import Movie, MovieFields

logger = logging.getLogger(__name__)


class SnapshotPersistence(Protocol):
    def load(self) -> list[dict[str, Any]]: ...

    def save(self, documents: list[dict[str, Any]]) -> None: ...


def _new_movie_id() -> str:
    return uuid4().hex


class InMemoryMovieRepository(MovieRepository):
    """Owned working copy of the collection, synchronized to durable storage.

    The committed mapping is never mutated in place. Writers stage a new
    mapping under the write lock, persist it, and only then publish it, so a
    failed write leaves the previous state untouched and readers never see a
    half-applied change.
    """

    def __init__(
        self,
        persistence: SnapshotPersistence | None = None,
        *,
        lock_timeout: float = 5.0,
        id_factory: Callable[[], str] = _new_movie_id,
    ) -> None:
        self._persistence = persistence
        self._lock = threading.Lock()
        self._lock_timeout = lock_timeout
        self._id_factory = id_factory
        self._records: dict[str, MovieRecord] = self._load()
        self.write_count = 0

    def list_movies(self) -> list[MovieRecord]:
        return list(self._records.values())

    def get_movie(self, movie_id: str) -> MovieRecord:
        record = self._records.get(movie_id)
        if record is None:
            raise MovieNotFoundError(movie_id)
        return record

    def create_movie(self, fields: MovieFields | Mapping[str, Any]) -> MovieRecord:
        movie_fields = coerce_movie_fields(fields)
        with self._write_lock():
            current = self._records
            if self._title_owner(current, movie_fields.title) is not None:
                raise DuplicateTitleError(movie_fields.title)

            movie_id = self._id_factory()
            while movie_id in current:
                movie_id = self._id_factory()
            record = MovieRecord.from_fields(movie_id, movie_fields)
            self._commit({**current, movie_id: record})
        return record

    def update_movie(self, movie_id: str, fields: MovieFields | Mapping[str, Any]) -> MovieRecord:
        movie_fields = coerce_movie_fields(fields)
        with self._write_lock():
            current = self._records
            if movie_id not in current:
                raise MovieNotFoundError(movie_id)
            owner = self._title_owner(current, movie_fields.title)
            if owner is not None and owner != movie_id:
                raise DuplicateTitleError(movie_fields.title)

            record = MovieRecord.from_fields(movie_id, movie_fields)
            self._commit({**current, movie_id: record})
        return record

    def delete_movie(self, movie_id: str) -> None:
        with self._write_lock():
            current = self._records
            if movie_id not in current:
                raise MovieNotFoundError(movie_id)
            self._commit({key: record for key, record in current.items() if key != movie_id})

    @contextmanager
    def _write_lock(self) -> Iterator[None]:
        if not self._lock.acquire(timeout=self._lock_timeout):
            logger.error("store.lock_timeout timeout_seconds=%s", self._lock_timeout)
            raise StorageUnavailableError("Timed out waiting for the movie store write lock")
        try:
            yield
        finally:
            self._lock.release()

    def _commit(self, staged: dict[str, MovieRecord]) -> None:
        if self._persistence is not None:
            try:
                self._persistence.save([record.to_document() for record in staged.values()])
            except OSError as exc:
                logger.error("store.persist_failed error=%s", exc.__class__.__name__)
                raise StorageUnavailableError("Failed to persist the movie collection") from exc
        self._records = staged
        self.write_count += 1

    @staticmethod
    def _title_owner(records: Mapping[str, MovieRecord], title: str) -> str | None:
        for record in records.values():
            if record.title == title:
                return record.id
        return None

    def _load(self) -> dict[str, MovieRecord]:
        if self._persistence is None:
            return {}

        records: dict[str, MovieRecord] = {}
        titles: set[str] = set()
        for document in self._persistence.load():
            try:
                movie = Movie.model_validate(document)
            except ValidationError as exc:
                raise StorageUnavailableError("Persisted movie document has an unexpected shape") from exc
            if movie.id in records or movie.title in titles:
                raise StorageUnavailableError(f"Persisted collection repeats movie {movie.id!r}")
            records[movie.id] = MovieRecord.from_fields(movie.id, movie)
            titles.add(movie.title)

        logger.info("store.loaded count=%s", len(records))
        return records


__all__ = ["InMemoryMovieRepository", "SnapshotPersistence"]
