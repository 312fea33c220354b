"""Select the movie repository backend from settings."""

from __future__ import annotations

from app.core.config import Settings
from app.repositories.base import MovieRepository
from app.repositories.json_file import JsonFileSnapshot
from app.repositories.memory import InMemoryMovieRepository
from app.repositories.mongo import connect_mongo


def build_movie_repository(settings: Settings) -> MovieRepository:
    if settings.storage_backend == "mongo":
        return connect_mongo(settings)
    persistence = JsonFileSnapshot(settings.data_file) if settings.storage_backend == "file" else None
    return InMemoryMovieRepository(persistence, lock_timeout=settings.store_lock_timeout_seconds)
