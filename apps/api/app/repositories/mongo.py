"""MongoDB-backed movie repository."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
import logging
from typing import Any

from bson import ObjectId
from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError
from pydantic import ValidationError

from app.core.config import Settings
from app.domain.failures import (
    DuplicateTitleError,
    MovieNotFoundError,
    StorageUnavailableError,
)
from app.repositories.base import MovieRecord, MovieRepository, coerce_movie_fields
from app.schemas.movie import MovieFields

logger = logging.getLogger(__name__)

TITLE_INDEX_NAME = "title_unique"


def _object_id(movie_id: str) -> ObjectId | None:
    if not ObjectId.is_valid(movie_id):
        return None
    return ObjectId(movie_id)


def _to_record(document: Mapping[str, Any]) -> MovieRecord:
    """Normalize a stored document; BSON doubles holding whole years become ints."""
    fields = {key: value for key, value in document.items() if key != "_id"}
    year = fields.get("year")
    if isinstance(year, float) and year.is_integer():
        fields["year"] = int(year)
    try:
        movie_fields = MovieFields.model_validate(fields)
    except ValidationError as exc:
        raise StorageUnavailableError(f"Stored movie {document.get('_id')!s} has an unexpected shape") from exc
    return MovieRecord.from_fields(str(document["_id"]), movie_fields)


class MongoMovieRepository(MovieRepository):
    """Document-store repository.

    Title uniqueness relies on a unique index and per-document atomicity of
    the server, so no in-process lock is taken.
    """

    def __init__(self, collection: Collection, *, client: MongoClient | None = None) -> None:
        self._collection = collection
        self._client = client

    def ensure_indexes(self) -> None:
        with self._backend_call("ensure_indexes"):
            self._collection.create_index([("title", ASCENDING)], unique=True, name=TITLE_INDEX_NAME)

    def list_movies(self) -> list[MovieRecord]:
        with self._backend_call("list"):
            documents = list(self._collection.find({}).sort("_id", ASCENDING))
        return [_to_record(document) for document in documents]

    def get_movie(self, movie_id: str) -> MovieRecord:
        object_id = _object_id(movie_id)
        if object_id is None:
            raise MovieNotFoundError(movie_id)
        with self._backend_call("get"):
            document = self._collection.find_one({"_id": object_id})
        if document is None:
            raise MovieNotFoundError(movie_id)
        return _to_record(document)

    def create_movie(self, fields: MovieFields | Mapping[str, Any]) -> MovieRecord:
        movie_fields = coerce_movie_fields(fields)
        document = movie_fields.model_dump()
        try:
            with self._backend_call("create"):
                result = self._collection.insert_one(document)
        except DuplicateKeyError as exc:
            raise DuplicateTitleError(movie_fields.title) from exc
        return MovieRecord.from_fields(str(result.inserted_id), movie_fields)

    def update_movie(self, movie_id: str, fields: MovieFields | Mapping[str, Any]) -> MovieRecord:
        movie_fields = coerce_movie_fields(fields)
        object_id = _object_id(movie_id)
        if object_id is None:
            raise MovieNotFoundError(movie_id)
        try:
            with self._backend_call("update"):
                result = self._collection.update_one({"_id": object_id}, {"$set": movie_fields.model_dump()})
        except DuplicateKeyError as exc:
            raise DuplicateTitleError(movie_fields.title) from exc
        if result.matched_count == 0:
            raise MovieNotFoundError(movie_id)
        return MovieRecord.from_fields(movie_id, movie_fields)

    def delete_movie(self, movie_id: str) -> None:
        object_id = _object_id(movie_id)
        if object_id is None:
            raise MovieNotFoundError(movie_id)
        with self._backend_call("delete"):
            result = self._collection.delete_one({"_id": object_id})
        if result.deleted_count == 0:
            raise MovieNotFoundError(movie_id)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()

    @contextmanager
    def _backend_call(self, operation: str) -> Iterator[None]:
        try:
            yield
        except DuplicateKeyError:
            raise
        except PyMongoError as exc:
            logger.error("store.backend_failed operation=%s error=%s", operation, exc.__class__.__name__)
            raise StorageUnavailableError(f"MongoDB {operation} failed") from exc


def connect_mongo(settings: Settings) -> MongoMovieRepository:
    """Open a client with bounded waits and prepare the movies collection."""
    client: MongoClient = MongoClient(
        settings.mongo_url,
        serverSelectionTimeoutMS=settings.mongo_timeout_ms,
        connectTimeoutMS=settings.mongo_timeout_ms,
        socketTimeoutMS=settings.mongo_timeout_ms,
    )
    collection = client[settings.mongo_database][settings.mongo_collection]
    repository = MongoMovieRepository(collection, client=client)
    try:
        repository.ensure_indexes()
    except StorageUnavailableError:
        client.close()
        raise
    logger.info(
        "store.connected backend=mongo database=%s collection=%s",
        settings.mongo_database,
        settings.mongo_collection,
    )
    return repository


__all__ = ["MongoMovieRepository", "TITLE_INDEX_NAME", "connect_mongo"]
