"""Movie repository interface shared by every persistence backend."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from app.domain.failures import InvalidMovieError
from app.schemas.movie import MovieFields


@dataclass(slots=True, frozen=True)
class MovieRecord:
    id: str
    title: str
    description: str
    year: int
    director: str
    producers: tuple[str, ...]

    @classmethod
    def from_fields(cls, movie_id: str, fields: MovieFields) -> MovieRecord:
        return cls(
            id=movie_id,
            title=fields.title,
            description=fields.description,
            year=fields.year,
            director=fields.director,
            producers=tuple(fields.producers),
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "year": self.year,
            "director": self.director,
            "producers": list(self.producers),
        }


def coerce_movie_fields(fields: MovieFields | Mapping[str, Any]) -> MovieFields:
    """Validate raw input into ``MovieFields`` or raise ``InvalidMovieError``."""
    if isinstance(fields, MovieFields):
        return fields
    try:
        return MovieFields.model_validate(fields)
    except ValidationError as exc:
        raise InvalidMovieError(str(exc)) from exc


class MovieRepository(ABC):
    """Canonical owner of the movie collection.

    Mutating calls return only after the change is durable. Title uniqueness
    is enforced here, never by callers.
    """

    @abstractmethod
    def list_movies(self) -> list[MovieRecord]:
        """Return every record in a stable order."""

    @abstractmethod
    def get_movie(self, movie_id: str) -> MovieRecord:
        """Return one record or raise ``MovieNotFoundError``."""

    @abstractmethod
    def create_movie(self, fields: MovieFields | Mapping[str, Any]) -> MovieRecord:
        """Insert a record under a freshly assigned id."""

    @abstractmethod
    def update_movie(self, movie_id: str, fields: MovieFields | Mapping[str, Any]) -> MovieRecord:
        """Replace every mutable field of an existing record."""

    @abstractmethod
    def delete_movie(self, movie_id: str) -> None:
        """Remove a record; its id is never handed out again."""

    def close(self) -> None:
        """Release backend resources."""


__all__ = ["MovieRecord", "MovieRepository", "coerce_movie_fields"]
