"""Movie store failure taxonomy and classification."""

from __future__ import annotations

from enum import Enum

from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError


class FailureKind(str, Enum):
    BAD_INPUT = "bad_input"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"


class MovieStoreError(Exception):
    """Base class for failures raised by movie repositories."""

    kind: FailureKind = FailureKind.INTERNAL


class InvalidMovieError(MovieStoreError):
    """A required field is missing or has the wrong type."""

    kind = FailureKind.BAD_INPUT


class DuplicateTitleError(MovieStoreError):
    """Another record already holds the requested title."""

    kind = FailureKind.CONFLICT

    def __init__(self, title: str) -> None:
        self.title = title
        super().__init__(f"A movie titled {title!r} already exists")


class MovieNotFoundError(MovieStoreError):
    kind = FailureKind.NOT_FOUND

    def __init__(self, movie_id: str) -> None:
        self.movie_id = movie_id
        super().__init__(f"No movie with id {movie_id!r}")


class StorageUnavailableError(MovieStoreError):
    """The durable backend could not complete the operation in time."""

    kind = FailureKind.INTERNAL


def classify(failure: BaseException) -> FailureKind:
    """Map any failure onto a result category by its declared type."""
    if isinstance(failure, MovieStoreError):
        return failure.kind
    if isinstance(failure, (ValidationError, RequestValidationError)):
        return FailureKind.BAD_INPUT
    return FailureKind.INTERNAL


__all__ = [
    "DuplicateTitleError",
    "FailureKind",
    "InvalidMovieError",
    "MovieNotFoundError",
    "MovieStoreError",
    "StorageUnavailableError",
    "classify",
]
