"""Failure classification tests."""

from __future__ import annotations

import unittest

from pydantic import ValidationError

from app.domain.failures import (
    DuplicateTitleError,
    FailureKind,
    InvalidMovieError,
    MovieNotFoundError,
    StorageUnavailableError,
    classify,
)
from app.errors import api_error_for
from app.schemas.movie import MovieFields


class ClassifyTests(unittest.TestCase):
    def test_store_failures_map_to_declared_kind(self) -> None:
        cases = [
            (InvalidMovieError("year must be an integer"), FailureKind.BAD_INPUT),
            (DuplicateTitleError("Dune"), FailureKind.CONFLICT),
            (MovieNotFoundError("abc"), FailureKind.NOT_FOUND),
            (StorageUnavailableError("disk full"), FailureKind.INTERNAL),
        ]
        for failure, expected in cases:
            with self.subTest(failure=type(failure).__name__):
                self.assertIs(classify(failure), expected)

    def test_classification_ignores_message_text(self) -> None:
        self.assertIs(classify(StorageUnavailableError("not found")), FailureKind.INTERNAL)
        self.assertIs(classify(RuntimeError("duplicate key conflict")), FailureKind.INTERNAL)

    def test_pydantic_validation_errors_are_bad_input(self) -> None:
        with self.assertRaises(ValidationError) as context:
            MovieFields.model_validate({"title": "Dune"})
        self.assertIs(classify(context.exception), FailureKind.BAD_INPUT)

    def test_unexpected_failures_are_internal(self) -> None:
        for failure in (TimeoutError(), OSError("io"), KeyError("title")):
            with self.subTest(failure=type(failure).__name__):
                self.assertIs(classify(failure), FailureKind.INTERNAL)


class ApiErrorMappingTests(unittest.TestCase):
    def test_kinds_map_to_status_codes(self) -> None:
        expected = {
            FailureKind.BAD_INPUT: 400,
            FailureKind.CONFLICT: 409,
            FailureKind.NOT_FOUND: 404,
            FailureKind.INTERNAL: 500,
        }
        for kind, status_code in expected.items():
            with self.subTest(kind=kind):
                error = api_error_for(kind)
                self.assertEqual(error.status_code, status_code)
                self.assertEqual(error.payload.code, status_code)

    def test_internal_errors_never_carry_details(self) -> None:
        error = api_error_for(FailureKind.INTERNAL, details={"reason": "mongo exploded"})
        self.assertIsNone(error.payload.details)
