"""Unit tests for the exceptions module."""

from http import HTTPStatus

import pytest
from pytest_check import check

from superhero_api.core.exceptions import (
    ConflictError,
    ErrorCode,
    InvalidRequestError,
    NotFoundError,
    SuperheroError,
)


@pytest.mark.unit
class TestErrorCode:
    """Test the ErrorCode enum."""

    @pytest.mark.parametrize(
        ("enum_value", "expected_string"),
        [
            (ErrorCode.INTERNAL_ERROR, "INTERNAL_ERROR"),
            (ErrorCode.VALIDATION_ERROR, "VALIDATION_ERROR"),
            (ErrorCode.NOT_FOUND, "NOT_FOUND"),
            (ErrorCode.CONFLICT, "CONFLICT"),
            (ErrorCode.INVALID_REQUEST, "INVALID_REQUEST"),
        ],
    )
    def test_error_code_values(
        self, enum_value: ErrorCode, expected_string: str
    ) -> None:
        """Verify all ErrorCode values are correctly defined."""
        assert enum_value.value == expected_string


@pytest.mark.unit
class TestSuperheroError:
    """Test the base exception."""

    def test_defaults(self) -> None:
        error = SuperheroError("boom")

        with check:
            assert error.error_code is ErrorCode.INTERNAL_ERROR
        with check:
            assert error.status_code is HTTPStatus.INTERNAL_SERVER_ERROR
        with check:
            assert error.message == "boom"
        with check:
            assert error.superhero_id is None
        with check:
            assert error.details is None

    def test_details_carry_the_id(self) -> None:
        """Test the targeted identifier is exposed as details."""
        assert SuperheroError("x", 7).details == {"superhero_id": 7}

    def test_details_keep_unparsed_id(self) -> None:
        """Test an identifier that is not an integer is kept as received."""
        assert SuperheroError("x", "abc").details == {"superhero_id": "abc"}

    def test_str_and_repr(self) -> None:
        error = ConflictError("taken", 1)

        assert str(error) == "[CONFLICT] taken"
        assert repr(error) == "ConflictError(message='taken', superhero_id=1)"

    def test_is_an_exception(self) -> None:
        with pytest.raises(SuperheroError, match="gone"):
            raise NotFoundError("gone", 3)


@pytest.mark.unit
class TestSpecializedExceptions:
    """Test the exceptions raised for failed store outcomes."""

    @pytest.mark.parametrize(
        ("error_class", "expected_code", "expected_status"),
        [
            (NotFoundError, ErrorCode.NOT_FOUND, HTTPStatus.NOT_FOUND),
            (ConflictError, ErrorCode.CONFLICT, HTTPStatus.CONFLICT),
            (InvalidRequestError, ErrorCode.INVALID_REQUEST, HTTPStatus.BAD_REQUEST),
        ],
    )
    def test_code_and_status(
        self,
        error_class: type[SuperheroError],
        expected_code: ErrorCode,
        expected_status: HTTPStatus,
    ) -> None:
        """Test each class fixes its error code and HTTP status."""
        error = error_class("message", 5)

        with check:
            assert isinstance(error, SuperheroError)
        with check:
            assert error.error_code is expected_code
        with check:
            assert error.status_code is expected_status
        with check:
            assert error.details == {"superhero_id": 5}

    def test_codes_are_class_level(self) -> None:
        """Test the code and status are readable without an instance."""
        assert NotFoundError.status_code == 404
        assert ConflictError.error_code.value == "CONFLICT"
