"""Exceptions for superhero operations that fail.

The store never raises: it answers with an ``Outcome``. Routes turn failed
outcomes into one of the exceptions below, and the handlers registered in
``superhero_api.api.middleware.error_handler`` render them. Each subclass
fixes its error code and HTTP status, so raising the right class is all a
route has to do.
"""

from enum import Enum
from http import HTTPStatus
from typing import Any, ClassVar


class ErrorCode(Enum):
    """Machine-readable codes placed in error responses."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INVALID_REQUEST = "INVALID_REQUEST"


class SuperheroError(Exception):
    """A superhero operation that could not be applied.

    Args:
        message: Text shown to the client.
        superhero_id: Identifier the operation targeted, as parsed or as
            received when it was not an integer.
    """

    error_code: ClassVar[ErrorCode] = ErrorCode.INTERNAL_ERROR
    status_code: ClassVar[HTTPStatus] = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str, superhero_id: int | str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.superhero_id = superhero_id

    @property
    def details(self) -> dict[str, Any] | None:
        """Structured details for the error body, if the error has any."""
        if self.superhero_id is None:
            return None
        return {"superhero_id": self.superhero_id}

    def __str__(self) -> str:
        return f"[{self.error_code.value}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"superhero_id={self.superhero_id!r})"
        )


class NotFoundError(SuperheroError):
    """No superhero has the requested identifier. Rendered without a body."""

    error_code = ErrorCode.NOT_FOUND
    status_code = HTTPStatus.NOT_FOUND


class ConflictError(SuperheroError):
    """A create targeted an identifier that is already taken."""

    error_code = ErrorCode.CONFLICT
    status_code = HTTPStatus.CONFLICT


class InvalidRequestError(SuperheroError):
    """An update targeted an identifier that does not exist."""

    error_code = ErrorCode.INVALID_REQUEST
    status_code = HTTPStatus.BAD_REQUEST
