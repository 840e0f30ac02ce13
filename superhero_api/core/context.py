"""Identifiers of the request being served.

Each request has a correlation ID, which clients may supply to tie several
calls together, and a request ID unique to the call. Both are held in
``ContextVar`` objects, so concurrent requests never see each other's values.
"""

import uuid
from contextvars import ContextVar
from typing import Final

REQUEST_ID_PREFIX: Final[str] = "req-"

correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)
request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)


class RequestContext:
    """Getters and setters for the identifiers of the current request."""

    @staticmethod
    def set_correlation_id(value: str) -> None:
        correlation_id_var.set(value)

    @staticmethod
    def get_correlation_id() -> str | None:
        return correlation_id_var.get()

    @staticmethod
    def set_request_id(value: str) -> None:
        request_id_var.set(value)

    @staticmethod
    def get_request_id() -> str | None:
        return request_id_var.get()

    @staticmethod
    def clear() -> None:
        """Forget both identifiers, for example between tests."""
        for variable in (correlation_id_var, request_id_var):
            variable.set(None)


def generate_correlation_id() -> str:
    """Return a new correlation ID, a bare UUID4 string.

    >>> len(generate_correlation_id())
    36
    """
    return str(uuid.uuid4())


def generate_request_id() -> str:
    """Return a new request ID: ``req-`` followed by a UUID4."""
    return f"{REQUEST_ID_PREFIX}{uuid.uuid4()}"
