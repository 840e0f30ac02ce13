"""Outcomes reported by superhero store operations.

Every store operation answers with an ``Outcome`` instead of raising, so
each branch of each operation has a defined, inspectable result.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from superhero_api.domain.models import Superhero  # noqa: TC001 - needed by pydantic


class OutcomeKind(Enum):
    """Result taxonomy for store operations."""

    SUCCESS = "SUCCESS"
    """The operation was applied (or the lookup matched)."""

    NOT_FOUND = "NOT_FOUND"
    """No superhero has the requested identifier."""

    CONFLICT = "CONFLICT"
    """A superhero with the identifier already exists."""

    INVALID_REQUEST = "INVALID_REQUEST"
    """The update targets an identifier that does not exist."""


class Outcome(BaseModel):
    """Result of a single store operation, with an optional superhero payload."""

    model_config = ConfigDict(frozen=True)

    kind: OutcomeKind
    item: Superhero | None = None

    @property
    def succeeded(self) -> bool:
        """Whether the operation succeeded."""
        return self.kind is OutcomeKind.SUCCESS

    @classmethod
    def success(cls, item: Superhero | None = None) -> Outcome:
        """Build a successful outcome, optionally carrying a superhero."""
        return cls(kind=OutcomeKind.SUCCESS, item=item)

    @classmethod
    def failure(cls, kind: OutcomeKind) -> Outcome:
        """Build a failed outcome of the given kind.

        Raises:
            ValueError: If ``kind`` is ``SUCCESS``.
        """
        if kind is OutcomeKind.SUCCESS:
            msg = "A failure outcome cannot have kind SUCCESS"
            raise ValueError(msg)
        return cls(kind=kind)
