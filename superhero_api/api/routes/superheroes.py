"""Superhero collection endpoints.

Each endpoint performs exactly one store operation and maps its outcome to
an HTTP status:

- ``GET    /api/superhero``: list, always 200
- ``GET    /api/superhero/{id}``: the item, or 404 with an empty body
- ``POST   /api/superhero``: 201 with the item and a ``Location`` header, or 409
- ``PUT    /api/superhero``: 200 with an empty body, or 400
- ``DELETE /api/superhero/{id}``: 204, or 404 with an empty body

Failed outcomes are raised as application exceptions and rendered by the
registered exception handlers.
"""

import re
from typing import Final

from fastapi import APIRouter, Request, Response, status
from loguru import logger

from superhero_api.api.constants import (
    CONFLICT_MESSAGE,
    INVALID_UPDATE_MESSAGE,
    LOCATION_HEADER,
    SUPERHERO_BASE_PATH,
)
from superhero_api.api.schemas.errors import ErrorResponse
from superhero_api.api.schemas.superheroes import SuperheroItem
from superhero_api.core.exceptions import (
    ConflictError,
    InvalidRequestError,
    NotFoundError,
    SuperheroError,
)
from superhero_api.domain.outcomes import Outcome, OutcomeKind
from superhero_api.infrastructure.storage import SuperheroStoreDep

INTEGER_PATTERN: Final[re.Pattern[str]] = re.compile(r"[+-]?[0-9]+")

router = APIRouter(prefix=SUPERHERO_BASE_PATH, tags=["superheroes"])


def parse_superhero_id(raw: str) -> int | None:
    """Normalize a path segment into a superhero identifier.

    Surrounding whitespace and a leading sign are accepted. Anything else
    that is not a plain decimal integer yields ``None``, and so does a
    number with more digits than the interpreter will convert.

    Args:
        raw: The identifier segment as received in the URL.

    Returns:
        int | None: The identifier, or None when the segment is not an integer.

    Examples:
        >>> parse_superhero_id("42")
        42
        >>> parse_superhero_id("abc") is None
        True
    """
    candidate = raw.strip()
    if not INTEGER_PATTERN.fullmatch(candidate):
        return None
    try:
        return int(candidate)
    except ValueError:
        # Longer than the interpreter converts (sys.get_int_max_str_digits)
        return None


def not_found(superhero_id: int | None, raw: str) -> NotFoundError:
    """Build the error reported when no superhero matches a path identifier."""
    shown = str(superhero_id) if superhero_id is not None else f"'{raw}'"
    return NotFoundError(
        f"Superhero with ID {shown} not found",
        superhero_id if superhero_id is not None else raw,
    )


def outcome_error(outcome: Outcome, superhero_id: int) -> SuperheroError:
    """Convert a failed store outcome into the matching application exception.

    Args:
        outcome: A failed outcome.
        superhero_id: The identifier the operation targeted.

    Returns:
        SuperheroError: The exception to raise.

    Raises:
        ValueError: If the outcome succeeded.
    """
    match outcome.kind:
        case OutcomeKind.CONFLICT:
            return ConflictError(CONFLICT_MESSAGE, superhero_id)
        case OutcomeKind.INVALID_REQUEST:
            return InvalidRequestError(INVALID_UPDATE_MESSAGE, superhero_id)
        case OutcomeKind.NOT_FOUND:
            return not_found(superhero_id, str(superhero_id))
        case _:
            msg = "Cannot convert a successful outcome into an error"
            raise ValueError(msg)


@router.get("", response_model=list[SuperheroItem])
async def list_superheroes(store: SuperheroStoreDep) -> list[SuperheroItem]:
    """Return every superhero in insertion order."""
    return [SuperheroItem.from_domain(item) for item in store.list()]


@router.get(
    "/{superhero_id}",
    response_model=SuperheroItem,
    responses={status.HTTP_404_NOT_FOUND: {"description": "Superhero not found"}},
)
async def get_superhero(superhero_id: str, store: SuperheroStoreDep) -> SuperheroItem:
    """Return the superhero with the given identifier.

    Args:
        superhero_id: Identifier path segment; non-integers never match.
        store: The superhero store.

    Returns:
        SuperheroItem: The matching superhero.

    Raises:
        NotFoundError: If no superhero matches.
    """
    parsed_id = parse_superhero_id(superhero_id)
    if parsed_id is None:
        raise not_found(None, superhero_id)

    outcome = store.get_by_id(parsed_id)
    if not outcome.succeeded or outcome.item is None:
        raise outcome_error(outcome, parsed_id)

    return SuperheroItem.from_domain(outcome.item)


@router.post(
    "",
    response_model=SuperheroItem,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_409_CONFLICT: {"model": ErrorResponse}},
)
async def create_superhero(
    payload: SuperheroItem,
    request: Request,
    response: Response,
    store: SuperheroStoreDep,
) -> SuperheroItem:
    """Add a superhero whose identifier is not taken yet.

    The ``Location`` header points at the new item: the request path
    followed by ``/`` and the identifier.

    Raises:
        ConflictError: If a superhero with the same identifier exists.
    """
    outcome = store.create(payload.to_domain())
    if not outcome.succeeded or outcome.item is None:
        raise outcome_error(outcome, payload.id)

    response.headers[LOCATION_HEADER] = f"{request.url.path}/{payload.id}"
    logger.info("Superhero created", superhero_id=payload.id)
    return SuperheroItem.from_domain(outcome.item)


@router.put(
    "",
    response_class=Response,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
async def update_superhero(
    payload: SuperheroItem, store: SuperheroStoreDep
) -> Response:
    """Rename an existing superhero. Replies 200 with an empty body.

    Raises:
        InvalidRequestError: If no superhero has the payload's identifier.
    """
    outcome = store.update(payload.to_domain())
    if not outcome.succeeded:
        raise outcome_error(outcome, payload.id)

    return Response(status_code=status.HTTP_200_OK)


@router.delete(
    "/{superhero_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={status.HTTP_404_NOT_FOUND: {"description": "Superhero not found"}},
)
async def delete_superhero(superhero_id: str, store: SuperheroStoreDep) -> Response:
    """Remove the superhero with the given identifier.

    Raises:
        NotFoundError: If no superhero matches.
    """
    parsed_id = parse_superhero_id(superhero_id)
    if parsed_id is None:
        raise not_found(None, superhero_id)

    outcome = store.delete(parsed_id)
    if not outcome.succeeded:
        raise outcome_error(outcome, parsed_id)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
