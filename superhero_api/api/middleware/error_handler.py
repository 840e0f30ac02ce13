"""Exception handlers that turn failures into HTTP responses.

- ``SuperheroError``: the status fixed by the exception class. ``NotFoundError``
  answers with an empty body; the others with an ``ErrorResponse``.
- ``RequestValidationError``: 422 with the messages grouped by field.
- Starlette ``HTTPException`` (unknown route, disallowed method, ...): its
  own status with an ``ErrorResponse``.
- Anything else: 500. Exception details stay out of production responses.
"""

import traceback
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from loguru import logger
from starlette.exceptions import HTTPException

from superhero_api.api.schemas.errors import ErrorResponse, ServiceInfo
from superhero_api.api.utils.responses import ORJSONResponse
from superhero_api.core.config import get_settings
from superhero_api.core.context import RequestContext, generate_request_id
from superhero_api.core.exceptions import ErrorCode, NotFoundError, SuperheroError


def error_body(
    error_code: ErrorCode,
    message: str,
    details: dict[str, Any] | None = None,
    debug_info: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build the JSON content of an ``ErrorResponse`` for the current request.

    Correlation and request IDs come from the request context. A request
    that bypassed request logging still gets a fresh request ID.
    """
    settings = get_settings()
    envelope = ErrorResponse(
        error_code=error_code.value,
        message=message,
        details=details,
        correlation_id=RequestContext.get_correlation_id(),
        request_id=RequestContext.get_request_id() or generate_request_id(),
        service_info=ServiceInfo(
            name=settings.app_name,
            version=settings.app_version,
            environment=settings.environment,
        ),
        debug_info=debug_info,
    )
    return envelope.model_dump(mode="json")


async def superhero_error_handler(request: Request, exc: Exception) -> Response:
    """Render a failed superhero operation.

    Raises:
        TypeError: If ``exc`` is not a ``SuperheroError``.
    """
    if not isinstance(exc, SuperheroError):
        raise TypeError(f"Expected SuperheroError, got {type(exc).__name__}")

    logger.warning(
        "{} {} rejected: {}",
        request.method,
        request.url.path,
        exc.message,
        error_code=exc.error_code.value,
        status_code=exc.status_code.value,
        superhero_id=exc.superhero_id,
    )

    if isinstance(exc, NotFoundError):
        return Response(status_code=exc.status_code)

    return ORJSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.error_code, exc.message, exc.details),
    )


async def validation_error_handler(request: Request, exc: Exception) -> Response:
    """Reject a request whose body or parameters failed validation.

    Raises:
        TypeError: If ``exc`` is not a ``RequestValidationError``.
    """
    if not isinstance(exc, RequestValidationError):
        raise TypeError(f"Expected RequestValidationError, got {type(exc).__name__}")

    fields: dict[str, list[str]] = {}
    for error in exc.errors():
        # loc starts with where the value came from: ("body", "name")
        location = [str(part) for part in error.get("loc", ())[1:]]
        fields.setdefault(".".join(location) or "root", []).append(
            error.get("msg", "Invalid value")
        )

    logger.warning(
        "{} {} failed validation",
        request.method,
        request.url.path,
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        validation_errors=fields,
    )

    return ORJSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_body(
            ErrorCode.VALIDATION_ERROR,
            "Request validation failed",
            {"validation_errors": fields},
        ),
    )


def code_for_status(status_code: int) -> ErrorCode:
    """Pick the error code reported for a framework HTTP error."""
    if status_code == status.HTTP_404_NOT_FOUND:
        return ErrorCode.NOT_FOUND
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        return ErrorCode.INTERNAL_ERROR
    return ErrorCode.INVALID_REQUEST


async def http_exception_handler(request: Request, exc: Exception) -> Response:
    """Render an ``HTTPException`` raised by the framework.

    Headers set on the exception, such as ``Allow`` on a 405, are kept.

    Raises:
        TypeError: If ``exc`` is not an ``HTTPException``.
    """
    if not isinstance(exc, HTTPException):
        raise TypeError(f"Expected HTTPException, got {type(exc).__name__}")

    logger.warning(
        "{} {} answered {}: {}",
        request.method,
        request.url.path,
        exc.status_code,
        exc.detail,
        status_code=exc.status_code,
    )

    return ORJSONResponse(
        status_code=exc.status_code,
        content=error_body(code_for_status(exc.status_code), str(exc.detail)),
        headers=exc.headers,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> Response:
    """Answer 500 for an exception nothing else handled."""
    exception_name = type(exc).__name__
    logger.opt(exception=exc).error(
        "Unhandled {} on {} {}", exception_name, request.method, request.url.path
    )

    if get_settings().environment == "production":
        content = error_body(
            ErrorCode.INTERNAL_ERROR, "An internal server error occurred"
        )
    else:
        content = error_body(
            ErrorCode.INTERNAL_ERROR,
            f"Internal server error: {exception_name}",
            details={"error": str(exc), "type": exception_name},
            debug_info={"traceback": traceback.format_tb(exc.__traceback__)},
        )

    return ORJSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers above on ``app``."""
    app.add_exception_handler(SuperheroError, superhero_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
