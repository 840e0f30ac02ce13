"""Access logging for the API.

Each request outside ``LogConfig.excluded_paths`` produces one record on
arrival and one when its response is ready, both bound to the request ID,
method, path and client. The request ID is read from ``X-Request-ID`` when
the client sends one and is returned in the same header. A request slower
than ``slow_request_threshold_ms`` adds a warning.
"""

import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from superhero_api.api.constants import MAX_USER_AGENT_LENGTH, REQUEST_ID_HEADER
from superhero_api.core.config import LogConfig
from superhero_api.core.constants import MILLISECONDS_PER_SECOND
from superhero_api.core.context import RequestContext, generate_request_id

CallNext = Callable[[Request], Awaitable[Response]]


def client_host(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def user_agent(request: Request) -> str:
    return request.headers.get("user-agent", "")[:MAX_USER_AGENT_LENGTH] or "unknown"


def elapsed_ms(started: float) -> float:
    """Milliseconds since ``started``, a ``time.perf_counter()`` reading."""
    return round((time.perf_counter() - started) * MILLISECONDS_PER_SECOND, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request on arrival and on completion.

    Args:
        app: The wrapped application.
        log_config: Source of the excluded paths and the slow threshold.
    """

    def __init__(self, app: ASGIApp, *, log_config: LogConfig) -> None:
        super().__init__(app)
        self.excluded_paths = frozenset(log_config.excluded_paths)
        self.slow_threshold_ms = log_config.slow_request_threshold_ms

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        path = request.url.path
        if path in self.excluded_paths:
            return await call_next(request)

        request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
        RequestContext.set_request_id(request_id)

        with logger.contextualize(
            request_id=request_id,
            method=request.method,
            path=path,
            client_host=client_host(request),
            user_agent=user_agent(request),
        ):
            logger.info(
                "{} {} received",
                request.method,
                path,
                query_params=dict(request.query_params) or None,
            )
            started = time.perf_counter()
            try:
                response = await call_next(request)
            except Exception as exc:
                # Logged here for the timing, rendered by the exception handlers
                logger.error(
                    "{} {} raised {}",
                    request.method,
                    path,
                    type(exc).__name__,
                    duration_ms=elapsed_ms(started),
                    error_type=type(exc).__name__,
                    error_message=str(exc),
                )
                raise

            duration_ms = elapsed_ms(started)
            response.headers[REQUEST_ID_HEADER] = request_id
            logger.info(
                "{} {} answered {}",
                request.method,
                path,
                response.status_code,
                status_code=response.status_code,
                duration_ms=duration_ms,
                response_size=int(response.headers.get("content-length", 0)),
            )
            if duration_ms > self.slow_threshold_ms:
                logger.warning(
                    "{} {} took {}ms",
                    request.method,
                    path,
                    duration_ms,
                    duration_ms=duration_ms,
                    threshold_ms=self.slow_threshold_ms,
                )
            return response
