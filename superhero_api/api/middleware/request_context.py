"""Correlation ID handling.

The ID comes from ``X-Correlation-ID`` or is generated. It is stored in the
request context, bound to each log record of the request, and returned in
the same response header.
"""

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from superhero_api.api.constants import CORRELATION_ID_HEADER
from superhero_api.core.context import RequestContext, generate_correlation_id


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Attach a correlation ID to the request, its logs and its response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        supplied = request.headers.get(CORRELATION_ID_HEADER)
        correlation_id = supplied or generate_correlation_id()
        RequestContext.set_correlation_id(correlation_id)

        with logger.contextualize(correlation_id=correlation_id):
            response = await call_next(request)
        response.headers[CORRELATION_ID_HEADER] = correlation_id
        return response
