"""Browser hardening headers attached to every response, errors included."""

from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from superhero_api.api.constants import DEFAULT_HSTS_MAX_AGE

STATIC_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
}
HSTS_HEADER = "Strict-Transport-Security"


def hsts_value(max_age: int, *, include_subdomains: bool, preload: bool) -> str:
    """Compose the ``Strict-Transport-Security`` directives.

    >>> hsts_value(60, include_subdomains=True, preload=False)
    'max-age=60; includeSubDomains'
    """
    directives = [f"max-age={max_age}"]
    if include_subdomains:
        directives.append("includeSubDomains")
    if preload:
        directives.append("preload")
    return "; ".join(directives)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Set ``STATIC_SECURITY_HEADERS`` and, unless disabled, HSTS.

    Args:
        app: The wrapped application.
        hsts_enabled: Send ``Strict-Transport-Security``.
        hsts_max_age: HSTS lifetime in seconds.
        hsts_include_subdomains: Add ``includeSubDomains``.
        hsts_preload: Add ``preload``.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        hsts_enabled: bool = True,
        hsts_max_age: int = DEFAULT_HSTS_MAX_AGE,
        hsts_include_subdomains: bool = True,
        hsts_preload: bool = False,
    ) -> None:
        super().__init__(app)
        self.headers = dict(STATIC_SECURITY_HEADERS)
        self.hsts_header = hsts_value(
            hsts_max_age,
            include_subdomains=hsts_include_subdomains,
            preload=hsts_preload,
        )
        if hsts_enabled:
            self.headers[HSTS_HEADER] = self.hsts_header

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)
        response.headers.update(self.headers)
        return response
