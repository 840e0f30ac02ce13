"""FastAPI application for the Superhero API.

``create_app`` assembles one instance from a ``Settings`` object; the module
level ``app`` is that instance built from the environment, and is what
uvicorn serves.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from superhero_api.api.middleware.error_handler import register_exception_handlers
from superhero_api.api.middleware.request_context import RequestContextMiddleware
from superhero_api.api.middleware.request_logging import RequestLoggingMiddleware
from superhero_api.api.middleware.security_headers import SecurityHeadersMiddleware
from superhero_api.api.routes import service_router, superheroes_router
from superhero_api.api.utils.responses import ORJSONResponse
from superhero_api.core.config import Settings, get_settings
from superhero_api.core.logging import setup_logging
from superhero_api.core.observability import instrument_app, setup_tracing
from superhero_api.infrastructure.storage import get_superhero_store


@asynccontextmanager
async def lifespan(api: FastAPI) -> AsyncGenerator[None]:
    """Load the store before serving, then log start and stop."""
    # Honours dependency_overrides, which tests use to supply a store
    overrides = api.dependency_overrides
    provide_store = overrides.get(get_superhero_store, get_superhero_store)
    logger.info("Superhero store ready with {} records", provide_store().count())
    logger.info("{} v{} started", api.title, api.version)
    yield
    logger.info("{} stopped", api.title)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build and wire the application.

    Logging and tracing are configured first, so the rest of the setup is
    already logged the configured way.

    Args:
        settings: Defaults to ``get_settings()``.
    """
    settings = settings or get_settings()
    setup_logging(settings)
    setup_tracing(settings)

    api = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        docs_url=settings.docs_url,
        redoc_url=settings.redoc_url,
        openapi_url=settings.openapi_url,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )
    register_exception_handlers(api)

    # Each call wraps the previous ones: security headers end up outermost
    for middleware, options in (
        (RequestLoggingMiddleware, {"log_config": settings.log_config}),
        (RequestContextMiddleware, {}),
        (SecurityHeadersMiddleware, {}),
    ):
        api.add_middleware(middleware, **options)

    for router in (service_router, superheroes_router):
        api.include_router(router)

    instrument_app(api, settings)
    return api


app = create_app()
