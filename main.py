"""Run the Superhero API under uvicorn."""

import os

import uvicorn
from loguru import logger

from superhero_api.api.main import app
from superhero_api.core.config import get_settings
from superhero_api.core.logging import setup_logging

APP_IMPORT_PATH = "superhero_api.api.main:app"

# uvicorn configures its loggers from this; every record goes to Loguru
UVICORN_LOG_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {"loguru": {"class": "superhero_api.core.logging.InterceptHandler"}},
    "loggers": {
        name: {"handlers": ["loguru"], "level": "INFO", "propagate": False}
        for name in ("uvicorn", "uvicorn.error", "uvicorn.access")
    },
}


def main() -> None:
    """Serve the application, reloading on code changes in debug mode."""
    settings = get_settings()
    setup_logging(settings)

    # Hosting platforms choose the port through PORT
    port = int(os.environ.get("PORT", settings.api_port))
    mode = "debug, auto-reload" if settings.debug else "production"
    logger.info("Serving on http://{}:{} ({})", settings.api_host, port, mode)

    # reload needs an import string rather than the app object
    uvicorn.run(
        APP_IMPORT_PATH if settings.debug else app,
        host=settings.api_host,
        port=port,
        reload=settings.debug,
        log_config=UVICORN_LOG_CONFIG,
    )


if __name__ == "__main__":
    main()
