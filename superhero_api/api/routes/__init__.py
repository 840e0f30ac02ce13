"""API routers."""

from superhero_api.api.routes.service import router as service_router
from superhero_api.api.routes.superheroes import router as superheroes_router

__all__ = ["service_router", "superheroes_router"]
