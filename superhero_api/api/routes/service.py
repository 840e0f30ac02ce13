"""Endpoints describing the running service rather than its data."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request

from superhero_api.core.config import Settings, get_settings
from superhero_api.infrastructure.storage import SuperheroStoreDep

router = APIRouter(tags=["service"])


@router.get("/")
async def welcome(request: Request) -> dict[str, str]:
    return {"message": f"Welcome to the {request.app.title}!"}


@router.get("/health")
async def health(store: SuperheroStoreDep) -> dict[str, Any]:
    """Liveness check, with the number of stored superheroes."""
    return {"status": "healthy", "superheroes": store.count()}


@router.get("/info")
async def info(settings: Annotated[Settings, Depends(get_settings)]) -> dict[str, Any]:
    """Name, version and deployment of this process."""
    return {
        "app_name": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "debug": settings.debug,
    }
