"""FastAPI dependency injection for the superhero store.

Every request shares one store per process. Tests replace it through
``app.dependency_overrides[get_superhero_store]``.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from superhero_api.infrastructure.storage.store import SuperheroStore


@lru_cache
def get_superhero_store() -> SuperheroStore:
    """Get the process-wide superhero store, creating it on first use.

    Returns:
        SuperheroStore: The shared store, seeded with the initial records.

    Example:
        @router.get("/superheroes")
        async def list_superheroes(store: SuperheroStoreDep):
            return store.list()
    """
    return SuperheroStore()


# Type alias for cleaner dependency injection
SuperheroStoreDep = Annotated[SuperheroStore, Depends(get_superhero_store)]
