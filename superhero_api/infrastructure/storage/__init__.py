"""In-memory storage for superhero records.

- **store**: ``SuperheroStore``, the lock-guarded superhero collection
- **dependencies**: FastAPI dependency injection for the process-wide store
"""

from superhero_api.infrastructure.storage.dependencies import (
    SuperheroStoreDep,
    get_superhero_store,
)
from superhero_api.infrastructure.storage.store import SuperheroStore

__all__ = ["SuperheroStore", "SuperheroStoreDep", "get_superhero_store"]
