"""Domain layer: the superhero entity and the result of store operations.

- **models**: The ``Superhero`` entity and the seed records
- **outcomes**: The closed set of operation outcomes (success, not found,
  conflict, invalid request)

Nothing here knows about HTTP; the API layer maps outcomes to status codes.
"""

from superhero_api.domain.models import SEED_SUPERHEROES, Superhero
from superhero_api.domain.outcomes import Outcome, OutcomeKind

__all__ = ["SEED_SUPERHEROES", "Outcome", "OutcomeKind", "Superhero"]
