"""The superhero entity."""

from typing import Final

from pydantic import BaseModel, ConfigDict


class Superhero(BaseModel):
    """A single superhero record.

    The identifier is chosen by the client and never changes after
    creation; only the name may be updated.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: int
    name: str


SEED_SUPERHEROES: Final[tuple[Superhero, ...]] = (
    Superhero(id=1, name="Superman"),
    Superhero(id=2, name="Batman"),
    Superhero(id=3, name="Spiderman"),
)
