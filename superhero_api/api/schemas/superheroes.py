"""Request and response schema for superhero items."""

from pydantic import BaseModel, ConfigDict, Field

from superhero_api.domain.models import Superhero


class SuperheroItem(BaseModel):
    """A superhero as exchanged over the API.

    The same shape is used to create (POST), update (PUT) and return items.
    """

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={"examples": [{"id": 4, "name": "Wonder Woman"}]},
    )

    id: int = Field(
        ...,
        description="Client-chosen identifier, unique within the collection",
        examples=[1, 42],
    )

    name: str = Field(
        ...,
        description="Display name of the superhero",
        examples=["Superman", "Batman"],
    )

    def to_domain(self) -> Superhero:
        """Convert the payload into the domain entity."""
        return Superhero(id=self.id, name=self.name)

    @classmethod
    def from_domain(cls, superhero: Superhero) -> "SuperheroItem":
        """Build the API representation of a stored superhero."""
        return cls.model_validate(superhero)
