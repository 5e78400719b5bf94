"""Hero model."""

from pydantic import BaseModel, ConfigDict


class Hero(BaseModel):
    """
    Hero record as exchanged with the heroes API.

    `id` is assigned by the server and stays None until the hero is created.
    """

    id: int | None = None
    name: str

    model_config = ConfigDict(extra="ignore")

    def __repr__(self) -> str:
        """String representation of Hero."""
        return f"<Hero(id={self.id}, name={self.name})>"
