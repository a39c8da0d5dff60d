"""Storage models."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class RelatedItem(BaseModel):
    """A member of a stored relation.

    Attributes:
        id: Row id, None until stored.
        owner_type: Type name of the owning entity.
        owner_id: Id of the owning entity.
        relation: Relation name on the owning entity.
        label: Display label, used by substring searches.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    id: int | None = None
    owner_type: str
    owner_id: int
    relation: str
    label: str
