"""Relation store protocol for dependency injection and testing with fakes."""

from typing import Protocol, runtime_checkable

from relcount.relations import LazyRelation
from relcount.storage._models import RelatedItem


@runtime_checkable
class RelationStoreProtocol(Protocol):
    """Protocol for stores of related items.

    Both SQLiteRelationStore and MemoryRelationStore implement this
    protocol. A relation is addressed by the owner's type name, the owner's
    id and the relation name.
    """

    def load(self, owner_type: str, owner_id: int, relation: str) -> list[RelatedItem]:
        """Load every member of a relation, ordered by id."""
        ...

    def count(self, owner_type: str, owner_id: int, relation: str) -> int:
        """Count the members of a relation without loading them."""
        ...

    def lazy(
        self, owner_type: str, owner_id: int, relation: str
    ) -> LazyRelation[RelatedItem]:
        """Return an unloaded placeholder that knows the relation's size."""
        ...

    def add(
        self, owner_type: str, owner_id: int, relation: str, label: str
    ) -> RelatedItem:
        """Store a new member and return it with its id."""
        ...

    def remove(self, item_id: int) -> bool:
        """Delete a member by id. Returns True if a row was deleted."""
        ...

    def search(
        self, owner_type: str, owner_id: int, relation: str, term: str
    ) -> list[RelatedItem]:
        """Return members whose label contains ``term`` literally."""
        ...
