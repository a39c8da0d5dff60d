"""In-memory relation store for testing."""

from dataclasses import dataclass, field

from relcount.relations import LazyRelation
from relcount.storage._models import RelatedItem


def _ascii_lower(value: str) -> str:
    # SQLite's LIKE folds ASCII letters only
    return "".join(c.lower() if c.isascii() else c for c in value)


@dataclass(slots=True)
class MemoryRelationStore:
    """In-memory implementation of RelationStoreProtocol.

    Behaves like SQLiteRelationStore without a database. ``load_calls`` and
    ``count_calls`` record every load and count so tests can assert that a
    relation was or was not materialized.

    Example:
        >>> store = MemoryRelationStore()
        >>> _ = store.add("Blog", 1, "tags", "python")
        >>> tags = store.lazy("Blog", 1, "tags")
        >>> len(tags), store.load_calls
        (1, [])
    """

    items: dict[int, RelatedItem] = field(default_factory=dict)
    load_calls: list[tuple[str, int, str]] = field(default_factory=list)
    count_calls: list[tuple[str, int, str]] = field(default_factory=list)
    _next_id: int = field(default=1)

    def _select(self, owner_type: str, owner_id: int, relation: str) -> list[RelatedItem]:
        return [
            item
            for _, item in sorted(self.items.items())
            if (item.owner_type, item.owner_id, item.relation)
            == (owner_type, owner_id, relation)
        ]

    def load(self, owner_type: str, owner_id: int, relation: str) -> list[RelatedItem]:
        """Load every member of a relation, ordered by id."""
        self.load_calls.append((owner_type, owner_id, relation))
        return self._select(owner_type, owner_id, relation)

    def count(self, owner_type: str, owner_id: int, relation: str) -> int:
        """Count the members of a relation without recording a load."""
        self.count_calls.append((owner_type, owner_id, relation))
        return len(self._select(owner_type, owner_id, relation))

    def lazy(
        self, owner_type: str, owner_id: int, relation: str
    ) -> LazyRelation[RelatedItem]:
        """Return an unloaded placeholder that knows the relation's size."""
        return LazyRelation(
            lambda: self.load(owner_type, owner_id, relation),
            known_size=self.count(owner_type, owner_id, relation),
            name=relation,
        )

    def add(
        self, owner_type: str, owner_id: int, relation: str, label: str
    ) -> RelatedItem:
        """Store a new member and return it with its id."""
        item = RelatedItem(
            id=self._next_id,
            owner_type=owner_type,
            owner_id=owner_id,
            relation=relation,
            label=label,
        )
        self.items[self._next_id] = item
        self._next_id += 1
        return item

    def remove(self, item_id: int) -> bool:
        """Delete a member by id. Returns True if it existed."""
        return self.items.pop(item_id, None) is not None

    def search(
        self, owner_type: str, owner_id: int, relation: str, term: str
    ) -> list[RelatedItem]:
        """Return members whose label contains ``term``, ignoring ASCII case."""
        needle = _ascii_lower(term)
        return [
            item
            for item in self._select(owner_type, owner_id, relation)
            if needle in _ascii_lower(item.label)
        ]
