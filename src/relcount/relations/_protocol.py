"""Relation protocols.

A relation value held by an entity is either a plain sized collection
(already materialized) or a lazy placeholder that satisfies
``LazyRelationProtocol``. The count cache only needs to tell the two apart.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class LazyRelationProtocol[T](Protocol):
    """Protocol for relation placeholders that have not been loaded yet.

    Implementations must report what they already know about their size
    without loading anything.
    """

    @property
    def known_size(self) -> int | None:
        """Number of members known without materializing, or None."""
        ...

    @property
    def is_materialized(self) -> bool:
        """Whether the members have been loaded."""
        ...

    def materialize(self) -> list[T]:
        """Load the members (at most once) and return a copy of them."""
        ...

    def __len__(self) -> int:
        """Return the number of members."""
        ...


def is_lazy_relation(value: object) -> bool:
    """Return True if value is a lazy relation placeholder."""
    return isinstance(value, LazyRelationProtocol)
