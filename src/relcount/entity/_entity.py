# pyright: reportExplicitAny=false, reportAny=false
"""Base class for entities that own relations."""

from collections.abc import Iterable
from copy import deepcopy
from typing import TYPE_CHECKING, Any, ClassVar, Self, cast

from pydantic import BaseModel, ConfigDict, PrivateAttr

from relcount.cache import RelationCountCache
from relcount.config import CacheConfig
from relcount.exceptions import UnknownRelationError
from relcount.relations import LazyRelationProtocol

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from relcount.storage import RelationStoreProtocol


class DomainEntity(BaseModel):
    """Base class for entities with cached relation counts.

    Subclasses declare their relations in ``relation_names``. Relations are
    only reachable through the methods below: the getter returns a tuple and
    every mutator invalidates the cached count before changing anything, so
    a count can never outlive the state it was computed from.

    Example:
        >>> class Blog(DomainEntity):
        ...     relation_names: ClassVar[frozenset[str]] = frozenset({"posts"})
        >>> blog = Blog(id=1)
        >>> blog.set_related("posts", ["a", "b", "c"])
        >>> blog.count_related("posts")
        3
        >>> blog.add_related("posts", "d")
        >>> blog.count_related("posts")
        4
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(arbitrary_types_allowed=True)

    relation_names: ClassVar[frozenset[str]] = frozenset()

    id: int | None = None

    _relations: dict[str, Any] = PrivateAttr(default_factory=dict)
    _relation_counts: RelationCountCache = PrivateAttr()
    _logger: Any = PrivateAttr(default=None)

    def model_post_init(self, context: Any, /) -> None:
        """Create the empty count cache for this instance."""
        self._relation_counts = RelationCountCache(self._resolve_relation)

    def __copy__(self) -> Self:
        """Copy the entity with its own relation lists and an empty count cache.

        Placeholders are shared until the copy mutates the relation.
        """
        copied = super().__copy__()
        copied._relations = {
            name: list(value) if isinstance(value, list) else value
            for name, value in self._relations.items()
        }
        copied._logger = self._logger
        copied._relation_counts = RelationCountCache(
            copied._resolve_relation,
            config=self._relation_counts.config,
            logger=self._logger,
        )
        return copied

    def __deepcopy__(self, memo: dict[int, Any] | None = None) -> Self:
        """Deep-copy fields and relation lists; placeholders and the logger are shared."""
        copied = self.__copy__()
        object.__setattr__(copied, "__dict__", deepcopy(self.__dict__, memo))
        copied._relations = {
            name: deepcopy(value, memo) if isinstance(value, list) else value
            for name, value in self._relations.items()
        }
        return copied

    @classmethod
    def owner_type(cls) -> str:
        """Type name used to address this entity's relations in storage."""
        return cls.__name__

    @property
    def relation_counts(self) -> RelationCountCache:
        """The count cache owned by this entity."""
        return self._relation_counts

    def configure_relation_counts(
        self,
        *,
        config: CacheConfig | None = None,
        logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
    ) -> None:
        """Replace the count cache with an empty one using new settings.

        Args:
            config: Cache settings. Defaults to CacheConfig().
            logger: Optional logger for the cache and relation mutations.
        """
        self._logger = logger
        self._relation_counts = RelationCountCache(
            self._resolve_relation, config=config, logger=logger
        )

    # =========================================================================
    # Relation access
    # =========================================================================

    def _check_relation(self, name: str) -> None:
        if name not in self.relation_names:
            raise UnknownRelationError(name, entity_type=type(self).__name__)

    def _resolve_relation(self, name: str) -> object:
        self._check_relation(name)
        return self._relations.get(name)

    def _materialized(self, name: str) -> list[Any]:
        value = self._relations.get(name)
        if value is None:
            items: list[Any] = []
            self._relations[name] = items
            return items
        if isinstance(value, LazyRelationProtocol):
            # the caller may still hold the placeholder
            loaded = list(cast("list[Any]", value.materialize()))
            self._relations[name] = loaded
            return loaded
        return cast("list[Any]", value)

    def _log_mutation(self, name: str, operation: str) -> None:
        if self._logger:
            cast("FilteringBoundLogger", self._logger).debug(
                "relation_mutated",
                entity_type=type(self).__name__,
                entity_id=self.id,
                relation=name,
                operation=operation,
            )

    def get_related(self, name: str) -> tuple[Any, ...]:
        """Return the members of a relation, loading it on first access.

        Raises:
            UnknownRelationError: If the relation is not declared.
        """
        value = self._resolve_relation(name)
        if value is None:
            return ()
        if isinstance(value, LazyRelationProtocol):
            return tuple(value.materialize())
        return tuple(cast("Iterable[Any]", value))

    def is_related_loaded(self, name: str) -> bool:
        """Return False only for a relation still held as an unloaded placeholder."""
        value = self._resolve_relation(name)
        if isinstance(value, LazyRelationProtocol):
            return value.is_materialized
        return True

    def count_related(self, name: str) -> int:
        """Return the number of members of a relation, using the cache.

        Raises:
            UnknownRelationError: If the relation is not declared.
        """
        return self._relation_counts.get_count(name)

    # =========================================================================
    # Relation mutators
    # =========================================================================

    def set_related(self, name: str, items: Iterable[Any]) -> None:
        """Replace a relation.

        A lazy placeholder is stored as is; any other iterable is copied
        into a new list.

        Raises:
            UnknownRelationError: If the relation is not declared.
        """
        self._check_relation(name)
        self._relation_counts.invalidate(name)
        if isinstance(items, LazyRelationProtocol):
            self._relations[name] = items
        else:
            self._relations[name] = list(items)
        self._log_mutation(name, "set")

    def add_related(self, name: str, item: Any) -> None:
        """Append a member to a relation, loading it first if needed.

        Raises:
            UnknownRelationError: If the relation is not declared.
        """
        self._check_relation(name)
        self._relation_counts.invalidate(name)
        self._materialized(name).append(item)
        self._log_mutation(name, "add")

    def remove_related(self, name: str, item: Any) -> None:
        """Remove the first occurrence of a member from a relation.

        Raises:
            UnknownRelationError: If the relation is not declared.
            ValueError: If the item is not a member.
        """
        self._check_relation(name)
        self._relation_counts.invalidate(name)
        self._materialized(name).remove(item)
        self._log_mutation(name, "remove")

    def attach_lazy(self, name: str, store: "RelationStoreProtocol") -> None:  # noqa: UP037
        """Assign a relation as an unloaded placeholder from a store.

        Args:
            name: Relation name.
            store: Store holding the relation's members.

        Raises:
            UnknownRelationError: If the relation is not declared.
            ValueError: If the entity has no id yet.
        """
        self._check_relation(name)
        if self.id is None:
            msg = f"{type(self).__name__} must have an id to load relation {name!r}"
            raise ValueError(msg)
        self.set_related(name, store.lazy(self.owner_type(), self.id, name))
