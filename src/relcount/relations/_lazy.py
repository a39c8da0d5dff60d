"""Lazy relation placeholder."""

from collections.abc import Callable, Iterable, Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger


class LazyRelation[T]:
    """Placeholder for a relation whose members have not been loaded.

    The placeholder carries an optional ``known_size`` so the number of
    members can be answered without calling the loader. The loader runs at
    most once; afterwards the placeholder behaves like the loaded list.

    Example:
        >>> tags = LazyRelation(lambda: ["a", "b"], known_size=2)
        >>> len(tags)
        2
        >>> tags.is_materialized
        False
        >>> list(tags)
        ['a', 'b']
        >>> tags.is_materialized
        True
    """

    __slots__ = ("_items", "_known_size", "_loader", "_logger", "_name")

    _loader: Callable[[], Iterable[T]]
    _known_size: int | None
    _items: list[T] | None
    _name: str
    _logger: "FilteringBoundLogger | None"  # noqa: UP037

    def __init__(
        self,
        loader: Callable[[], Iterable[T]],
        *,
        known_size: int | None = None,
        name: str = "",
        logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
    ) -> None:
        """Initialize the placeholder.

        Args:
            loader: Callable returning the members when the relation is loaded.
            known_size: Number of members, when the storage layer already
                knows it. None means unknown.
            name: Relation name, used only for logging.
            logger: Optional logger for debug-level materialization logging.

        Raises:
            ValueError: If known_size is negative.
        """
        if known_size is not None and known_size < 0:
            msg = f"known_size must be non-negative, got {known_size}"
            raise ValueError(msg)
        self._loader = loader
        self._known_size = known_size
        self._items = None
        self._name = name
        self._logger = logger

    def __repr__(self) -> str:
        state = "materialized" if self._items is not None else "pending"
        return f"LazyRelation(name={self._name!r}, known_size={self._known_size}, {state})"

    @property
    def known_size(self) -> int | None:
        """Number of members known without loading, or None if unknown."""
        return self._known_size

    @property
    def is_materialized(self) -> bool:
        """Whether the loader has run."""
        return self._items is not None

    def materialize(self) -> list[T]:
        """Load the members if needed and return a copy of them.

        Changing the returned list never changes the placeholder.

        Returns:
            A new list of the loaded members.
        """
        return list(self._load())

    def _load(self) -> list[T]:
        if self._items is None:
            self._items = list(self._loader())
            if self._logger:
                self._logger.debug(
                    "relation_materialized",
                    relation=self._name,
                    size=len(self._items),
                    known_size=self._known_size,
                )
        return self._items

    def __len__(self) -> int:
        if self._items is not None:
            return len(self._items)
        if self._known_size is not None:
            return self._known_size
        return len(self._load())

    def __iter__(self) -> Iterator[T]:
        return iter(self._load())

    def __contains__(self, item: object) -> bool:
        return item in self._load()
