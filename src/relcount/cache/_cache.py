"""Per-entity memoization of relation counts."""

from collections.abc import Callable, Iterator, Sized
from typing import TYPE_CHECKING, cast

from relcount.config import CacheConfig
from relcount.exceptions import RelationCountError
from relcount.relations import LazyRelationProtocol

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

type RelationResolver = Callable[[str], object]


def count_relation(value: object, relation_name: str = "") -> int:
    """Return the number of members of a relation value.

    An unmaterialized lazy placeholder that knows its size answers from that
    size and is not loaded. A placeholder without a known size is
    materialized. Any other value must be sized. None counts as zero.

    Args:
        value: The relation value held by the entity.
        relation_name: Relation name, used in error messages.

    Returns:
        The number of members.

    Raises:
        RelationCountError: If the value reports a negative count.
        TypeError: If the value is neither a placeholder nor sized.
    """
    if value is None:
        return 0

    if isinstance(value, LazyRelationProtocol):
        lazy = cast("LazyRelationProtocol[object]", value)
        known = lazy.known_size
        if not lazy.is_materialized and known is not None:
            count = known
        else:
            count = len(lazy.materialize())
    else:
        count = len(cast("Sized", value))

    if count < 0:
        raise RelationCountError(relation_name, count)
    return count


class RelationCountCache:
    """Memoizes relation counts for a single entity instance.

    Each relation name is either absent from the cache or present with the
    count computed at the last fill. ``get_count`` fills absent names;
    ``invalidate`` clears them. The owning entity must call ``invalidate``
    from every mutator of a relation, otherwise the cache keeps returning
    the old count.

    The cache is not synchronized and is meant to live within one request
    or operation, like the entity that owns it.

    Example:
        >>> relations = {"items": [1, 2, 3]}
        >>> cache = RelationCountCache(relations.__getitem__)
        >>> cache.get_count("items")
        3
        >>> relations["items"].append(4)
        >>> cache.get_count("items")  # stale until invalidated
        3
        >>> cache.invalidate("items")
        >>> cache.get_count("items")
        4
    """

    __slots__ = ("_config", "_counts", "_logger", "_resolver")

    _resolver: RelationResolver
    _counts: dict[str, int]
    _config: CacheConfig
    _logger: "FilteringBoundLogger | None"  # noqa: UP037

    def __init__(
        self,
        resolver: RelationResolver,
        *,
        config: CacheConfig | None = None,
        logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
    ) -> None:
        """Initialize an empty cache.

        Args:
            resolver: Returns the current value of a relation by name. It
                may raise UnknownRelationError for undeclared names.
            config: Cache settings. Defaults to CacheConfig().
            logger: Optional logger for debug-level operation logging.
                If None, no logging is performed.
        """
        self._resolver = resolver
        self._counts = {}
        self._config = config if config is not None else CacheConfig()
        self._logger = logger

    @property
    def config(self) -> CacheConfig:
        """Cache settings in effect."""
        return self._config

    def get_count(self, relation_name: str) -> int:
        """Return the count of a relation, computing it on a cache miss.

        Args:
            relation_name: Name of the relation.

        Returns:
            The cached count, or the freshly computed one.
        """
        if not self._config.enabled:
            return self.compute_true_count(relation_name)

        try:
            cached = self._counts[relation_name]
        except KeyError:
            pass
        else:
            if self._logger:
                self._logger.debug(
                    "relation_count_hit", relation=relation_name, count=cached
                )
            if self._config.verify and self._logger:
                self._verify(relation_name, cached)
            return cached

        count = self.compute_true_count(relation_name)
        self._counts[relation_name] = count
        if self._logger:
            self._logger.debug("relation_count_miss", relation=relation_name, count=count)
        return count

    def _verify(self, relation_name: str, cached: int) -> None:
        actual = self.compute_true_count(relation_name)
        if actual != cached and self._logger:
            self._logger.warning(
                "stale_relation_count",
                relation=relation_name,
                cached=cached,
                actual=actual,
            )

    def compute_true_count(self, relation_name: str) -> int:
        """Compute the count of a relation without touching the cache.

        Args:
            relation_name: Name of the relation.

        Returns:
            The current number of members.
        """
        return count_relation(self._resolver(relation_name), relation_name)

    def invalidate(self, relation_name: str) -> None:
        """Remove the cached count for a relation, if any."""
        removed = self._counts.pop(relation_name, None)
        if self._logger and removed is not None:
            self._logger.debug(
                "relation_count_invalidated", relation=relation_name, count=removed
            )

    def invalidate_all(self) -> None:
        """Remove every cached count."""
        if self._logger and self._counts:
            self._logger.debug(
                "relation_count_invalidated_all", relations=sorted(self._counts)
            )
        self._counts.clear()

    def is_cached(self, relation_name: str) -> bool:
        """Return True if a count for the relation is cached."""
        return relation_name in self._counts

    def cached_names(self) -> frozenset[str]:
        """Return the names of all relations with a cached count."""
        return frozenset(self._counts)

    def __contains__(self, relation_name: object) -> bool:
        return relation_name in self._counts

    def __len__(self) -> int:
        return len(self._counts)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._counts))
