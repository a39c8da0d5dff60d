"""Relation count caching for domain models.

Entities derived from DomainEntity memoize the number of members of each
relation. The count is computed on first request, served from the cache
afterwards, and dropped by every mutation of the relation. Relations held
as lazy placeholders are counted from their known size without loading.

Example:
    >>> from typing import ClassVar
    >>> from relcount import DomainEntity, LazyRelation
    >>> class Blog(DomainEntity):
    ...     relation_names: ClassVar[frozenset[str]] = frozenset({"tags"})
    >>> blog = Blog(id=1)
    >>> blog.set_related("tags", LazyRelation(lambda: ["a", "b"], known_size=2))
    >>> blog.count_related("tags"), blog.is_related_loaded("tags")
    (2, False)
"""

from relcount.cache import RelationCountCache, count_relation
from relcount.config import CacheConfig, Config
from relcount.entity import DomainEntity
from relcount.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
    RelationCountError,
    RelationError,
    RelCountError,
    UnknownRelationError,
)
from relcount.relations import LazyRelation, LazyRelationProtocol, is_lazy_relation
from relcount.storage import (
    MemoryRelationStore,
    RelatedItem,
    RelationStoreProtocol,
    SQLiteRelationStore,
    escape_like,
)
from relcount.utils import create_logger, create_logger_from_config

__all__ = [
    "CacheConfig",
    "Config",
    "ConfigError",
    "ConfigLoadError",
    "ConfigValidationError",
    "DomainEntity",
    "LazyRelation",
    "LazyRelationProtocol",
    "MemoryRelationStore",
    "RelCountError",
    "RelatedItem",
    "RelationCountCache",
    "RelationCountError",
    "RelationError",
    "RelationStoreProtocol",
    "SQLiteRelationStore",
    "UnknownRelationError",
    "count_relation",
    "create_logger",
    "create_logger_from_config",
    "escape_like",
    "is_lazy_relation",
]
