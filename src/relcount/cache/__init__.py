"""Relation count caching.

Classes:
    RelationCountCache: Per-entity memoization of relation counts.

Functions:
    count_relation: Count a relation value without loading lazy
        placeholders that already know their size.
"""

from relcount.cache._cache import RelationCountCache, RelationResolver, count_relation

__all__ = [
    "RelationCountCache",
    "RelationResolver",
    "count_relation",
]
