"""Relation representations.

Classes:
    LazyRelation: Placeholder for a relation that has not been loaded.
    LazyRelationProtocol: Runtime-checkable protocol for lazy placeholders.

Functions:
    is_lazy_relation: Check whether a relation value is a lazy placeholder.
"""

from relcount.relations._lazy import LazyRelation
from relcount.relations._protocol import LazyRelationProtocol, is_lazy_relation

__all__ = [
    "LazyRelation",
    "LazyRelationProtocol",
    "is_lazy_relation",
]
