"""Relation storage.

Classes:
    SQLiteRelationStore: Relation store backed by an SQLite file.
    MemoryRelationStore: In-memory relation store for tests.
    RelationStoreProtocol: Runtime-checkable protocol both stores satisfy.
    RelatedItem: A stored member of a relation.

Functions:
    escape_like: Escape LIKE wildcards in user input.
    safe_identifier: Validate and quote an SQL identifier.

Example:
    >>> from relcount.storage import SQLiteRelationStore
    >>> store = SQLiteRelationStore("relations.db")
    >>> _ = store.add("Blog", 1, "tags", "python")
    >>> store.lazy("Blog", 1, "tags").known_size
    1
"""

from relcount.storage._database import (
    LIKE_ESCAPE,
    SQLValue,
    connect,
    contains_pattern,
    create_database,
    delete,
    escape_like,
    fetch_all,
    fetch_one,
    fetch_scalar,
    insert,
    safe_identifier,
)
from relcount.storage._memory import MemoryRelationStore
from relcount.storage._models import RelatedItem
from relcount.storage._protocol import RelationStoreProtocol
from relcount.storage._sqlite import SQLiteRelationStore

__all__ = [
    "LIKE_ESCAPE",
    "MemoryRelationStore",
    "RelatedItem",
    "RelationStoreProtocol",
    "SQLValue",
    "SQLiteRelationStore",
    "connect",
    "contains_pattern",
    "create_database",
    "delete",
    "escape_like",
    "fetch_all",
    "fetch_one",
    "fetch_scalar",
    "insert",
    "safe_identifier",
]
