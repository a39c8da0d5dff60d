"""SQLite-backed relation store."""

from pathlib import Path  # noqa: TC003
from typing import TYPE_CHECKING, cast

from relcount.relations import LazyRelation
from relcount.storage._database import (
    LIKE_ESCAPE,
    connect,
    contains_pattern,
    create_database,
    delete,
    fetch_all,
    fetch_scalar,
    insert,
    safe_identifier,
)
from relcount.storage._models import RelatedItem

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

_TABLE_NAME = "related_items"
_TABLE = safe_identifier(_TABLE_NAME)

_SQLITE_SCHEMA = f"""
CREATE TABLE IF NOT EXISTS {_TABLE} (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    owner_type TEXT NOT NULL,
    owner_id INTEGER NOT NULL,
    relation TEXT NOT NULL,
    label TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS related_items_owner
    ON {_TABLE} (owner_type, owner_id, relation);
"""

_OWNER_WHERE = "owner_type = ? AND owner_id = ? AND relation = ?"


class SQLiteRelationStore:
    """SQLite-backed implementation of RelationStoreProtocol.

    Every operation opens its own connection, so a store can be shared by
    entities within one process. Counting uses ``COUNT(*)`` and never loads
    rows, which is what lets ``lazy`` hand out placeholders with a known
    size.
    """

    _db_path: str
    _logger: "FilteringBoundLogger | None"  # noqa: UP037

    def __init__(
        self,
        db_path: str | Path,
        *,
        logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
    ) -> None:
        """Initialize the store, creating the database and schema if needed.

        Args:
            db_path: Path to the SQLite database file.
            logger: Optional logger for debug-level operation logging.
                If None, no logging is performed.
        """
        self._db_path = str(db_path)
        self._logger = logger
        create_database(self._db_path, _SQLITE_SCHEMA)

    @property
    def db_path(self) -> str:
        """Path to the database file."""
        return self._db_path

    def load(self, owner_type: str, owner_id: int, relation: str) -> list[RelatedItem]:
        """Load every member of a relation, ordered by id."""
        with connect(self._db_path) as conn:
            items = fetch_all(
                conn,
                RelatedItem,
                f"SELECT * FROM {_TABLE} WHERE {_OWNER_WHERE} ORDER BY id",  # noqa: S608
                (owner_type, owner_id, relation),
            )
        if self._logger:
            self._logger.debug(
                "relation_store_load",
                owner_type=owner_type,
                owner_id=owner_id,
                relation=relation,
                size=len(items),
            )
        return items

    def count(self, owner_type: str, owner_id: int, relation: str) -> int:
        """Count the members of a relation without loading them."""
        with connect(self._db_path) as conn:
            value = fetch_scalar(
                conn,
                f"SELECT COUNT(*) FROM {_TABLE} WHERE {_OWNER_WHERE}",  # noqa: S608
                (owner_type, owner_id, relation),
            )
        count = cast("int", value or 0)
        if self._logger:
            self._logger.debug(
                "relation_store_count",
                owner_type=owner_type,
                owner_id=owner_id,
                relation=relation,
                count=count,
            )
        return count

    def lazy(
        self, owner_type: str, owner_id: int, relation: str
    ) -> LazyRelation[RelatedItem]:
        """Return an unloaded placeholder whose known size comes from COUNT(*)."""
        return LazyRelation(
            lambda: self.load(owner_type, owner_id, relation),
            known_size=self.count(owner_type, owner_id, relation),
            name=relation,
            logger=self._logger,
        )

    def add(
        self, owner_type: str, owner_id: int, relation: str, label: str
    ) -> RelatedItem:
        """Store a new member and return it with its id."""
        item = RelatedItem(
            owner_type=owner_type, owner_id=owner_id, relation=relation, label=label
        )
        with connect(self._db_path) as conn:
            row_id = insert(conn, _TABLE_NAME, item, exclude={"id"})
        if self._logger:
            self._logger.debug(
                "relation_store_add", relation=relation, owner_id=owner_id, id=row_id
            )
        return item.model_copy(update={"id": row_id})

    def remove(self, item_id: int) -> bool:
        """Delete a member by id. Returns True if a row was deleted."""
        with connect(self._db_path) as conn:
            deleted = delete(conn, _TABLE_NAME, "id", item_id)
        if self._logger:
            self._logger.debug("relation_store_remove", id=item_id, deleted=deleted)
        return deleted > 0

    def search(
        self, owner_type: str, owner_id: int, relation: str, term: str
    ) -> list[RelatedItem]:
        """Return members whose label contains ``term`` literally.

        Wildcards in ``term`` are escaped, so ``"50%"`` only matches labels
        containing the text ``50%``. Matching follows SQLite's LIKE, which
        ignores case for ASCII letters.
        """
        with connect(self._db_path) as conn:
            items = fetch_all(
                conn,
                RelatedItem,
                f"SELECT * FROM {_TABLE} WHERE {_OWNER_WHERE} "  # noqa: S608
                f"AND label LIKE ? ESCAPE '{LIKE_ESCAPE}' ORDER BY id",
                (owner_type, owner_id, relation, contains_pattern(term)),
            )
        if self._logger:
            self._logger.debug(
                "relation_store_search", relation=relation, term=term, hits=len(items)
            )
        return items
