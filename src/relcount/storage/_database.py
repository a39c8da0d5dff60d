"""SQLite database utilities for Pydantic models.

This module provides the small set of CRUD helpers the relation stores need,
using Pydantic models for serialization and deserialization, plus escaping
for LIKE patterns built from user input.

Note:
    Fields with ``None`` values are excluded from INSERT operations via
    ``exclude_none=True``, so autoincrement keys can be left unset.
"""

import re
import sqlite3
from collections.abc import Iterator, Sequence  # noqa: TC003
from contextlib import contextmanager, suppress
from pathlib import Path
from typing import Literal, cast

from pydantic import BaseModel

# Valid SQL identifier pattern (alphanumeric and underscores, not starting with digit)
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Default escape character for LIKE patterns
LIKE_ESCAPE = "\\"

# SQLite-compatible value types
type SQLValue = str | int | float | bytes | None

# SQLite transaction isolation levels
type IsolationLevel = Literal["DEFERRED", "EXCLUSIVE", "IMMEDIATE"] | None


@contextmanager
def connect(
    path: str | Path,
    *,
    timeout: float = 30.0,
    isolation_level: IsolationLevel = "IMMEDIATE",
    wal_mode: bool = True,
) -> Iterator[sqlite3.Connection]:
    """Context manager for SQLite connections with automatic transaction handling.

    Opens a connection, yields it for use, and handles cleanup. On successful
    completion, commits the transaction. On any exception, rolls back and
    re-raises. The connection is always closed on exit.

    Args:
        path: Database file path.
        timeout: Seconds to wait for lock before raising OperationalError.
        isolation_level: Transaction isolation level (DEFERRED, IMMEDIATE, EXCLUSIVE).
        wal_mode: If True, enable WAL journal mode for better concurrency.

    Yields:
        SQLite connection with row_factory set to sqlite3.Row.

    Raises:
        sqlite3.OperationalError: If the database cannot be opened.
    """
    conn = sqlite3.connect(str(path), timeout=timeout, isolation_level=isolation_level)
    conn.row_factory = sqlite3.Row

    if wal_mode and str(path) != ":memory:":
        with suppress(sqlite3.OperationalError):
            _ = conn.execute("PRAGMA journal_mode=WAL")

    try:
        yield conn
        conn.commit()
    except BaseException:
        with suppress(Exception):
            conn.rollback()
        raise
    finally:
        conn.close()


def create_database(path: str | Path, schema: str | None = None) -> None:
    """Create an SQLite database, optionally with a schema.

    Creates the database file and any parent directories if they don't exist.
    Existing data is preserved, so the schema should use IF NOT EXISTS.

    Args:
        path: Path to the database file.
        schema: Optional DDL statements to execute.
    """
    if str(path) != ":memory:":
        Path(path).parent.mkdir(parents=True, exist_ok=True)

    with connect(path) as conn:
        if schema:
            _ = conn.executescript(schema)


def safe_identifier(name: str) -> str:
    """Validate and quote a SQL identifier.

    Examples:
        >>> safe_identifier("related_items")
        '"related_items"'
        >>> safe_identifier("123abc")
        Traceback (most recent call last):
            ...
        ValueError: Invalid SQL identifier: '123abc'
    """
    if not _IDENTIFIER_RE.match(name):
        msg = f"Invalid SQL identifier: {name!r}"
        raise ValueError(msg)
    return f'"{name}"'


def escape_like(term: str, escape: str = LIKE_ESCAPE) -> str:
    """Escape LIKE wildcards in a search term.

    The result matches ``term`` literally when used with
    ``LIKE ? ESCAPE '<escape>'``. The escape character itself is escaped
    first so it cannot combine with a following wildcard.

    Args:
        term: Raw search term, typically user input.
        escape: Single escape character.

    Returns:
        The escaped term.

    Raises:
        ValueError: If escape is not exactly one character.

    Examples:
        >>> escape_like("100%")
        '100\\\\%'
        >>> escape_like("snake_case")
        'snake\\\\_case'
        >>> escape_like("plain")
        'plain'
    """
    if len(escape) != 1:
        msg = f"LIKE escape must be a single character, got {escape!r}"
        raise ValueError(msg)
    return (
        term.replace(escape, escape + escape)
        .replace("%", escape + "%")
        .replace("_", escape + "_")
    )


def contains_pattern(term: str, escape: str = LIKE_ESCAPE) -> str:
    """Build a LIKE pattern matching ``term`` anywhere in a value."""
    return f"%{escape_like(term, escape)}%"


def fetch_one[T: BaseModel](
    conn: sqlite3.Connection,
    model: type[T],
    sql: str,
    params: Sequence[SQLValue] = (),
) -> T | None:
    """Fetch a single row and return it as a Pydantic model, or None."""
    row = cast("sqlite3.Row | None", conn.execute(sql, tuple(params)).fetchone())
    if row is None:
        return None
    return model.model_validate(dict(row))


def fetch_all[T: BaseModel](
    conn: sqlite3.Connection,
    model: type[T],
    sql: str,
    params: Sequence[SQLValue] = (),
) -> list[T]:
    """Fetch all rows and return them as Pydantic models."""
    rows = cast("list[sqlite3.Row]", conn.execute(sql, tuple(params)).fetchall())
    return [model.model_validate(dict(row)) for row in rows]


def fetch_scalar(
    conn: sqlite3.Connection,
    sql: str,
    params: Sequence[SQLValue] = (),
) -> SQLValue:
    """Fetch the first column of the first row, or None if there is no row."""
    row = cast("sqlite3.Row | None", conn.execute(sql, tuple(params)).fetchone())
    if row is None:
        return None
    return cast("SQLValue", row[0])


def insert(
    conn: sqlite3.Connection,
    table: str,
    obj: BaseModel,
    exclude: set[str] | None = None,
) -> int:
    """Insert a model into a table.

    Args:
        conn: SQLite connection.
        table: Table name.
        obj: Pydantic model to insert.
        exclude: Field names to exclude from the insert.

    Returns:
        The lastrowid of the inserted row, or 0 if not available.
    """
    safe_table = safe_identifier(table)
    data = obj.model_dump(exclude=exclude or set(), exclude_none=True)
    cols = ", ".join(safe_identifier(k) for k in data)
    placeholders = ", ".join(f":{k}" for k in data)
    cursor = conn.execute(
        f"INSERT INTO {safe_table} ({cols}) VALUES ({placeholders})",  # noqa: S608
        data,
    )
    return cursor.lastrowid or 0


def delete(
    conn: sqlite3.Connection,
    table: str,
    key_column: str,
    key_value: str | int,
) -> int:
    """Delete rows matching a key and return the number of rows affected."""
    safe_table = safe_identifier(table)
    safe_key = safe_identifier(key_column)
    cursor = conn.execute(
        f"DELETE FROM {safe_table} WHERE {safe_key} = ?",  # noqa: S608
        (key_value,),
    )
    return cursor.rowcount
