"""Property-based tests for LIKE escaping against SQLite."""

import sqlite3

from hypothesis import given, strategies as st

from relcount.storage import LIKE_ESCAPE, contains_pattern, escape_like

# ASCII only: SQLite folds case for ASCII letters alone
text = st.text(alphabet=st.sampled_from("ab%_\\ X"), max_size=8)


def _sqlite_like(value: str, pattern: str) -> bool:
    conn = sqlite3.connect(":memory:")
    try:
        row = conn.execute(
            f"SELECT ? LIKE ? ESCAPE '{LIKE_ESCAPE}'", (value, pattern)
        ).fetchone()
    finally:
        conn.close()
    return bool(row[0])


@given(term=text)
def test_escaped_term_matches_itself(term: str) -> None:
    """Property: an escaped term matches exactly its own text."""
    assert _sqlite_like(term, escape_like(term)) is True


@given(value=text, term=text)
def test_contains_pattern_is_literal_substring_match(value: str, term: str) -> None:
    """Property: contains_pattern matches iff term is a case-folded substring."""
    expected = term.lower() in value.lower()

    assert _sqlite_like(value, contains_pattern(term)) is expected


@given(term=text)
def test_escaping_never_shrinks_term(term: str) -> None:
    """Property: escaping only inserts characters."""
    escaped = escape_like(term)

    assert len(escaped) >= len(term)
    assert escaped.replace(LIKE_ESCAPE + LIKE_ESCAPE, "").count(LIKE_ESCAPE) == (
        term.count("%") + term.count("_")
    )
