# pyright: reportAny=false
"""Unit tests for exception context attributes."""

from pathlib import Path

from relcount.exceptions import (
    ConfigLoadError,
    ConfigValidationError,
    RelationCountError,
    UnknownRelationError,
)


class TestUnknownRelationError:
    def test_message_names_entity_type(self) -> None:
        error = UnknownRelationError("comments", entity_type="Blog")

        assert str(error) == "Unknown relation 'comments' for Blog"
        assert error.relation == "comments"

    def test_message_without_entity_type(self) -> None:
        assert str(UnknownRelationError("comments")) == "Unknown relation 'comments'"


class TestRelationCountError:
    def test_stores_context(self) -> None:
        error = RelationCountError("tags", -2)

        assert error.relation == "tags"
        assert error.count == -2
        assert "-2" in str(error)


class TestConfigErrors:
    def test_load_error_stores_location(self) -> None:
        error = ConfigLoadError("bad", path=Path("/x.toml"), line=3, column=4)

        assert (error.path, error.line, error.column) == (Path("/x.toml"), 3, 4)

    def test_validation_error_stores_context(self) -> None:
        error = ConfigValidationError(
            "bad", key="cache.enabled", value="maybe", expected="bool"
        )

        assert error.key == "cache.enabled"
        assert error.value == "maybe"
        assert error.expected == "bool"
