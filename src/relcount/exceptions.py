"""relcount exceptions."""

from pathlib import Path  # noqa: TC003
from typing import Any


class RelCountError(Exception):
    """Base exception for relcount errors."""


# =============================================================================
# Relation Exceptions
# =============================================================================


class RelationError(RelCountError):
    """Base exception for relation errors."""


class UnknownRelationError(RelationError, KeyError):
    """Raised when a relation name is not declared for an entity type.

    Attributes:
        relation: The relation name that was requested.
        entity_type: Name of the entity class, if known.
    """

    def __init__(self, relation: str, *, entity_type: str | None = None) -> None:
        """Initialize with the relation name and optional entity type."""
        if entity_type:
            message = f"Unknown relation {relation!r} for {entity_type}"
        else:
            message = f"Unknown relation {relation!r}"
        super().__init__(message)
        self.relation: str = relation
        self.entity_type: str | None = entity_type

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class RelationCountError(RelationError, ValueError):
    """Raised when a relation reports an impossible count.

    Attributes:
        relation: The relation name.
        count: The value that was reported.
    """

    def __init__(self, relation: str, count: int) -> None:
        """Initialize with the relation name and the reported count."""
        super().__init__(f"Relation {relation!r} reported a negative count: {count}")
        self.relation: str = relation
        self.count: int = count


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(RelCountError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
