# pyright: reportExplicitAny=false, reportAny=false
"""Configuration models.

This module provides the Pydantic models for relcount configuration and the
Config container with its factory methods.
"""

from enum import StrEnum
from pathlib import Path  # noqa: TC003
from typing import Any, ClassVar, Self

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from relcount.config._defaults import DEFAULT_CONFIG
from relcount.config._loader import deep_merge, parse_env_vars, read_toml_file
from relcount.exceptions import ConfigValidationError


class LogLevel(StrEnum):
    """Log level threshold values.

    Values are ordered from most verbose (debug) to least verbose (error).
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty writes to stderr).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.JSON
    file: str = ""


class CacheConfig(BaseModel):
    """Relation count cache settings.

    Attributes:
        enabled: Store computed counts. When False every count request
            recomputes.
        verify: On a cache hit, also compute the true count and log a
            warning if the cached value is stale. The cached value is
            still returned. Without a logger the check is skipped.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    enabled: bool = True
    verify: bool = False


def _validation_error(error: ValidationError) -> ConfigValidationError:
    first = error.errors()[0]
    key = ".".join(str(part) for part in first["loc"])
    msg = f"Invalid configuration value for {key!r}: {first['msg']}"
    return ConfigValidationError(
        msg,
        key=key,
        value=first.get("input"),
        expected=first["msg"],
    )


class Config(BaseModel):
    """Configuration container with typed access.

    Use the factory methods rather than the constructor so that defaults,
    files and environment variables are merged consistently.

    Example:
        >>> config = Config.from_dict({"cache": {"verify": True}})
        >>> config.cache.verify
        True
        >>> config.logging.level
        <LogLevel.INFO: 'info'>
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create configuration from a dictionary.

        Args:
            data: Dictionary of configuration values. Missing keys take
                their default values.

        Returns:
            Configuration object from the dictionary.

        Raises:
            ConfigValidationError: If a value is invalid or a key is unknown.
        """
        merged = deep_merge(DEFAULT_CONFIG, data)
        try:
            return cls.model_validate(merged)
        except ValidationError as e:
            raise _validation_error(e) from e

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Create configuration from a TOML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If a value is invalid.
        """
        return cls.from_dict(read_toml_file(path))

    @classmethod
    def load(cls, path: Path | None = None, *, include_env: bool = True) -> Self:
        """Load configuration from all sources.

        Precedence, lowest to highest: defaults, the TOML file at ``path``
        (if given), then ``RELCOUNT_*`` environment variables.

        Args:
            path: Optional TOML file to read.
            include_env: Whether to apply environment variable overrides.

        Returns:
            The merged configuration.
        """
        data: dict[str, Any] = {}
        if path is not None:
            data = read_toml_file(path)
        if include_env:
            data = deep_merge(data, parse_env_vars())
        return cls.from_dict(data)

    def to_toml(self) -> str:
        """Serialize the configuration to a TOML string."""
        return tomli_w.dumps(self.model_dump(mode="json"))
