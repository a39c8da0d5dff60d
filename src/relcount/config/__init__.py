"""relcount configuration.

Example:
    >>> from relcount.config import Config
    >>> config = Config.load()
    >>> config.cache.enabled
    True
"""

from relcount.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
)

from ._defaults import DEFAULT_CONFIG
from ._loader import (
    ENV_PREFIX,
    deep_merge,
    parse_env_vars,
    parse_string_value,
    read_toml_file,
    set_nested_key,
)
from ._models import CacheConfig, Config, LogFormat, LoggingConfig, LogLevel

__all__ = [
    "DEFAULT_CONFIG",
    "ENV_PREFIX",
    "CacheConfig",
    "Config",
    "ConfigError",
    "ConfigLoadError",
    "ConfigValidationError",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "deep_merge",
    "parse_env_vars",
    "parse_string_value",
    "read_toml_file",
    "set_nested_key",
]
