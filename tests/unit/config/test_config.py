# pyright: reportAny=false
"""Unit tests for Config and its sections."""

import tomllib
from pathlib import Path

import pytest
from pyfakefs.fake_filesystem import FakeFilesystem

from relcount.config import (
    CacheConfig,
    Config,
    ConfigLoadError,
    ConfigValidationError,
    LogFormat,
    LoggingConfig,
    LogLevel,
)


class TestDefaults:
    def test_default_sections(self) -> None:
        config = Config.from_dict({})

        assert config.logging == LoggingConfig(
            level=LogLevel.INFO, format=LogFormat.JSON, file=""
        )
        assert config.cache == CacheConfig(enabled=True, verify=False)

    def test_config_is_frozen(self) -> None:
        config = Config.from_dict({})

        with pytest.raises(ValueError, match="frozen"):
            config.cache = CacheConfig(enabled=False)  # pyright: ignore[reportAttributeAccessIssue]


class TestFromDict:
    def test_overrides_single_key(self) -> None:
        config = Config.from_dict({"cache": {"verify": True}})

        assert config.cache.verify is True
        assert config.cache.enabled is True

    def test_parses_enum_values(self) -> None:
        config = Config.from_dict({"logging": {"level": "debug", "format": "text"}})

        assert config.logging.level is LogLevel.DEBUG
        assert config.logging.format is LogFormat.TEXT

    def test_invalid_level_raises_validation_error(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            _ = Config.from_dict({"logging": {"level": "loud"}})

        assert exc_info.value.key == "logging.level"
        assert exc_info.value.value == "loud"

    def test_unknown_key_raises_validation_error(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            _ = Config.from_dict({"cache": {"ttl": 10}})

        assert exc_info.value.key == "cache.ttl"


class TestFromFile:
    def test_reads_toml(self, fs: FakeFilesystem) -> None:
        path = Path("/project/relcount.toml")
        fs.create_file(path, contents='[cache]\nenabled = false\n')

        config = Config.from_file(path)

        assert config.cache.enabled is False

    def test_invalid_toml_raises_load_error(self, fs: FakeFilesystem) -> None:
        path = Path("/project/relcount.toml")
        fs.create_file(path, contents="[cache\nenabled = false\n")

        with pytest.raises(ConfigLoadError) as exc_info:
            _ = Config.from_file(path)

        assert exc_info.value.path == path

    def test_missing_file_raises(self, fs: FakeFilesystem) -> None:
        with pytest.raises(FileNotFoundError):
            _ = Config.from_file(Path("/project/missing.toml"))


class TestLoad:
    def test_env_overrides_file(
        self, fs: FakeFilesystem, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = Path("/project/relcount.toml")
        fs.create_file(path, contents='[logging]\nlevel = "warning"\n')
        monkeypatch.setenv("RELCOUNT_LOGGING__LEVEL", "error")
        monkeypatch.setenv("RELCOUNT_CACHE__VERIFY", "1")

        config = Config.load(path)

        assert config.logging.level is LogLevel.ERROR
        assert config.cache.verify is True

    def test_env_ignored_when_disabled(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RELCOUNT_CACHE__ENABLED", "false")

        config = Config.load(include_env=False)

        assert config.cache.enabled is True

    def test_debug_flag_is_not_a_config_key(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("RELCOUNT_DEBUG", "1")

        config = Config.load()

        assert config == Config.from_dict({})


class TestToToml:
    def test_round_trips_through_tomllib(self) -> None:
        config = Config.from_dict({"cache": {"verify": True}, "logging": {"file": "x.log"}})

        data = tomllib.loads(config.to_toml())

        assert Config.from_dict(data) == config
        assert data["logging"]["level"] == "info"
