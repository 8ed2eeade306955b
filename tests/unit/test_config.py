"""
Unit tests for SessionConfig.

Tests defaults, file loading, environment overrides and saving.
"""

import json
from pathlib import Path

import pytest

from ide_sessions.config import (
    DEFAULT_CONFIG,
    HOME_ENV_VAR,
    LOG_LEVEL_ENV_VAR,
    SessionConfig,
    default_config_path,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv(HOME_ENV_VAR, raising=False)
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)


class TestSessionConfigDefaults:
    """Tests for default configuration values."""

    def test_default_values(self):
        config = SessionConfig()

        assert config.store_dir == "~/.ide-sessions"
        assert config.record_suffix == ".sess"
        assert config.pointer_stem == "lastSession"
        assert config.auto_restore is True
        assert config.save_on_exit is True
        assert config.log_level == "INFO"

    def test_defaults_dict_matches_dataclass(self):
        assert SessionConfig(**DEFAULT_CONFIG) == SessionConfig()

    def test_store_path_expands_home(self):
        assert SessionConfig().store_path == Path.home() / ".ide-sessions"

    def test_default_config_path(self):
        assert default_config_path() == Path.home() / ".ide-sessions" / "config.json"


class TestSessionConfigLoad:
    """Tests for SessionConfig.load()."""

    def test_load_without_file_returns_defaults(self, tmp_path: Path):
        config = SessionConfig.load(path=tmp_path / "missing.json")
        assert config == SessionConfig()

    def test_load_with_valid_config(self, tmp_path: Path):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({
            "store_dir": str(tmp_path / "store"),
            "auto_restore": False,
            "log_level": "DEBUG",
        }))

        config = SessionConfig.load(path=config_path)

        assert config.store_dir == str(tmp_path / "store")
        assert config.auto_restore is False
        assert config.log_level == "DEBUG"
        assert config.save_on_exit is True

    def test_load_ignores_unknown_fields(self, tmp_path: Path):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"unknown": 1, "pointer_stem": "current"}))

        config = SessionConfig.load(path=config_path)

        assert config.pointer_stem == "current"

    def test_load_with_invalid_json(self, tmp_path: Path):
        config_path = tmp_path / "config.json"
        config_path.write_text("{ invalid")

        assert SessionConfig.load(path=config_path) == SessionConfig()

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"store_dir": "/from/file", "log_level": "ERROR"}))
        monkeypatch.setenv(HOME_ENV_VAR, str(tmp_path / "env-store"))
        monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "debug")

        config = SessionConfig.load(path=config_path)

        assert config.store_dir == str(tmp_path / "env-store")
        assert config.log_level == "DEBUG"

    def test_env_ignored_when_disabled(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv(HOME_ENV_VAR, str(tmp_path / "env-store"))

        config = SessionConfig.load(path=tmp_path / "missing.json", use_env=False)

        assert config.store_dir == "~/.ide-sessions"

    def test_default_path_follows_home_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        home = tmp_path / "home"
        home.mkdir()
        (home / "config.json").write_text(json.dumps({"save_on_exit": False}))
        monkeypatch.setenv(HOME_ENV_VAR, str(home))

        config = SessionConfig.load()

        assert config.save_on_exit is False
        assert config.store_path == home


class TestSessionConfigSave:
    def test_save_round_trip(self, tmp_path: Path):
        config = SessionConfig(store_dir=str(tmp_path), auto_restore=False)
        config.save()

        saved = json.loads((tmp_path / "config.json").read_text())
        assert saved["auto_restore"] is False
        assert SessionConfig.load(path=tmp_path / "config.json", use_env=False) == config
