"""
Configuration management for ide-sessions.

Settings come from, lowest to highest priority:
1. DEFAULT_CONFIG
2. <store_dir>/config.json (default: ~/.ide-sessions/config.json)
3. IDE_SESSIONS_HOME / IDE_SESSIONS_LOG_LEVEL environment variables
   (a .env file in the current directory is loaded first)
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

HOME_ENV_VAR = "IDE_SESSIONS_HOME"
LOG_LEVEL_ENV_VAR = "IDE_SESSIONS_LOG_LEVEL"

DEFAULT_STORE_DIR = "~/.ide-sessions"
CONFIG_FILENAME = "config.json"

DEFAULT_CONFIG = {
    "store_dir": DEFAULT_STORE_DIR,
    "record_suffix": ".sess",
    "pointer_stem": "lastSession",
    "auto_restore": True,
    "save_on_exit": True,
    "log_level": "INFO",
}


def _filter_dataclass_fields(data: dict[str, Any], cls: type) -> dict[str, Any]:
    """Filter dict to only include fields that exist in the dataclass."""
    valid_fields = {f.name for f in fields(cls)}
    return {k: v for k, v in data.items() if k in valid_fields}


def default_config_path() -> Path:
    """Config file location, honouring IDE_SESSIONS_HOME."""
    store_dir = os.getenv(HOME_ENV_VAR) or DEFAULT_STORE_DIR
    return Path(store_dir).expanduser() / CONFIG_FILENAME


@dataclass
class SessionConfig:
    """
    User configuration for the session manager.

    store_dir is the user-scoped directory holding the session records,
    the last-used pointer and the startup hook.
    """

    store_dir: str = DEFAULT_STORE_DIR
    record_suffix: str = ".sess"
    pointer_stem: str = "lastSession"
    auto_restore: bool = True
    save_on_exit: bool = True
    log_level: str = "INFO"

    @property
    def store_path(self) -> Path:
        """Expanded store directory."""
        return Path(self.store_dir).expanduser()

    @classmethod
    def load(cls, path: Path | None = None, use_env: bool = True) -> "SessionConfig":
        """
        Load config from file with defaults.

        Args:
            path: Optional config file path. Defaults to ~/.ide-sessions/config.json
            use_env: Apply environment variable overrides

        Returns:
            SessionConfig with user settings merged with defaults
        """
        if use_env:
            load_dotenv()

        if path is None:
            path = default_config_path()

        config = DEFAULT_CONFIG.copy()

        if path.exists():
            try:
                user_config = json.loads(path.read_text())
                if isinstance(user_config, dict):
                    config.update(user_config)
            except (json.JSONDecodeError, OSError):
                # Use defaults on error
                pass

        if use_env:
            home = os.getenv(HOME_ENV_VAR)
            if home:
                config["store_dir"] = home
            log_level = os.getenv(LOG_LEVEL_ENV_VAR)
            if log_level:
                config["log_level"] = log_level.upper()

        return cls(**_filter_dataclass_fields(config, cls))

    def save(self, path: Path | None = None) -> None:
        """Save configuration to file."""
        if path is None:
            path = self.store_path / CONFIG_FILENAME

        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(asdict(self), f, indent=2)


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG",
    "HOME_ENV_VAR",
    "LOG_LEVEL_ENV_VAR",
    "SessionConfig",
    "default_config_path",
]
