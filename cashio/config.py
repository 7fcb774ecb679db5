"""Configuration for cashio.

The config file is TOML and holds two optional keys::

    log_level = "WARNING"

    [database]
    path = "~/.local/share/cashio/cashio.db"

A missing file means defaults everywhere. A file that is not valid TOML is a
ConfigError, so commands can report it instead of failing on startup.
"""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from cashio.errors import ConfigError
from cashio.store.schema import get_default_db_path

DB_PATH_ENV = "CASHIO_DB_PATH"


def get_config_path() -> Path:
    """Locate config.toml under $XDG_CONFIG_HOME/cashio, or ~/.config/cashio."""
    config_home = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(config_home) / "cashio" / "config.toml"


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Read the config file.

    Raises:
        FileNotFoundError: If there is no config file.
        ConfigError: If the file is not valid TOML.
    """
    path = config_path or get_config_path()
    with open(path, "rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config {path}: {e}") from e


def load_config_or_default(config_path: Path | None = None) -> dict[str, Any]:
    """Read the config file, treating a missing file as an empty config."""
    try:
        return load_config(config_path)
    except FileNotFoundError:
        return {}


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Write ``config`` as TOML, readable by the owner only."""
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(path, 0o600)


def create_default_config(config_path: Path | None = None) -> None:
    """Write a config with the default log level and database location."""
    save_config(
        {
            "log_level": "WARNING",
            "database": {"path": str(get_default_db_path())},
        },
        config_path,
    )


def resolve_db_path(config_path: Path | None = None) -> Path:
    """Resolve the database location.

    Checked in order: the CASHIO_DB_PATH environment variable, the
    ``database.path`` config key, then the XDG data directory.

    Raises:
        ConfigError: If the config file is not valid TOML.
    """
    env_path = os.environ.get(DB_PATH_ENV)
    if env_path:
        return Path(env_path).expanduser()

    database = load_config_or_default(config_path).get("database", {})
    if isinstance(database, dict) and database.get("path"):
        return Path(database["path"]).expanduser()

    return get_default_db_path()


def get_log_level(config_path: Path | None = None) -> str | None:
    """Get the configured log level, if any.

    Raises:
        ConfigError: If the config file is not valid TOML.
    """
    level = load_config_or_default(config_path).get("log_level")
    return str(level) if level else None
