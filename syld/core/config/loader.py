"""
Configuration loader — reads config.yml into the Settings model.

The file lives in the XDG config directory and is optional: a missing
file yields default settings. YAML is validated against the Pydantic
schema and any problem surfaces as ``ConfigError``.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

import yaml

from syld.core.models.settings import Settings
from syld.core.services.resolution_table import ResolutionTable, ResolutionTableError

logger = logging.getLogger(__name__)

APP_NAME = "syld"
CONFIG_FILE = "config.yml"

# Environment variable that points straight at a config file.
CONFIG_ENV = "SYLD_CONFIG"


class ConfigError(Exception):
    """Raised when configuration is invalid or unreadable."""


def config_dir() -> Path:
    """``$XDG_CONFIG_HOME/syld`` (default ``~/.config/syld``)."""
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / APP_NAME


def data_dir() -> Path:
    """``$XDG_DATA_HOME/syld`` (default ``~/.local/share/syld``)."""
    base = os.environ.get("XDG_DATA_HOME")
    root = Path(base) if base else Path.home() / ".local" / "share"
    return root / APP_NAME


def config_path(explicit: Path | None = None) -> Path:
    """Resolve the config file path.

    Precedence: explicit path > ``$SYLD_CONFIG`` > XDG config dir.
    """
    if explicit is not None:
        return explicit
    env = os.environ.get(CONFIG_ENV)
    if env:
        return Path(env)
    return config_dir() / CONFIG_FILE


def _read_yaml(path: Path) -> object:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e


def load_settings(path: Path | None = None) -> Settings:
    """Load and validate settings.

    Args:
        path: Explicit config path. If None, uses :func:`config_path`.

    Returns:
        Validated Settings (defaults when the file does not exist).

    Raises:
        ConfigError: If the file is unreadable or invalid.
    """
    path = config_path(path)

    if not path.exists():
        logger.debug("No config at %s — using defaults", path)
        return Settings()

    if not path.is_file():
        raise ConfigError(f"Config path is not a file: {path}")

    logger.debug("Loading settings from %s", path)
    data = _read_yaml(path)

    if data is None:
        return Settings()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        settings = Settings.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info("Loaded settings from %s", path)
    return settings


def dump_settings(settings: Settings) -> str:
    """Render settings as YAML text."""
    data = settings.model_dump(mode="json")
    return yaml.safe_dump(data, sort_keys=False, default_flow_style=False)


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Write settings to disk (atomic write).

    Returns:
        The path written to.
    """
    path = config_path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    content = dump_settings(settings)

    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=".config_", suffix=".tmp")
    os.close(fd)
    tmp = Path(tmp_path)
    try:
        tmp.write_text(content, encoding="utf-8")
        tmp.replace(path)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise

    logger.debug("Settings saved to %s", path)
    return path


def load_resolution_table(path: Path) -> ResolutionTable:
    """Load a user resolution table (YAML list of project entries).

    The file may be a bare list or a mapping with a ``projects:`` key.

    Raises:
        ConfigError: If the file is missing or malformed.
    """
    if not path.is_file():
        raise ConfigError(f"Resolution table not found: {path}")

    data = _read_yaml(path)
    if isinstance(data, dict):
        data = data.get("projects", [])
    if data is None:
        data = []
    if not isinstance(data, list):
        raise ConfigError(f"Expected a list of projects in {path}")

    try:
        table = ResolutionTable(data)
    except ResolutionTableError as e:
        raise ConfigError(f"Invalid resolution table {path}: {e}") from e

    logger.info("Loaded %d project mapping(s) from %s", table.project_count, path)
    return table
