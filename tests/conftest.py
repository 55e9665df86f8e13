"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from syld.core.models.package import PackageManager, PackageRecord


@pytest.fixture
def xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> dict[str, Path]:
    """Point the XDG config and data directories at a temp dir."""
    config_home = tmp_path / "config"
    data_home = tmp_path / "data"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.setenv("XDG_DATA_HOME", str(data_home))
    monkeypatch.delenv("SYLD_CONFIG", raising=False)
    monkeypatch.delenv("SYLD_LOG_LEVEL", raising=False)
    monkeypatch.delenv("SYLD_LOG_FILE", raising=False)
    return {
        "config": config_home / "syld",
        "data": data_home / "syld",
        "config_file": config_home / "syld" / "config.yml",
    }


@pytest.fixture
def records() -> list[PackageRecord]:
    """A small mixed-manager set of installed packages."""
    return [
        PackageRecord(manager=PackageManager.PACMAN, name="curl", version="8.5.0-1"),
        PackageRecord(manager=PackageManager.APT, name="libcurl4", version="8.5.0-2"),
        PackageRecord(manager=PackageManager.PACMAN, name="git", version="2.43.0-1"),
        PackageRecord(manager=PackageManager.FLATPAK, name="org.mozilla.firefox", version="121.0"),
        PackageRecord(manager=PackageManager.PACMAN, name="zlib", version="1.3-1"),
    ]
