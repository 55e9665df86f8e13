"""
Tests for the configuration loader.
"""

import textwrap
from decimal import Decimal
from pathlib import Path

import pytest

from syld.core.config.loader import (
    ConfigError,
    config_path,
    data_dir,
    dump_settings,
    load_resolution_table,
    load_settings,
    save_settings,
)
from syld.core.models.budget import AllocationStrategy, Cadence
from syld.core.models.package import PackageManager
from syld.core.models.settings import Settings


class TestPaths:
    def test_xdg_locations(self, xdg):
        assert config_path() == xdg["config_file"]
        assert data_dir() == xdg["data"]

    def test_env_override(self, xdg, tmp_path: Path, monkeypatch):
        custom = tmp_path / "custom.yml"
        monkeypatch.setenv("SYLD_CONFIG", str(custom))
        assert config_path() == custom

    def test_explicit_wins(self, xdg, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("SYLD_CONFIG", str(tmp_path / "env.yml"))
        assert config_path(tmp_path / "cli.yml") == tmp_path / "cli.yml"

    def test_home_fallback(self, monkeypatch, tmp_path: Path):
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.delenv("SYLD_CONFIG", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert config_path() == tmp_path / ".config" / "syld" / "config.yml"


class TestLoadSettings:
    def test_missing_file_gives_defaults(self, tmp_path: Path):
        settings = load_settings(tmp_path / "missing.yml")
        assert settings == Settings()

    def test_empty_file_gives_defaults(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("")
        assert load_settings(path) == Settings()

    def test_full_config(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text(textwrap.dedent("""\
            budget:
              amount: "20.00"
              currency: eur
              cadence: yearly
              strategy: weighted
              min_amount: 1.5
            report:
              limit: 10
            backends: [pacman, flatpak]
        """))
        settings = load_settings(path)
        assert settings.budget.amount == Decimal("20.00")
        assert settings.budget.currency == "EUR"
        assert settings.budget.cadence == Cadence.YEARLY
        assert settings.budget.strategy == AllocationStrategy.WEIGHTED
        assert settings.budget.min_amount == Decimal("1.5")
        assert settings.report.limit == 10
        assert settings.backends == [PackageManager.PACMAN, PackageManager.FLATPAK]

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("budget: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_settings(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_settings(path)

    def test_invalid_values(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("budget:\n  cadence: weekly\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_settings(path)

    def test_negative_amount(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("budget:\n  amount: -5\n")
        with pytest.raises(ConfigError):
            load_settings(path)

    def test_directory_is_error(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not a file"):
            load_settings(tmp_path)


class TestSaveSettings:
    def test_save_and_reload(self, tmp_path: Path):
        path = tmp_path / "nested" / "config.yml"
        settings = Settings()
        settings.budget.amount = Decimal("12.50")
        settings.budget.strategy = AllocationStrategy.WEIGHTED

        written = save_settings(settings, path)
        assert written == path
        assert load_settings(path) == settings

    def test_no_temp_files_left(self, tmp_path: Path):
        save_settings(Settings(), tmp_path / "config.yml")
        assert [p.name for p in tmp_path.iterdir()] == ["config.yml"]

    def test_dump_is_yaml(self):
        text = dump_settings(Settings())
        assert text.startswith("budget:")
        assert "limit: 25" in text


class TestResolutionTableFile:
    def test_list_format(self, tmp_path: Path):
        path = tmp_path / "table.yml"
        path.write_text(textwrap.dedent("""\
            - key: mytool
              display_name: My Tool
              packages:
                pacman: [mytool, mytool-data]
        """))
        table = load_resolution_table(path)
        assert table.lookup("pacman", "mytool-data").display_name == "My Tool"

    def test_mapping_format(self, tmp_path: Path):
        path = tmp_path / "table.yml"
        path.write_text("projects:\n  - key: x\n    packages:\n      apt: [x]\n")
        assert load_resolution_table(path).project_count == 1

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_resolution_table(tmp_path / "nope.yml")

    def test_invalid_entries(self, tmp_path: Path):
        path = tmp_path / "table.yml"
        path.write_text("- key: x\n  packages:\n    brew: [x]\n")
        with pytest.raises(ConfigError, match="Invalid resolution table"):
            load_resolution_table(path)

    def test_not_a_list(self, tmp_path: Path):
        path = tmp_path / "table.yml"
        path.write_text("projects: 3\n")
        with pytest.raises(ConfigError):
            load_resolution_table(path)
