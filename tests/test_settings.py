"""Tests for AppSettings."""

from __future__ import annotations

from pathlib import Path

import pytest
from PySide6.QtCore import QSettings

from themecomposer.config.settings import AppSettings
from themecomposer.errors import UnsupportedOperation


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    qs = QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)
    return AppSettings(qs)


def test_saved_display_default_and_override(settings: AppSettings) -> None:
    """Test the saved indicator duration default and clamping."""
    assert settings.saved_display_ms == 2000
    settings.saved_display_ms = 500
    assert settings.saved_display_ms == 500
    settings.saved_display_ms = -10
    assert settings.saved_display_ms == 0


def test_last_theme_id_is_per_variant(settings: AppSettings) -> None:
    """Test the last theme is remembered per variant."""
    assert settings.last_theme_id("bible") == ""
    settings.set_last_theme_id("bible", " t1 ")
    settings.set_last_theme_id("songs", "t2")
    assert settings.last_theme_id("bible") == "t1"
    assert settings.last_theme_id("songs") == "t2"


def test_display_theme_override(settings: AppSettings) -> None:
    """Test a per-display override is stored."""
    assert settings.display_theme_override("stage") == ""
    settings.set_display_theme_override("stage", "t1")
    assert settings.display_theme_override("stage") == "t1"


def test_clearing_display_override_is_unsupported(settings: AppSettings) -> None:
    """Test clearing an override raises and keeps it."""
    settings.set_display_theme_override("stage", "t1")
    with pytest.raises(UnsupportedOperation):
        settings.set_display_theme_override("stage", "")
    assert settings.display_theme_override("stage") == "t1"


def test_app_data_dir_honours_appdata(settings: AppSettings, tmp_path: Path, monkeypatch) -> None:
    """Test the data directory follows APPDATA."""
    monkeypatch.setenv("APPDATA", str(tmp_path / "appdata"))
    assert settings.app_data_dir == tmp_path / "appdata" / "themecomposer"
    assert settings.themes_dir.is_dir()
