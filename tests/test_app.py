"""Tests for editor bootstrap wiring."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from PySide6.QtCore import QSettings

from themecomposer.app import configure_logging, open_editor
from themecomposer.config.settings import AppSettings


@pytest.fixture
def settings(tmp_path: Path, monkeypatch) -> AppSettings:
    monkeypatch.setenv("APPDATA", str(tmp_path / "appdata"))
    qs = QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)
    yield AppSettings(qs)
    logger = logging.getLogger("themecomposer")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True


def test_configure_logging_is_idempotent(settings: AppSettings) -> None:
    """Test repeated logging setup adds one handler."""
    logger = configure_logging(settings)
    configure_logging(settings)
    assert len(logger.handlers) == 1
    assert (settings.app_data_dir / "logs").is_dir()


@pytest.mark.usefixtures("qapp")
def test_open_editor_remembers_saved_theme(settings: AppSettings) -> None:
    """Test a saved theme is reopened on the next start."""
    session = open_editor("two-line", settings=settings)
    assert session.theme.name == "New Theme"
    session.set_name("Mine")
    assert session.save() is True
    assert settings.last_theme_id("two-line") == session.theme.id

    reopened = open_editor("two-line", settings=settings)
    assert reopened.theme.id == session.theme.id
    assert reopened.theme.name == "Mine"


@pytest.mark.usefixtures("qapp")
def test_open_editor_on_builtin_theme(settings: AppSettings) -> None:
    """Test opening a shipped built-in theme."""
    session = open_editor("songs", "00000000-0000-0000-0000-000000000001", settings=settings)
    assert session.theme.is_built_in is True
    assert session.theme.name
