"""Application settings via QSettings."""

from __future__ import annotations

import os
from pathlib import Path

from PySide6.QtCore import QSettings

from themecomposer.core.constants import DEFAULT_SAVED_DISPLAY_MS
from themecomposer.errors import UnsupportedOperation


class AppSettings:
    """Wraps QSettings for persistent editor configuration."""

    def __init__(self, qsettings: QSettings | None = None) -> None:
        self._qs = qsettings if qsettings is not None else QSettings("ThemeComposer", "ThemeComposer")

    # -- editor --

    @property
    def saved_display_ms(self) -> int:
        raw = self._qs.value("editor/saved_display_ms", DEFAULT_SAVED_DISPLAY_MS, type=int)
        return max(0, int(raw))

    @saved_display_ms.setter
    def saved_display_ms(self, value: int) -> None:
        self._qs.setValue("editor/saved_display_ms", max(0, int(value)))

    def last_theme_id(self, variant: str) -> str:
        raw = self._qs.value(f"editor/last_theme_id/{variant}", "", type=str)
        return (raw or "").strip()

    def set_last_theme_id(self, variant: str, theme_id: str) -> None:
        self._qs.setValue(f"editor/last_theme_id/{variant}", (theme_id or "").strip())

    # -- per-display theme overrides --

    def display_theme_override(self, display_id: str) -> str:
        """Theme id forced onto one display; empty means it follows the global theme."""
        raw = self._qs.value(f"display/theme_override/{display_id}", "", type=str)
        return (raw or "").strip()

    def set_display_theme_override(self, display_id: str, theme_id: str) -> None:
        cleaned = (theme_id or "").strip()
        if not cleaned:
            # Reverting a display to the global theme has no defined behavior yet.
            raise UnsupportedOperation(
                f"Clearing the theme override of display {display_id!r} is not supported."
            )
        self._qs.setValue(f"display/theme_override/{display_id}", cleaned)

    # -- helpers --

    def sync(self) -> None:
        self._qs.sync()

    @property
    def app_data_dir(self) -> Path:
        path = self._app_data_dir()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def themes_dir(self) -> Path:
        path = self.app_data_dir / "themes"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @staticmethod
    def _app_data_dir() -> Path:
        base = Path(os.environ.get("APPDATA", Path.home() / ".config"))
        return base / "themecomposer"
