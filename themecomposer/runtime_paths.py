"""Runtime path helpers for source and frozen executable modes."""

from __future__ import annotations

from pathlib import Path
import sys


def is_frozen() -> bool:
    """Return True when running from a PyInstaller bundle."""
    return bool(getattr(sys, "frozen", False))


def package_root() -> Path:
    """Return the directory holding the `themecomposer` package resources."""
    if is_frozen():
        meipass = getattr(sys, "_MEIPASS", None)
        if meipass:
            candidate = Path(meipass) / "themecomposer"
            return candidate if candidate.exists() else Path(meipass)
    return Path(__file__).resolve().parent


def builtin_themes_root() -> Path:
    """Resolve the shipped theme directory; one subdirectory per variant."""
    return package_root() / "themes" / "builtin"
