"""Editor bootstrap: logging, storage and session wiring."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from PySide6.QtCore import QObject

from themecomposer.config.settings import AppSettings
from themecomposer.core.schemas import get_schema
from themecomposer.runtime_paths import builtin_themes_root, is_frozen, package_root
from themecomposer.session import EditorSession, open_session
from themecomposer.store import FileThemeStore


def configure_logging(settings: AppSettings) -> logging.Logger:
    """Attach a rotating file handler to the package logger once."""
    logger = logging.getLogger("themecomposer")
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    log_dir = settings.app_data_dir / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / "themecomposer.log",
        maxBytes=512_000,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def open_editor(
    variant: str,
    theme_id: str | None = None,
    *,
    settings: AppSettings | None = None,
    parent: QObject | None = None,
) -> EditorSession:
    """Open an editor session for ``variant`` on the file-backed store.

    With no ``theme_id`` the last theme edited for the variant is reopened,
    or a new theme is started.
    """
    settings = settings or AppSettings()
    logger = configure_logging(settings)
    schema = get_schema(variant)

    builtin_root = builtin_themes_root()
    if not builtin_root.exists():
        logger.warning("builtin theme root missing at %s", builtin_root)
    logger.info("open editor variant=%s frozen=%s package_root=%s", variant, is_frozen(), package_root())

    store = FileThemeStore(variant, builtin_root=builtin_root, user_root=settings.themes_dir, parent=parent)
    requested = theme_id if theme_id is not None else settings.last_theme_id(variant)
    session = open_session(
        schema,
        store,
        requested or None,
        saved_display_ms=settings.saved_display_ms,
        parent=parent,
    )

    def remember_saved_theme(status: str) -> None:
        if status == "saved" and session.theme.id:
            settings.set_last_theme_id(variant, session.theme.id)

    session.save_status_changed.connect(remember_saved_theme)
    return session
