"""Background theme save."""

from __future__ import annotations

from typing import Any, Mapping

from PySide6.QtCore import QObject, Signal

from themecomposer.errors import ThemeComposerError, classify_exception
from themecomposer.gateway import PersistenceGateway, perform_save


class SaveWorker(QObject):
    """Runs create-or-update then apply off the GUI thread.

    Usage:
        worker = SaveWorker(gateway, theme_id, payload)
        thread = QThread()
        worker.moveToThread(thread)
        thread.started.connect(worker.run)
        worker.finished.connect(thread.quit)
        worker.failed.connect(thread.quit)
        thread.finished.connect(worker.deleteLater)
        thread.finished.connect(thread.deleteLater)
        thread.start()
    """

    started = Signal()
    finished = Signal(str)      # persisted theme id
    failed = Signal(object)     # ThemeComposerError

    def __init__(
        self,
        gateway: PersistenceGateway,
        theme_id: str,
        payload: Mapping[str, Any],
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._gateway = gateway
        self._theme_id = theme_id
        self._payload = dict(payload)

    def run(self) -> None:
        self.started.emit()
        try:
            saved_id = perform_save(self._gateway, self._theme_id, self._payload)
        except ThemeComposerError as exc:
            self.failed.emit(exc)
        except Exception as exc:
            self.failed.emit(classify_exception(exc))
        else:
            self.finished.emit(saved_id)
