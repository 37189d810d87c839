"""Editor session: one theme being edited plus selection, drag and save state."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Literal

from PySide6.QtCore import QObject, QThread, QTimer, Signal, Slot

from themecomposer.core.boxes import BoxManager
from themecomposer.core.constants import DEFAULT_SAVED_DISPLAY_MS
from themecomposer.core.layout import (
    BackgroundBox,
    CanvasDimensions,
    LinePosition,
    LineStyle,
    ViewerBackground,
)
from themecomposer.core.normalizer import new_theme, normalize, serialize
from themecomposer.core.reorder import DragState, LayerKind, LayerReorderEngine
from themecomposer.core.schemas import LineTypeSchema
from themecomposer.core.theme import Theme
from themecomposer.errors import (
    CapacityExceeded,
    ErrorCode,
    LoadError,
    PersistenceError,
    ReadOnlyTheme,
    ThemeComposerError,
    format_error_for_user,
)
from themecomposer.gateway import PersistenceGateway, perform_save
from themecomposer.workers.save_worker import SaveWorker

logger = logging.getLogger(__name__)

SaveStatus = Literal["idle", "saving", "saved"]
SelectionKind = Literal["none", "line", "reference", "box"]
SaveMode = Literal["sync", "async"]


@dataclass(frozen=True, slots=True)
class Selection:
    """What the operator has selected on the canvas."""

    kind: SelectionKind = "none"
    id: str = ""

    @classmethod
    def line(cls, line_type: str) -> Selection:
        return cls("line", line_type)

    @classmethod
    def reference(cls, line_type: str) -> Selection:
        return cls("reference", line_type)

    @classmethod
    def box(cls, box_id: str) -> Selection:
        return cls("box", box_id)

    @property
    def is_none(self) -> bool:
        return self.kind == "none"


NO_SELECTION = Selection()


@dataclass(frozen=True, slots=True)
class SaveTicket:
    """Snapshot handed to the gateway for one save attempt."""

    theme_id: str
    payload: dict[str, Any]
    revision: int


class EditorSession(QObject):
    """Owns one canonical theme for the lifetime of an editor.

    Every mutator applies its change and marks the session dirty. Saving
    suspends only ``save_status``; edits made while a save is in flight keep
    the session dirty after that save completes.
    """

    theme_changed = Signal()
    dirty_changed = Signal(bool)
    selection_changed = Signal(object)      # Selection
    save_status_changed = Signal(str)
    save_failed = Signal(str)               # operator-facing message
    notice = Signal(str)                    # validation rejections

    def __init__(
        self,
        schema: LineTypeSchema,
        gateway: PersistenceGateway,
        theme: Theme | None = None,
        *,
        saved_display_ms: int = DEFAULT_SAVED_DISPLAY_MS,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        if theme is not None and theme.variant != schema.variant:
            raise ValueError(f"Theme variant {theme.variant!r} does not match schema {schema.variant!r}")
        self._schema = schema
        self._gateway = gateway
        self._theme = theme if theme is not None else new_theme(schema)
        self._boxes = BoxManager(self._theme.background_boxes)
        self._reorder = LayerReorderEngine()
        self._selection = NO_SELECTION
        self._dirty = False
        self._save_status: SaveStatus = "idle"
        self._preview_text: dict[str, str] = {}
        self._revision = 0
        self._saves_in_flight = 0
        self._creates_in_flight = 0
        self._held_save: SaveMode | None = None
        self._async_saves: list[_SaveRelay] = []

        self._status_timer = QTimer(self)
        self._status_timer.setSingleShot(True)
        self._status_timer.setInterval(max(0, int(saved_display_ms)))
        self._status_timer.timeout.connect(self._on_saved_display_elapsed)

    # -- state --

    @property
    def schema(self) -> LineTypeSchema:
        return self._schema

    @property
    def theme(self) -> Theme:
        return self._theme

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def save_status(self) -> SaveStatus:
        return self._save_status

    @property
    def preview_text(self) -> dict[str, str]:
        return dict(self._preview_text)

    @property
    def drag_state(self) -> DragState | None:
        return self._reorder.state

    def can_discard(self) -> bool:
        """False while there are unsaved changes; ask the operator first."""
        return not self._dirty

    def can_save(self) -> bool:
        return not self._theme.is_built_in

    def selected_box(self) -> BackgroundBox | None:
        if self._selection.kind != "box":
            return None
        return self._theme.box(self._selection.id)

    # -- line mutators --

    def set_position(self, line_type: str, position: LinePosition) -> None:
        self._theme.set_position(line_type, position)
        self._touch()

    def set_style(self, line_type: str, style: LineStyle) -> None:
        self._theme.set_style(line_type, style)
        self._touch()

    def set_line_visible(self, line_type: str, visible: bool) -> None:
        self.set_style(line_type, self._theme.style_for(line_type).with_visibility(visible))

    def set_name(self, name: str) -> None:
        self._theme.name = name
        self._touch()

    def set_viewer_background(self, background: ViewerBackground) -> None:
        self._theme.viewer_background = background
        self._touch()

    def set_canvas_dimensions(self, dimensions: CanvasDimensions) -> None:
        self._theme.canvas_dimensions = dimensions
        self._touch()

    # -- selection and preview --

    def select(self, selection: Selection) -> None:
        self._revision += 1
        self._set_dirty(True)
        if selection == self._selection:
            return
        self._selection = selection
        self.selection_changed.emit(selection)

    def clear_selection(self) -> None:
        self.select(NO_SELECTION)

    def select_line(self, line_type: str) -> None:
        """Select a text line, tagging it as ordinary or reference."""
        if self._theme.kind_of(line_type) == "reference":
            self.select(Selection.reference(line_type))
        else:
            self.select(Selection.line(line_type))

    def set_preview_text(self, line_type: str, text: str) -> None:
        self._preview_text[line_type] = text

    def preview_text_for(self, line_type: str) -> str:
        return self._preview_text.get(line_type, "")

    # -- background boxes --

    def can_add_box(self) -> bool:
        return self._boxes.can_add()

    def add_box(self) -> BackgroundBox:
        try:
            box = self._boxes.add()
        except CapacityExceeded as exc:
            self.notice.emit(format_error_for_user(exc))
            raise
        self._touch()
        self.select(Selection.box(box.id))
        return box

    def update_box(self, box: BackgroundBox) -> None:
        self._boxes.update(box)
        self._touch()

    def delete_box(self, box_id: str) -> None:
        self._boxes.delete(box_id)
        if self._selection.kind == "box" and self._selection.id == box_id:
            self.clear_selection()
        self._touch()

    # -- layer reordering --

    def start_drag(self, kind: LayerKind, item_id: str, index: int) -> None:
        self._reorder.start_drag(kind, item_id, index)

    def drag_over(self, kind: LayerKind, index: int) -> None:
        self._reorder.drag_over(kind, index)

    def is_drop_target(self, kind: LayerKind, index: int) -> bool:
        return self._reorder.is_drop_target(kind, index)

    def drop(self, kind: LayerKind, target_index: int) -> bool:
        """Complete the active drag; return True when the layer order changed."""
        if kind == "line":
            reordered = self._reorder.drop(kind, target_index, self._theme.line_order)
            if reordered is None:
                return False
            self._theme.line_order[:] = reordered
        else:
            reordered = self._reorder.drop(kind, target_index, self._theme.background_boxes)
            if reordered is None:
                return False
            # in place: the box manager holds this list
            self._theme.background_boxes[:] = reordered
        self._touch()
        return True

    def cancel_drag(self) -> None:
        self._reorder.cancel()

    # -- saving --

    def save(self) -> bool:
        """Persist and apply synchronously; return True on success.

        While a new theme is still being created the save is held and sent
        as an update once the id is known; this call then returns False.
        """
        if self._hold_until_created("sync"):
            return False
        ticket = self.begin_save()
        try:
            saved_id = perform_save(self._gateway, ticket.theme_id, ticket.payload)
        except ThemeComposerError as exc:
            self.fail_save(ticket, exc)
            return False
        self.complete_save(ticket, saved_id)
        return True

    def save_async(self) -> SaveWorker | None:
        """Persist and apply on a worker thread; results arrive as signals.

        Returns None when the save is held behind a create in flight.
        """
        if self._hold_until_created("async"):
            return None
        ticket = self.begin_save()
        thread = QThread()
        worker = SaveWorker(self._gateway, ticket.theme_id, ticket.payload)
        relay = _SaveRelay(self, ticket, thread, worker)
        worker.moveToThread(thread)
        thread.started.connect(worker.run)
        worker.finished.connect(relay.on_finished)
        worker.failed.connect(relay.on_failed)
        worker.finished.connect(thread.quit)
        worker.failed.connect(thread.quit)
        thread.finished.connect(relay.on_thread_finished)
        self._async_saves.append(relay)
        thread.start()
        return worker

    def has_pending_saves(self) -> bool:
        return self._saves_in_flight > 0 or self._held_save is not None

    def begin_save(self) -> SaveTicket:
        """Enter ``saving`` and snapshot the write payload."""
        if self._theme.is_built_in:
            error = ReadOnlyTheme(self._theme.id)
            self.notice.emit(format_error_for_user(error))
            raise error
        self._status_timer.stop()
        self._saves_in_flight += 1
        if not self._theme.id:
            self._creates_in_flight += 1
        self._set_save_status("saving")
        return SaveTicket(
            theme_id=self._theme.id,
            payload=serialize(self._theme, self._schema, include_identity=False),
            revision=self._revision,
        )

    def complete_save(self, ticket: SaveTicket, saved_id: str) -> None:
        self._finish_ticket(ticket)
        if not self._theme.id:
            self._theme.id = saved_id
        # a create that lost the race wrote a record the session does not track
        if self._revision == ticket.revision and saved_id == self._theme.id:
            self._set_dirty(False)
        if self._release_held_save():
            return
        if self._saves_in_flight == 0:
            self._set_save_status("saved")
            self._status_timer.start()

    def fail_save(self, ticket: SaveTicket, error: ThemeComposerError) -> None:
        self._finish_ticket(ticket)
        written_id = error.details.get("theme_id") if error.code == ErrorCode.APPLY_FAILED else None
        if not self._theme.id and isinstance(written_id, str) and written_id:
            # created but not applied: retry must update, not create again
            self._theme.id = written_id
        logger.error(
            "saving %s theme %r failed (%s): %s",
            self._schema.variant, ticket.theme_id or "<new>", error.code.name, error,
        )
        if self._saves_in_flight == 0 and self._held_save is None:
            self._set_save_status("idle")
        self.save_failed.emit(format_error_for_user(error))
        self._release_held_save()

    def _finish_ticket(self, ticket: SaveTicket) -> None:
        self._saves_in_flight = max(0, self._saves_in_flight - 1)
        if not ticket.theme_id:
            self._creates_in_flight = max(0, self._creates_in_flight - 1)

    def _hold_until_created(self, mode: SaveMode) -> bool:
        if self._theme.id or self._creates_in_flight == 0:
            return False
        logger.info("holding %s theme save until its create returns", self._schema.variant)
        self._held_save = mode
        return True

    def _release_held_save(self) -> bool:
        if self._held_save is None or self._creates_in_flight > 0:
            return False
        mode = self._held_save
        self._held_save = None
        if mode == "async":
            self.save_async()
        else:
            self.save()
        return True

    def _forget_async_save(self, relay: _SaveRelay) -> None:
        if relay in self._async_saves:
            self._async_saves.remove(relay)

    def _on_saved_display_elapsed(self) -> None:
        if self._save_status == "saved":
            self._set_save_status("idle")

    # -- internals --

    def _touch(self) -> None:
        self._revision += 1
        self._set_dirty(True)
        self.theme_changed.emit()

    def _set_dirty(self, dirty: bool) -> None:
        if self._dirty == dirty:
            return
        self._dirty = dirty
        self.dirty_changed.emit(dirty)

    def _set_save_status(self, status: SaveStatus) -> None:
        if self._save_status == status:
            return
        self._save_status = status
        self.save_status_changed.emit(status)


class _SaveRelay(QObject):
    """Delivers worker results to the session on the session's thread."""

    def __init__(
        self,
        session: EditorSession,
        ticket: SaveTicket,
        thread: QThread,
        worker: SaveWorker,
    ) -> None:
        super().__init__()
        self._session = session
        self._ticket = ticket
        self._thread = thread
        self._worker = worker

    @Slot(str)
    def on_finished(self, saved_id: str) -> None:
        self._session.complete_save(self._ticket, saved_id)

    @Slot(object)
    def on_failed(self, error: object) -> None:
        if not isinstance(error, ThemeComposerError):
            error = PersistenceError(ErrorCode.PERSIST_FAILED, details={"original": repr(error)})
        self._session.fail_save(self._ticket, error)

    @Slot()
    def on_thread_finished(self) -> None:
        self._worker.deleteLater()
        self._thread.deleteLater()
        self._session._forget_async_save(self)
        self.deleteLater()


def open_session(
    schema: LineTypeSchema,
    gateway: PersistenceGateway,
    theme_id: str | None = None,
    *,
    saved_display_ms: int = DEFAULT_SAVED_DISPLAY_MS,
    parent: QObject | None = None,
) -> EditorSession:
    """Load ``theme_id`` (or start a new theme) and wrap it in a session.

    Load failures are logged and the session opens on schema defaults.
    """
    theme: Theme | None = None
    if theme_id:
        try:
            record = gateway.fetch(theme_id)
        except Exception as exc:
            error = LoadError(ErrorCode.LOAD_FAILED, details={"theme_id": theme_id, "original": str(exc)})
            logger.warning("%s (%s)", error, schema.variant)
            record = None
        if record is None:
            logger.warning("%s theme %r not found; opening defaults", schema.variant, theme_id)
        else:
            theme = normalize(schema, record)
    return EditorSession(
        schema,
        gateway,
        theme,
        saved_display_ms=saved_display_ms,
        parent=parent,
    )
