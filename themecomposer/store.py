"""JSON-file theme storage implementing the persistence gateway."""

from __future__ import annotations

import json
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

from PySide6.QtCore import QObject, Signal

from themecomposer.errors import ErrorCode, LoadError, PersistenceError

logger = logging.getLogger(__name__)

EXPORT_FORMAT_VERSION = 1
ACTIVE_FILE_NAME = "active.json"

_MAX_THEME_BYTES = 256 * 1024
_MAX_IMPORT_BYTES = 8 * 1024 * 1024
_MAX_THEME_FILES = 512
_SERVER_OWNED_KEYS = ("id", "isBuiltIn", "isDefault", "createdAt", "updatedAt")
_EXPORT_DROPPED_KEYS = ("isBuiltIn", "isDefault", "createdAt", "updatedAt")


@dataclass(frozen=True, slots=True)
class ThemeSummary:
    """Display-ready theme metadata for pickers."""

    theme_id: str
    name: str
    is_builtin: bool
    path: Path


@dataclass
class ImportResult:
    imported: int = 0
    skipped: int = 0
    errors: int = 0
    messages: list[str] = field(default_factory=list)


class FileThemeStore(QObject):
    """Stores one variant's themes as JSON files.

    Built-in themes are read from ``builtin_root/<variant>`` and can never be
    written; user themes live in ``user_root/<variant>/<id>.json``.
    """

    theme_applied = Signal(str, object)     # variant, record with id

    def __init__(
        self,
        variant: str,
        builtin_root: Path,
        user_root: Path,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._variant = variant
        self._builtin_dir = Path(builtin_root) / variant
        self._user_dir = Path(user_root) / variant

    @property
    def variant(self) -> str:
        return self._variant

    @property
    def user_dir(self) -> Path:
        return self._user_dir

    # -- gateway --

    def fetch(self, theme_id: str) -> dict[str, Any] | None:
        user_path = self._user_path(theme_id)
        if user_path.exists():
            return self._read_record(user_path, is_builtin=False)
        for path, record in self._iter_builtin():
            if record.get("id") == theme_id:
                return record
        return None

    def create(self, data: Mapping[str, Any]) -> dict[str, str]:
        theme_id = str(uuid.uuid4())
        now = _now()
        record = {**_strip_server_keys(data), "id": theme_id, "createdAt": now, "updatedAt": now}
        self._write_record(self._user_path(theme_id), record)
        logger.info("created %s theme %s", self._variant, theme_id)
        return {"id": theme_id}

    def update(self, theme_id: str, data: Mapping[str, Any]) -> None:
        path = self._writable_path(theme_id)
        existing = self._read_record(path, is_builtin=False)
        record = {
            **existing,
            **_strip_server_keys(data),
            "id": theme_id,
            "updatedAt": _now(),
        }
        record.pop("isBuiltIn", None)
        self._write_record(path, record)

    def apply(self, data: Mapping[str, Any]) -> None:
        theme_id = data.get("id")
        if not isinstance(theme_id, str) or not theme_id:
            raise PersistenceError(ErrorCode.APPLY_FAILED, message="Cannot apply a theme without an id.")
        self._write_record(
            self._user_dir / ACTIVE_FILE_NAME,
            {"themeId": theme_id, "appliedAt": _now()},
        )
        self.theme_applied.emit(self._variant, dict(data))

    # -- management --

    def delete(self, theme_id: str) -> None:
        path = self._writable_path(theme_id)
        try:
            path.unlink()
        except OSError as exc:
            raise PersistenceError(ErrorCode.PERSIST_FAILED, details={"original": str(exc)}) from exc
        if self.active_theme_id() == theme_id:
            (self._user_dir / ACTIVE_FILE_NAME).unlink(missing_ok=True)

    def active_theme_id(self) -> str | None:
        path = self._user_dir / ACTIVE_FILE_NAME
        if not path.exists():
            return None
        try:
            data = _load_json(path, max_bytes=_MAX_THEME_BYTES)
        except LoadError as exc:
            logger.warning("%s", exc)
            return None
        value = data.get("themeId")
        return value if isinstance(value, str) and value else None

    def list_themes(self) -> list[ThemeSummary]:
        rows: list[ThemeSummary] = []
        for path, record in self._iter_builtin():
            rows.append(_summary(record, path, is_builtin=True))
        for path in self._candidate_files(self._user_dir):
            try:
                record = self._read_record(path, is_builtin=False)
            except LoadError as exc:
                logger.warning("%s", exc)
                continue
            rows.append(_summary(record, path, is_builtin=False))
        return sorted(rows, key=lambda row: (0 if row.is_builtin else 1, row.name.lower()))

    def export_themes(self) -> str:
        """Serialize all user themes (never built-ins) into an export bundle."""
        themes = []
        for summary in self.list_themes():
            if summary.is_builtin:
                continue
            record = self._read_record(summary.path, is_builtin=False)
            themes.append({key: value for key, value in record.items() if key not in _EXPORT_DROPPED_KEYS})
        bundle = {
            "version": EXPORT_FORMAT_VERSION,
            "variant": self._variant,
            "exportedAt": _now(),
            "themes": themes,
        }
        return json.dumps(bundle, indent=2)

    def import_themes(self, text: str) -> ImportResult:
        """Create every theme in an export bundle as a new user theme."""
        result = ImportResult()
        if len(text.encode("utf-8")) > _MAX_IMPORT_BYTES:
            raise LoadError(ErrorCode.RECORD_MALFORMED, message="Import file is too large.")
        try:
            bundle = json.loads(text)
        except json.JSONDecodeError as exc:
            raise LoadError(ErrorCode.RECORD_MALFORMED, message=f"Invalid theme export: {exc}") from exc
        if not isinstance(bundle, dict) or not isinstance(bundle.get("themes"), list):
            raise LoadError(ErrorCode.RECORD_MALFORMED, message="Theme export has no themes list.")
        version = bundle.get("version")
        if version != EXPORT_FORMAT_VERSION:
            raise LoadError(
                ErrorCode.RECORD_MALFORMED,
                message=f"Unsupported theme export version {version!r}.",
            )
        variant = bundle.get("variant")
        if variant is not None and variant != self._variant:
            raise LoadError(
                ErrorCode.RECORD_MALFORMED,
                message=f"Export holds {variant!r} themes, not {self._variant!r}.",
            )

        for index, entry in enumerate(bundle["themes"]):
            if not isinstance(entry, dict):
                result.errors += 1
                result.messages.append(f"entry {index}: not an object")
                continue
            name = entry.get("name")
            if not isinstance(name, str) or not name.strip():
                result.skipped += 1
                result.messages.append(f"entry {index}: missing name")
                continue
            try:
                self.create(entry)
            except PersistenceError as exc:
                result.errors += 1
                result.messages.append(f"entry {index}: {exc}")
                continue
            result.imported += 1
        logger.info(
            "imported %s themes: %d imported, %d skipped, %d errors",
            self._variant, result.imported, result.skipped, result.errors,
        )
        return result

    # -- internals --

    def _user_path(self, theme_id: str) -> Path:
        if not theme_id or "/" in theme_id or "\\" in theme_id or theme_id.startswith("."):
            raise PersistenceError(ErrorCode.PERSIST_NOT_FOUND, details={"theme_id": theme_id})
        return self._user_dir / f"{theme_id}.json"

    def _writable_path(self, theme_id: str) -> Path:
        if any(record.get("id") == theme_id for _, record in self._iter_builtin()):
            raise PersistenceError(
                ErrorCode.PERSIST_ACCESS_DENIED,
                message="Cannot modify built-in theme",
                details={"theme_id": theme_id},
            )
        path = self._user_path(theme_id)
        if not path.exists():
            raise PersistenceError(ErrorCode.PERSIST_NOT_FOUND, details={"theme_id": theme_id})
        return path

    def _iter_builtin(self):
        for path in self._candidate_files(self._builtin_dir):
            try:
                yield path, self._read_record(path, is_builtin=True)
            except LoadError as exc:
                logger.warning("%s", exc)

    def _candidate_files(self, root: Path) -> list[Path]:
        if not root.exists():
            return []
        try:
            files = sorted(
                path for path in root.iterdir()
                if path.suffix == ".json" and path.name != ACTIVE_FILE_NAME
            )
        except OSError as exc:
            logger.warning("failed to list themes in %s: %s", root, exc)
            return []
        candidates = []
        for path in files:
            if path.is_symlink():
                logger.warning("skipping symlink theme file: %s", path)
                continue
            candidates.append(path)
        if len(candidates) > _MAX_THEME_FILES:
            logger.warning(
                "theme file limit exceeded in %s; only first %d files were read",
                root, _MAX_THEME_FILES,
            )
            candidates = candidates[:_MAX_THEME_FILES]
        return candidates

    def _read_record(self, path: Path, *, is_builtin: bool) -> dict[str, Any]:
        if path.is_symlink():
            raise LoadError(ErrorCode.LOAD_FAILED, message=f"Theme file cannot be a symlink: {path}")
        record = _load_json(path, max_bytes=_MAX_THEME_BYTES)
        record.setdefault("id", path.stem)
        record["isBuiltIn"] = is_builtin
        return record

    def _write_record(self, path: Path, record: Mapping[str, Any]) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = path.with_suffix(".json.tmp")
            tmp_path.write_text(json.dumps(record, indent=2), encoding="utf-8")
            tmp_path.replace(path)
        except OSError as exc:
            raise PersistenceError(
                ErrorCode.PERSIST_FAILED,
                details={"path": str(path), "original": str(exc)},
            ) from exc


def _load_json(path: Path, *, max_bytes: int) -> dict[str, Any]:
    try:
        size = path.stat().st_size
    except OSError as exc:
        raise LoadError(ErrorCode.LOAD_FAILED, message=f"Unable to stat {path}: {exc}") from exc
    if size > max_bytes:
        raise LoadError(ErrorCode.RECORD_MALFORMED, message=f"{path}: file exceeds max size ({max_bytes} bytes)")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadError(ErrorCode.LOAD_FAILED, message=f"Unable to read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise LoadError(ErrorCode.RECORD_MALFORMED, message=f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise LoadError(ErrorCode.RECORD_MALFORMED, message=f"Expected JSON object in {path}")
    return data


def _strip_server_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if key not in _SERVER_OWNED_KEYS}


def _summary(record: Mapping[str, Any], path: Path, *, is_builtin: bool) -> ThemeSummary:
    name = record.get("name")
    return ThemeSummary(
        theme_id=str(record.get("id") or path.stem),
        name=name if isinstance(name, str) and name else path.stem,
        is_builtin=is_builtin,
        path=path,
    )


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()
