"""Shared fixtures for themecomposer tests."""

from __future__ import annotations

from typing import Any, Mapping

import pytest
from PySide6.QtCore import QCoreApplication, QEventLoop, QTimer


@pytest.fixture(scope="session")
def qapp():
    """Core application so timers and queued signals can run."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


def wait_ms(ms: int) -> None:
    """Spin the event loop for ``ms`` milliseconds."""
    loop = QEventLoop()
    QTimer.singleShot(ms, loop.quit)
    loop.exec()


class FakeGateway:
    """In-memory gateway recording every call in order."""

    def __init__(self) -> None:
        self.records: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple[str, Any]] = []
        self.fail_on: set[str] = set()
        self.failure: Exception = ConnectionError("connection refused")
        self._next_id = 1

    def fetch(self, theme_id: str) -> Mapping[str, Any] | None:
        self.calls.append(("fetch", theme_id))
        if "fetch" in self.fail_on:
            raise self.failure
        record = self.records.get(theme_id)
        return dict(record) if record is not None else None

    def create(self, data: Mapping[str, Any]) -> Mapping[str, Any]:
        self.calls.append(("create", dict(data)))
        if "create" in self.fail_on:
            raise self.failure
        theme_id = f"theme-{self._next_id}"
        self._next_id += 1
        self.records[theme_id] = {**data, "id": theme_id, "isBuiltIn": False}
        return {"id": theme_id}

    def update(self, theme_id: str, data: Mapping[str, Any]) -> None:
        self.calls.append(("update", theme_id, dict(data)))
        if "update" in self.fail_on:
            raise self.failure
        self.records[theme_id] = {**self.records.get(theme_id, {}), **data, "id": theme_id}

    def apply(self, data: Mapping[str, Any]) -> None:
        self.calls.append(("apply", dict(data)))
        if "apply" in self.fail_on:
            raise self.failure

    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def gateway() -> FakeGateway:
    """Fresh in-memory gateway."""
    return FakeGateway()


def wait_until(predicate, timeout_ms: int = 2000) -> bool:
    """Spin the event loop until ``predicate()`` holds or the timeout passes."""
    waited = 0
    while not predicate():
        if waited >= timeout_ms:
            return False
        wait_ms(10)
        waited += 10
    return True
