"""Tests for the create-or-update then apply save sequence."""

from __future__ import annotations

import pytest

from conftest import FakeGateway
from themecomposer.errors import ErrorCode, PersistenceError
from themecomposer.gateway import perform_save


def test_update_then_apply(gateway: FakeGateway) -> None:
    """Test an existing theme is updated then applied with its id."""
    saved_id = perform_save(gateway, "t1", {"name": "A"})
    assert saved_id == "t1"
    assert gateway.calls == [("update", "t1", {"name": "A"}), ("apply", {"name": "A", "id": "t1"})]


def test_create_then_apply_with_new_id(gateway: FakeGateway) -> None:
    """Test a new theme is created then applied with the returned id."""
    saved_id = perform_save(gateway, "", {"name": "B"})
    assert saved_id == "theme-1"
    assert gateway.call_names() == ["create", "apply"]
    assert gateway.calls[1][1]["id"] == "theme-1"


def test_write_failure_skips_apply(gateway: FakeGateway) -> None:
    """Test a failed write is classified and apply is skipped."""
    gateway.fail_on.add("update")
    gateway.failure = TimeoutError("timed out")
    with pytest.raises(PersistenceError) as excinfo:
        perform_save(gateway, "t1", {"name": "A"})
    assert excinfo.value.code == ErrorCode.PERSIST_TIMEOUT
    assert gateway.call_names() == ["update"]


def test_apply_failure_reports_written_id(gateway: FakeGateway) -> None:
    """Test an apply failure carries the id that was written."""
    gateway.fail_on.add("apply")
    with pytest.raises(PersistenceError) as excinfo:
        perform_save(gateway, "", {"name": "C"})
    assert excinfo.value.code == ErrorCode.APPLY_FAILED
    assert excinfo.value.details["theme_id"] == "theme-1"
    assert "theme-1" in gateway.records


def test_create_without_id_is_a_failure() -> None:
    """Test a create response without an id fails the save."""
    class NoIdGateway(FakeGateway):
        def create(self, data):
            self.calls.append(("create", dict(data)))
            return {}

    gateway = NoIdGateway()
    with pytest.raises(PersistenceError) as excinfo:
        perform_save(gateway, "", {"name": "D"})
    assert excinfo.value.code == ErrorCode.PERSIST_FAILED
    assert gateway.call_names() == ["create"]


def test_persistence_errors_pass_through(gateway: FakeGateway) -> None:
    """Test gateway PersistenceErrors are raised unchanged."""
    gateway.fail_on.add("update")
    gateway.failure = PersistenceError(ErrorCode.PERSIST_ACCESS_DENIED, message="Cannot modify built-in theme")
    with pytest.raises(PersistenceError) as excinfo:
        perform_save(gateway, "b1", {})
    assert excinfo.value.message == "Cannot modify built-in theme"
