"""Tests for the background save worker."""

from __future__ import annotations

from conftest import FakeGateway
from themecomposer.errors import ErrorCode, PersistenceError
from themecomposer.workers.save_worker import SaveWorker


class TestSaveWorker:
    """Tests for SaveWorker signals and payload handling."""
    def test_signals_exist(self) -> None:
        """Test the worker exposes its signals."""
        worker = SaveWorker(FakeGateway(), "", {})
        assert hasattr(worker, "started")
        assert hasattr(worker, "finished")
        assert hasattr(worker, "failed")

    def test_run_emits_saved_id(self) -> None:
        """Test a successful run emits the saved id."""
        gateway = FakeGateway()
        worker = SaveWorker(gateway, "", {"name": "A"})
        started: list[None] = []
        finished: list[str] = []
        worker.started.connect(lambda: started.append(None))
        worker.finished.connect(finished.append)

        worker.run()

        assert started == [None]
        assert finished == ["theme-1"]
        assert gateway.call_names() == ["create", "apply"]

    def test_run_emits_classified_failure(self) -> None:
        """Test a failed run emits a classified error."""
        gateway = FakeGateway()
        gateway.fail_on.add("update")
        worker = SaveWorker(gateway, "t1", {"name": "A"})
        failures: list[object] = []
        worker.failed.connect(failures.append)

        worker.run()

        assert len(failures) == 1
        assert isinstance(failures[0], PersistenceError)
        assert failures[0].code == ErrorCode.PERSIST_UNAVAILABLE

    def test_payload_is_snapshotted(self) -> None:
        """Test later changes to the payload do not reach the gateway."""
        gateway = FakeGateway()
        payload = {"name": "Before"}
        worker = SaveWorker(gateway, "t1", payload)
        payload["name"] = "After"
        worker.run()
        assert gateway.calls[0][2]["name"] == "Before"
