"""Tests for the JSON file snapshot store."""

from __future__ import annotations

from pathlib import Path

from app.services.timer import SegmentScheduler, TimerSnapshotStore, reconcile_snapshot
from app.services.timer.models import TimerConfiguration


def running_state(tmp_path: Path):
    scheduler = SegmentScheduler(snapshot_store=TimerSnapshotStore(tmp_path / "unused.json"))
    scheduler.start(TimerConfiguration(total_minutes=50, segment_minutes=20, grace_minutes=5))
    return scheduler.query().current_timer


class TestTimerSnapshotStore:
    def test_save_and_load(self, tmp_path: Path) -> None:
        store = TimerSnapshotStore(tmp_path / "nested" / "snapshot.json")
        state = running_state(tmp_path)
        store.save(state)
        raw = store.load_raw()
        assert raw is not None
        assert reconcile_snapshot(raw) == state

    def test_missing_file(self, tmp_path: Path) -> None:
        assert TimerSnapshotStore(tmp_path / "none.json").load_raw() is None

    def test_corrupt_file(self, tmp_path: Path) -> None:
        path = tmp_path / "snapshot.json"
        path.write_text("{not json", encoding="utf-8")
        assert TimerSnapshotStore(path).load_raw() is None

    def test_non_object_file(self, tmp_path: Path) -> None:
        path = tmp_path / "snapshot.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        assert TimerSnapshotStore(path).load_raw() is None

    def test_clear(self, tmp_path: Path) -> None:
        store = TimerSnapshotStore(tmp_path / "snapshot.json")
        store.save(running_state(tmp_path))
        store.clear()
        assert not store.path.exists()
        store.clear()

    def test_scheduler_restart_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "snapshot.json"
        first = SegmentScheduler(snapshot_store=TimerSnapshotStore(path))
        first.start(TimerConfiguration(total_minutes=50, segment_minutes=20, grace_minutes=5))
        for _ in range(30):
            first.tick()

        second = SegmentScheduler(snapshot_store=TimerSnapshotStore(path))
        restored = second.restore()
        assert restored is not None
        assert restored.seconds_remaining_in_phase == 1170
