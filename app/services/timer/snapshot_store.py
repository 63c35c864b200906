"""Snapshot persistence for the running timer session"""
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from .models.timer_state import TimerState

logger = logging.getLogger(__name__)


def reconcile_snapshot(raw: Any) -> Optional[TimerState]:
    """
    Turn an untrusted snapshot into a TimerState.

    Absent snapshots and snapshots violating the structural invariants
    (negative numbers, block index past block_count, plan fields that do
    not match the configuration) are treated as no session.
    """
    if raw is None:
        return None
    if isinstance(raw, TimerState):
        raw = raw.model_dump()
    if not isinstance(raw, dict):
        return None
    try:
        return TimerState.model_validate(raw)
    except ValidationError as e:
        logger.warning(f"Discarding invalid timer snapshot: {e.error_count()} error(s)")
        return None


class TimerSnapshotStore:
    """
    Stores the latest TimerState as a JSON file.

    Last write wins; there is a single writer (the scheduler).
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def save(self, state: TimerState) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(state.model_dump_json(), encoding="utf-8")
        os.replace(tmp_path, self.path)

    def load_raw(self) -> Optional[Dict[str, Any]]:
        """
        Read the stored snapshot without validating it.

        Returns:
            The decoded JSON object, or None if nothing usable is stored
        """
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Unreadable timer snapshot at {self.path}: {e}")
            return None
        if not isinstance(data, dict):
            logger.warning(f"Timer snapshot at {self.path} is not an object")
            return None
        return data

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class InMemorySnapshotStore:
    """Snapshot store kept in process memory (tests, ephemeral runs)"""

    def __init__(self):
        self._data: Optional[Dict[str, Any]] = None
        self.save_count = 0

    def save(self, state: TimerState) -> None:
        self._data = state.model_dump(mode="json")
        self.save_count += 1

    def load_raw(self) -> Optional[Dict[str, Any]]:
        return dict(self._data) if self._data is not None else None

    def clear(self) -> None:
        self._data = None
