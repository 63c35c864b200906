from .segment_scheduler import SegmentScheduler
from .snapshot_store import InMemorySnapshotStore, TimerSnapshotStore, reconcile_snapshot
from .timer_channel import TimerChannel

__all__ = [
    "SegmentScheduler",
    "InMemorySnapshotStore",
    "TimerSnapshotStore",
    "TimerChannel",
    "reconcile_snapshot",
]
