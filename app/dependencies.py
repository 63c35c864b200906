"""Process-wide service singletons, injected into routes with Depends"""
from functools import lru_cache

from app.config import get_settings
from app.services.dream_analysis import DreamAnalysisService
from app.services.notification_service import NotificationService
from app.services.timer import SegmentScheduler, TimerChannel, TimerSnapshotStore


@lru_cache
def get_notification_service() -> NotificationService:
    return NotificationService()


@lru_cache
def get_scheduler() -> SegmentScheduler:
    settings = get_settings()
    return SegmentScheduler(
        notifications=get_notification_service(),
        snapshot_store=TimerSnapshotStore(settings.timer_snapshot_path),
    )


@lru_cache
def get_timer_channel() -> TimerChannel:
    return TimerChannel(get_scheduler())


@lru_cache
def get_dream_analysis_service() -> DreamAnalysisService:
    return DreamAnalysisService()
