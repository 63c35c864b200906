"""Services module"""

from app.services.dream_analysis import DreamAnalysisService, JournalAPI, analyze_dream_with_fallback
from app.services.notification_service import NotificationService
from app.services.timer import SegmentScheduler, TimerChannel

__all__ = [
    "DreamAnalysisService",
    "JournalAPI",
    "analyze_dream_with_fallback",
    "NotificationService",
    "SegmentScheduler",
    "TimerChannel",
]
