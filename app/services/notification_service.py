"""
Notification Service

Collects timer notifications (session start, phase changes, completion)
so UI surfaces can display them. Delivery is fire-and-forget.
"""
import logging
import time
from collections import deque
from typing import Callable, Deque, List, Optional

from app.models.notification import Notification

logger = logging.getLogger(__name__)

MAX_RECENT_NOTIFICATIONS = 50


class NotificationService:
    """Keeps a bounded history of notifications and fans them out to listeners"""

    def __init__(self, max_recent: int = MAX_RECENT_NOTIFICATIONS):
        self._recent: Deque[Notification] = deque(maxlen=max_recent)
        self._listeners: List[Callable[[Notification], None]] = []

    def subscribe(self, listener: Callable[[Notification], None]) -> None:
        self._listeners.append(listener)

    def notify(self, title: str, message: str) -> Notification:
        notification = Notification(
            title=title,
            message=message,
            created_at_ms=int(time.time() * 1000),
        )
        self._recent.append(notification)
        logger.info(f"Notification: {title} - {message}")

        for listener in self._listeners:
            try:
                listener(notification)
            except Exception as e:
                # A broken listener must not stop the timer
                logger.error(f"Notification listener failed: {e}")
        return notification

    def recent(self, limit: Optional[int] = None) -> List[Notification]:
        """Most recent notifications, oldest first"""
        items = list(self._recent)
        if limit is not None:
            items = items[-limit:] if limit > 0 else []
        return items
