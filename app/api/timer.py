"""Timer control channel over HTTP"""
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query

from app.dependencies import get_notification_service, get_timer_channel
from app.services.notification_service import NotificationService
from app.services.timer import TimerChannel
from app.services.timer.models import TimerState
from app.services.timer.timer_math import (
    format_countdown,
    progress_percent,
    segment_label,
    total_remaining_seconds,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/timer", tags=["timer"])


@router.post("/messages")
async def send_timer_message(
    message: Dict[str, Any] = Body(...),
    channel: TimerChannel = Depends(get_timer_channel),
):
    """
    Send one control message: START_TIMER, PAUSE_TIMER, RESUME_TIMER,
    STOP_TIMER or GET_TIMER_STATE.
    """
    return channel.dispatch(message)


@router.get("/state")
async def get_timer_state(channel: TimerChannel = Depends(get_timer_channel)):
    """State snapshot plus display helpers for the countdown view"""
    response = channel.query_state()
    response["display"] = _display(channel.scheduler.query().current_timer)
    return response


@router.get("/notifications")
async def get_notifications(
    limit: Optional[int] = Query(None, ge=0, description="Return only the latest N notifications"),
    notifications: NotificationService = Depends(get_notification_service),
):
    return [n.model_dump() for n in notifications.recent(limit)]


def _display(state: Optional[TimerState]) -> Optional[Dict[str, Any]]:
    if state is None:
        return None
    return {
        "countdown": format_countdown(state.seconds_remaining_in_phase),
        "segmentLabel": segment_label(state),
        "sessionType": "Work Time" if state.is_work_phase else "Break Time",
        "totalRemainingSeconds": total_remaining_seconds(state),
        "progressPercent": round(progress_percent(state), 2),
    }
