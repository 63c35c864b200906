"""Timer control channel - message contract between UI surfaces and the scheduler"""
import logging
from typing import Annotated, Any, Dict, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from .models.timer_state import TimerConfiguration
from .segment_scheduler import SegmentScheduler
from .snapshot_store import reconcile_snapshot

logger = logging.getLogger(__name__)

__all__ = [
    "TimerChannel",
    "TimerMessage",
    "StartTimerMessage",
    "reconcile_snapshot",
]


class StartTimerMessage(BaseModel):
    type: Literal["START_TIMER"]
    total: int
    segment: int
    grace: int


class PauseTimerMessage(BaseModel):
    type: Literal["PAUSE_TIMER"]


class ResumeTimerMessage(BaseModel):
    type: Literal["RESUME_TIMER"]


class StopTimerMessage(BaseModel):
    type: Literal["STOP_TIMER"]


class GetTimerStateMessage(BaseModel):
    type: Literal["GET_TIMER_STATE"]


TimerMessage = Annotated[
    Union[
        StartTimerMessage,
        PauseTimerMessage,
        ResumeTimerMessage,
        StopTimerMessage,
        GetTimerStateMessage,
    ],
    Field(discriminator="type"),
]

_message_adapter = TypeAdapter(TimerMessage)


class TimerChannel:
    """
    Dispatches control messages to the scheduler.

    Every command is acknowledged with {"success": bool}; GET_TIMER_STATE
    answers with {"currentTimer": ..., "isPaused": ...}. Any number of
    observers can share one channel and see the same state.
    """

    def __init__(self, scheduler: SegmentScheduler):
        self.scheduler = scheduler

    def dispatch(self, message: Dict[str, Any]) -> Dict[str, Any]:
        try:
            parsed = _message_adapter.validate_python(message)
        except ValidationError as e:
            message_type = message.get("type") if isinstance(message, dict) else None
            logger.warning(f"Rejected timer message {message_type!r}: {e.error_count()} error(s)")
            return {"success": False, "error": "Invalid timer message"}

        if isinstance(parsed, StartTimerMessage):
            return self._start(parsed)
        if isinstance(parsed, PauseTimerMessage):
            return {"success": self.scheduler.pause()}
        if isinstance(parsed, ResumeTimerMessage):
            return {"success": self.scheduler.resume()}
        if isinstance(parsed, StopTimerMessage):
            return {"success": self.scheduler.stop()}
        return self.query_state()

    def query_state(self) -> Dict[str, Any]:
        return self.scheduler.query().model_dump(mode="json", by_alias=True)

    def _start(self, message: StartTimerMessage) -> Dict[str, Any]:
        try:
            config = TimerConfiguration(
                total_minutes=message.total,
                segment_minutes=message.segment,
                grace_minutes=message.grace,
            )
        except ValidationError as e:
            # Rejected before the scheduler is touched
            logger.warning(f"Invalid timer configuration: {e.error_count()} error(s)")
            return {"success": False, "error": _describe_config_error(e)}

        self.scheduler.start(config)
        return {"success": True}


def _describe_config_error(error: ValidationError) -> str:
    details = []
    for err in error.errors():
        field = ".".join(str(part) for part in err["loc"]) or "configuration"
        details.append(f"{field}: {err['msg']}")
    return "Invalid timer configuration: " + ", ".join(details)
