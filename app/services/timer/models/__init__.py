from .timer_state import (
    SchedulerStatus,
    TimerConfiguration,
    TimerPhase,
    TimerState,
    TimerStateResponse,
)

__all__ = [
    "SchedulerStatus",
    "TimerConfiguration",
    "TimerPhase",
    "TimerState",
    "TimerStateResponse",
]
