"""Segment Scheduler - owns the single work/break timer session"""
import asyncio
import logging
import time
from typing import Callable, Optional, Protocol

from app.services.notification_service import NotificationService
from .models.timer_state import (
    SchedulerStatus,
    TimerConfiguration,
    TimerState,
    TimerStateResponse,
)
from .snapshot_store import InMemorySnapshotStore, reconcile_snapshot
from .timer_math import SECONDS_PER_MINUTE, break_follows_block, plan_blocks

logger = logging.getLogger(__name__)

SNAPSHOT_EVERY_SECONDS = 10


class SnapshotStore(Protocol):
    def save(self, state: TimerState) -> None: ...
    def load_raw(self) -> Optional[dict]: ...
    def clear(self) -> None: ...


class SegmentScheduler:
    """
    Single-writer state machine for the segmented timer.

    States: idle (no session), running (work or break), paused.
    Completion collapses straight back to idle after the final notification.
    All mutation happens through start/pause/resume/stop and tick; callers
    only ever receive copies of the state.
    """

    def __init__(
        self,
        notifications: Optional[NotificationService] = None,
        snapshot_store: Optional[SnapshotStore] = None,
        clock: Callable[[], float] = time.time,
        tick_interval: float = 1.0,
    ):
        self.notifications = notifications or NotificationService()
        self.snapshot_store = snapshot_store or InMemorySnapshotStore()
        self.tick_interval = tick_interval
        self._clock = clock
        self._state: Optional[TimerState] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def status(self) -> SchedulerStatus:
        if self._state is None:
            return SchedulerStatus.IDLE
        if self._state.paused:
            return SchedulerStatus.PAUSED
        return SchedulerStatus.RUNNING

    # ---- Commands ----

    def start(self, config: TimerConfiguration) -> TimerState:
        """Start a new session, replacing any session already running"""
        plan = plan_blocks(config)
        if self._state is not None:
            logger.info("Replacing running timer session")

        self._state = TimerState(
            total_minutes=config.total_minutes,
            segment_minutes=config.segment_minutes,
            grace_minutes=config.grace_minutes,
            full_block_minutes=plan.full_block_minutes,
            block_count=plan.block_count,
            tail_minutes=plan.tail_minutes,
            current_block_index=0,
            is_work_phase=True,
            seconds_remaining_in_phase=config.segment_minutes * SECONDS_PER_MINUTE,
            paused=False,
            started_at_epoch_ms=int(self._clock() * 1000),
        )
        self._persist()

        self.notifications.notify(
            "Session Started",
            f"Total {config.total_minutes} mins | {config.segment_minutes}-min sets + "
            f"{config.grace_minutes}-min breaks | {plan.block_count} segments",
        )
        logger.info(
            f"Timer started: total={config.total_minutes}m segment={config.segment_minutes}m "
            f"grace={config.grace_minutes}m blocks={plan.block_count} tail={plan.tail_minutes}m"
        )
        return self._state.model_copy(deep=True)

    def pause(self) -> bool:
        if self._state is None:
            return True
        self._state.paused = True
        self._persist()
        logger.info("Timer paused")
        return True

    def resume(self) -> bool:
        if self._state is None:
            return True
        self._state.paused = False
        self._persist()
        logger.info("Timer resumed")
        return True

    def stop(self) -> bool:
        if self._state is None:
            return True
        self._discard()
        logger.info("Timer stopped")
        return True

    def query(self) -> TimerStateResponse:
        if self._state is None:
            return TimerStateResponse(current_timer=None, is_paused=False)
        return TimerStateResponse(
            current_timer=self._state.model_copy(deep=True),
            is_paused=self._state.paused,
        )

    # ---- Tick ----

    def tick(self) -> None:
        """Advance the running session by one second"""
        state = self._state
        if state is None or state.paused:
            return

        state.seconds_remaining_in_phase -= 1
        if state.seconds_remaining_in_phase <= 0:
            self._finish_phase(state)
            if self._state is not None:
                self._persist()
            return

        if state.seconds_remaining_in_phase % SNAPSHOT_EVERY_SECONDS == 0:
            self._persist()

    def _finish_phase(self, state: TimerState) -> None:
        # Loops only to cross a zero-length break within the same tick
        while True:
            if state.is_work_phase:
                if not break_follows_block(
                    state.current_block_index, state.block_count, state.tail_minutes
                ):
                    self._complete()
                    return
                state.is_work_phase = False
                state.seconds_remaining_in_phase = state.grace_minutes * SECONDS_PER_MINUTE
                if state.seconds_remaining_in_phase > 0:
                    self.notifications.notify(
                        "Break Time 🕒", f"Take {state.grace_minutes} minutes to reset."
                    )
                    return
                continue

            state.current_block_index += 1
            state.is_work_phase = True
            if state.current_block_index >= state.block_count:
                if state.tail_minutes > 0:
                    state.seconds_remaining_in_phase = state.tail_minutes * SECONDS_PER_MINUTE
                    self.notifications.notify(
                        "Final Segment", f"Go for {state.tail_minutes} minutes!"
                    )
                    return
                self._complete()
                return

            state.seconds_remaining_in_phase = state.segment_minutes * SECONDS_PER_MINUTE
            self.notifications.notify(
                f"Segment {state.current_block_index + 1} of {state.block_count}",
                f"Go for {state.segment_minutes} minutes!",
            )
            return

    def _complete(self) -> None:
        self.notifications.notify("Session Complete 🏁", "All segments done! Great work!")
        self._discard()
        logger.info("Timer session complete")

    def _discard(self) -> None:
        self._state = None
        self._clear_snapshot()

    def _clear_snapshot(self) -> None:
        try:
            self.snapshot_store.clear()
        except OSError as e:
            logger.error(f"Failed to clear timer snapshot: {e}")

    def _persist(self) -> None:
        if self._state is None:
            return
        try:
            self.snapshot_store.save(self._state)
        except OSError as e:
            # The live session stays authoritative; the next save retries
            logger.error(f"Failed to persist timer snapshot: {e}")

    # ---- Recovery and loop ----

    def restore(self) -> Optional[TimerState]:
        """Resume a session from the stored snapshot, if one is valid"""
        state = reconcile_snapshot(self.snapshot_store.load_raw())
        if state is None:
            self._clear_snapshot()
            return None
        self._state = state
        logger.info(
            f"Restored timer session: block {state.current_block_index}/{state.block_count}, "
            f"{state.seconds_remaining_in_phase}s left in {state.phase.value} phase"
        )
        return state.model_copy(deep=True)

    async def run(self) -> None:
        """Tick once per interval until cancelled"""
        logger.info("Timer tick loop started")
        try:
            while True:
                await asyncio.sleep(self.tick_interval)
                try:
                    self.tick()
                except Exception as e:
                    logger.error(f"Error in timer tick: {e}")
        finally:
            logger.info("Timer tick loop stopped")

    def start_loop(self) -> asyncio.Task:
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.run())
        return self._task

    async def shutdown(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
