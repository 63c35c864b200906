"""Timer state models"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

SECONDS_PER_MINUTE = 60


class TimerPhase(str, Enum):
    """Phase of the running segment"""
    WORK = "work"
    BREAK = "break"


class SchedulerStatus(str, Enum):
    """Scheduler lifecycle status"""
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


def break_follows_block(block_index: int, block_count: int, tail_minutes: int) -> bool:
    """Whether the work segment of a regular block is followed by a break"""
    return block_index < block_count - 1 or (
        block_index == block_count - 1 and tail_minutes > 0
    )


class TimerConfiguration(BaseModel):
    """Session configuration in minutes. Immutable once a session starts."""
    model_config = ConfigDict(frozen=True)

    total_minutes: int = Field(gt=0, description="Total session length")
    segment_minutes: int = Field(gt=0, description="Length of one work segment")
    grace_minutes: int = Field(ge=0, description="Break after each work segment")

    @model_validator(mode="after")
    def check_segment_fits(self) -> "TimerConfiguration":
        if self.segment_minutes >= self.total_minutes:
            raise ValueError("segment_minutes must be less than total_minutes")
        return self


class TimerState(BaseModel):
    """Live session state owned by the scheduler"""
    total_minutes: int = Field(gt=0)
    segment_minutes: int = Field(gt=0)
    grace_minutes: int = Field(ge=0)
    full_block_minutes: int = Field(gt=0)
    block_count: int = Field(ge=0)
    tail_minutes: int = Field(ge=0)  # final work-only segment, no trailing break
    current_block_index: int = Field(0, ge=0)
    is_work_phase: bool = True
    seconds_remaining_in_phase: int = Field(ge=0)
    paused: bool = False
    started_at_epoch_ms: int = Field(ge=0)

    @model_validator(mode="after")
    def check_plan_consistency(self) -> "TimerState":
        # Snapshots from storage or other processes are validated against these
        if self.full_block_minutes != self.segment_minutes + self.grace_minutes:
            raise ValueError("full_block_minutes does not match segment + grace")
        if self.block_count != self.total_minutes // self.full_block_minutes:
            raise ValueError("block_count does not match the configuration")
        if self.tail_minutes != self.total_minutes % self.full_block_minutes:
            raise ValueError("tail_minutes does not match the configuration")
        if self.current_block_index > self.block_count:
            raise ValueError("current_block_index exceeds block_count")
        if not self.is_work_phase and not break_follows_block(
            self.current_block_index, self.block_count, self.tail_minutes
        ):
            raise ValueError("no break follows the current block")
        if self.seconds_remaining_in_phase > self.phase_length_seconds:
            raise ValueError("seconds_remaining_in_phase exceeds the phase length")
        return self

    @property
    def phase_length_seconds(self) -> int:
        """Full length of the current phase"""
        if not self.is_work_phase:
            minutes = self.grace_minutes
        elif self.block_count > 0 and self.current_block_index >= self.block_count:
            minutes = self.tail_minutes
        else:
            minutes = self.segment_minutes
        return minutes * SECONDS_PER_MINUTE

    @property
    def phase(self) -> TimerPhase:
        return TimerPhase.WORK if self.is_work_phase else TimerPhase.BREAK

    @property
    def configuration(self) -> TimerConfiguration:
        return TimerConfiguration(
            total_minutes=self.total_minutes,
            segment_minutes=self.segment_minutes,
            grace_minutes=self.grace_minutes,
        )


class TimerStateResponse(BaseModel):
    """Answer to a state query: the snapshot, or None when idle"""
    model_config = ConfigDict(populate_by_name=True)

    current_timer: Optional[TimerState] = Field(None, alias="currentTimer")
    is_paused: bool = Field(False, alias="isPaused")
