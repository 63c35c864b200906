"""Pure timer arithmetic: block planning and countdown display helpers"""
from typing import NamedTuple

from .models.timer_state import (
    SECONDS_PER_MINUTE,
    TimerConfiguration,
    TimerState,
    break_follows_block,
)


class BlockPlan(NamedTuple):
    full_block_minutes: int
    block_count: int
    tail_minutes: int


def plan_blocks(config: TimerConfiguration) -> BlockPlan:
    """
    Split the total session into work+break blocks and a work-only tail.

    block_count * full_block_minutes + tail_minutes == total_minutes
    """
    full_block = config.segment_minutes + config.grace_minutes
    block_count, tail = divmod(config.total_minutes, full_block)
    return BlockPlan(full_block, block_count, tail)


def total_remaining_seconds(state: TimerState) -> int:
    """Seconds left in the whole session, counting every phase still to run"""
    remaining = state.seconds_remaining_in_phase
    n = state.block_count
    i = state.current_block_index
    segment = state.segment_minutes * SECONDS_PER_MINUTE
    grace = state.grace_minutes * SECONDS_PER_MINUTE
    tail = state.tail_minutes * SECONDS_PER_MINUTE

    if state.is_work_phase:
        if i >= n:
            # Tail segment, nothing follows
            return remaining
        if not break_follows_block(i, n, state.tail_minutes):
            return remaining
        remaining += grace

    # Blocks after the current one, then the tail
    for k in range(i + 1, n):
        remaining += segment
        if break_follows_block(k, n, state.tail_minutes):
            remaining += grace
    if n > 0:
        remaining += tail
    return remaining


def session_length_seconds(config: TimerConfiguration) -> int:
    """Scheduled length of a fresh session (the trailing break is never run)"""
    plan = plan_blocks(config)
    if plan.block_count == 0:
        return config.segment_minutes * SECONDS_PER_MINUTE
    seconds = 0
    for k in range(plan.block_count):
        seconds += config.segment_minutes * SECONDS_PER_MINUTE
        if break_follows_block(k, plan.block_count, plan.tail_minutes):
            seconds += config.grace_minutes * SECONDS_PER_MINUTE
    return seconds + plan.tail_minutes * SECONDS_PER_MINUTE


def progress_percent(state: TimerState) -> float:
    total = session_length_seconds(state.configuration)
    elapsed = total - total_remaining_seconds(state)
    return min(elapsed / total * 100, 100.0)


def format_countdown(seconds: int) -> str:
    """Format seconds as MM:SS"""
    minutes, secs = divmod(max(seconds, 0), SECONDS_PER_MINUTE)
    return f"{minutes:02d}:{secs:02d}"


def segment_label(state: TimerState) -> str:
    """Human label for the current phase, e.g. 'Segment 2 of 4'"""
    in_regular_block = state.current_block_index < state.block_count
    if state.is_work_phase:
        if in_regular_block:
            return f"Segment {state.current_block_index + 1} of {state.block_count}"
        return "Final Segment"
    if in_regular_block:
        return f"Break after Segment {state.current_block_index + 1}"
    return "Final Break"
