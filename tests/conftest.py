"""Shared fixtures."""

from __future__ import annotations

import json
from typing import Any

import pytest
from langchain_core.messages import AIMessage

from app.services.dream_analysis import DreamAnalysisService, SlidingWindowRateLimiter
from app.services.notification_service import NotificationService
from app.services.timer import InMemorySnapshotStore, SegmentScheduler, TimerChannel

VALID_ANALYSIS = {
    "emotions": ["fear", "anxiety"],
    "themes": ["chase"],
    "interpretation": "Being chased suggests avoidance of a waking-life problem.",
    "symbols": ["door", "forest"],
    "confidence": 0.82,
}

DREAM_TEXT = "I was running through a dark forest and something was chasing me."


class FakeClock:
    """Manually advanced clock returning seconds."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeLLM:
    """Returns canned replies in order and records every call."""

    def __init__(self, *replies: Any) -> None:
        self.replies = list(replies)
        self.calls: list[Any] = []

    async def ainvoke(self, messages: Any) -> AIMessage:
        self.calls.append(messages)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, BaseException):
            raise reply
        if not isinstance(reply, str):
            reply = json.dumps(reply)
        return AIMessage(content=reply)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def notifications() -> NotificationService:
    return NotificationService()


@pytest.fixture
def snapshot_store() -> InMemorySnapshotStore:
    return InMemorySnapshotStore()


@pytest.fixture
def scheduler(notifications, snapshot_store, clock) -> SegmentScheduler:
    return SegmentScheduler(
        notifications=notifications,
        snapshot_store=snapshot_store,
        clock=clock,
    )


@pytest.fixture
def channel(scheduler) -> TimerChannel:
    return TimerChannel(scheduler)


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM(VALID_ANALYSIS)


@pytest.fixture
def dream_service(fake_llm, clock) -> DreamAnalysisService:
    return DreamAnalysisService(
        llm=fake_llm,
        rate_limiter=SlidingWindowRateLimiter(max_requests=10, window_seconds=900, clock=clock),
        timeout_seconds=5,
        clock=clock,
    )
