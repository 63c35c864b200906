"""Tests for the HTTP routes."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.dependencies import (
    get_dream_analysis_service,
    get_notification_service,
    get_timer_channel,
)
from app.main import app
from tests.conftest import DREAM_TEXT, FakeLLM


@pytest.fixture
def client(dream_service, channel, notifications):
    app.dependency_overrides[get_dream_analysis_service] = lambda: dream_service
    app.dependency_overrides[get_timer_channel] = lambda: channel
    app.dependency_overrides[get_notification_service] = lambda: notifications
    # No context manager: the lifespan tick loop is not started
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestAnalyzeDreamRoute:
    def test_success(self, client) -> None:
        response = client.post("/api/analyzeDream", json={"dreamText": DREAM_TEXT, "timestamp": 1})
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["requestId"].startswith("req_")
        assert set(body["data"]) == {"emotions", "themes", "interpretation", "symbols", "confidence", "timestamp"}

    def test_too_short(self, client, fake_llm) -> None:
        response = client.post("/api/analyzeDream", json={"dreamText": "x" * 19})
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert "dreamText" in body["error"]
        assert body["requestId"].startswith("req_")
        assert fake_llm.calls == []

    def test_missing_body_field(self, client) -> None:
        response = client.post("/api/analyzeDream", json={"userId": "u1"})
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"].startswith("Validation failed")
        assert "dreamText" in body["error"]

    def test_rate_limit(self, client) -> None:
        for _ in range(10):
            assert client.post("/api/analyzeDream", json={"dreamText": DREAM_TEXT}).status_code == 200
        response = client.post("/api/analyzeDream", json={"dreamText": DREAM_TEXT})
        assert response.status_code == 429
        assert response.json() == {
            "success": False,
            "error": "Too many dream analysis requests. Please try again in 15 minutes.",
            "requestId": None,
        }

    def test_upstream_format_error(self, client, dream_service) -> None:
        dream_service._llm = FakeLLM("not json at all")
        response = client.post("/api/analyzeDream", json={"dreamText": DREAM_TEXT})
        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert "not json" not in body["error"]
        assert body["requestId"].startswith("req_")


class TestHealthAndErrors:
    def test_health(self, client) -> None:
        response = client.get("/api/health")
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["version"] == "1.0.0"
        assert isinstance(body["timestamp"], int)
        assert body["message"]

    def test_root(self, client) -> None:
        assert client.get("/").json()["docs"] == "/docs"

    def test_unknown_route(self, client) -> None:
        response = client.get("/api/nope")
        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Endpoint not found", "requestId": None}


class TestCors:
    @pytest.mark.parametrize(
        "origin",
        ["chrome-extension://abcdefghijklmnop", "http://localhost:5173", "http://127.0.0.1:3000"],
    )
    def test_allowed_origin(self, client, origin: str) -> None:
        response = client.options(
            "/api/analyzeDream",
            headers={"Origin": origin, "Access-Control-Request-Method": "POST"},
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == origin

    def test_disallowed_origin(self, client) -> None:
        response = client.options(
            "/api/analyzeDream",
            headers={"Origin": "https://evil.example.com", "Access-Control-Request-Method": "POST"},
        )
        assert "access-control-allow-origin" not in response.headers

    def test_no_origin(self, client) -> None:
        assert client.get("/api/health").status_code == 200


class TestTimerRoutes:
    def test_start_and_state(self, client) -> None:
        response = client.post(
            "/api/timer/messages",
            json={"type": "START_TIMER", "total": 50, "segment": 20, "grace": 5},
        )
        assert response.json() == {"success": True}

        state = client.get("/api/timer/state").json()
        assert state["isPaused"] is False
        assert state["currentTimer"]["block_count"] == 2
        assert state["display"] == {
            "countdown": "20:00",
            "segmentLabel": "Segment 1 of 2",
            "sessionType": "Work Time",
            "totalRemainingSeconds": 45 * 60,
            "progressPercent": 0.0,
        }

    def test_get_state_message(self, client) -> None:
        response = client.post("/api/timer/messages", json={"type": "GET_TIMER_STATE"})
        assert response.json() == {"currentTimer": None, "isPaused": False}

    def test_idle_state_has_no_display(self, client) -> None:
        assert client.get("/api/timer/state").json()["display"] is None

    def test_invalid_start(self, client) -> None:
        response = client.post(
            "/api/timer/messages",
            json={"type": "START_TIMER", "total": 10, "segment": 20, "grace": 5},
        )
        assert response.status_code == 200
        assert response.json()["success"] is False

    def test_notifications(self, client, scheduler) -> None:
        client.post("/api/timer/messages", json={"type": "START_TIMER", "total": 50, "segment": 20, "grace": 5})
        for _ in range(1200):
            scheduler.tick()
        notifications = client.get("/api/timer/notifications").json()
        assert [n["title"] for n in notifications] == ["Session Started", "Break Time 🕒"]
        assert len(client.get("/api/timer/notifications", params={"limit": 1}).json()) == 1


class TestLifeClockRoute:
    def test_valid_birthday(self, client) -> None:
        response = client.get("/api/lifeclock", params={"birthday": "1990-06-15"})
        assert response.status_code == 200
        body = response.json()
        assert body["life_stage"] in {"mid", "late"}
        assert 0 <= body["months"] < 12

    def test_future_birthday(self, client) -> None:
        response = client.get("/api/lifeclock", params={"birthday": "2999-01-01"})
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_bad_date(self, client) -> None:
        response = client.get("/api/lifeclock", params={"birthday": "not-a-date"})
        assert response.status_code == 400
