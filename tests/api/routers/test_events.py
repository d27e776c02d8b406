"""Tests for the events router."""

import time


def wait_for_events(client, predicate, timeout: float = 2.0) -> list[dict]:
    """Poll the events endpoint until predicate accepts the events."""
    deadline = time.monotonic() + timeout
    while True:
        events = client.get("/v1/events").json()["events"]
        if predicate(events):
            return events
        if time.monotonic() > deadline:
            raise AssertionError(f"unexpected events: {events}")
        time.sleep(0.01)


class TestEventsRouter:
    """Test the recent event history."""

    def test_empty_history(self, client):
        """Test a fresh app has no events."""
        response = client.get("/v1/events")

        assert response.status_code == 200
        assert response.json() == {"events": [], "dropped": 0}

    def test_start_events(self, client, httpserver):
        """Test starting a task is visible as status and log events."""
        httpserver.expect_request("/page").respond_with_data("<p>hi</p>")
        client.post(
            "/v1/tasks",
            json={
                "name": "Shop",
                "source_kind": "web_page",
                "endpoint": httpserver.url_for("/page"),
                "interval_seconds": 60,
                "notes": "Shop",
            },
        )
        client.put("/v1/tasks/0/run")

        events = wait_for_events(
            client,
            lambda events: any(e["type"] == "change_detected" for e in events),
        )

        types = [event["type"] for event in events]
        assert "task_status_changed" in types
        assert "log" in types
        status = next(e for e in events if e["type"] == "task_status_changed")
        assert status["index"] == 0
        assert status["status"]["state"] == "running"
        change = next(e for e in events if e["type"] == "change_detected")
        assert change["change"]["message"] == "start: Shop"

    def test_limit(self, client):
        """Test the limit parameter bounds."""
        assert client.get("/v1/events?limit=5").status_code == 200
        assert client.get("/v1/events?limit=0").status_code == 422
        assert client.get("/v1/events?limit=1001").status_code == 422
