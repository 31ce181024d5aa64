"""
Tests for server.py - FastAPI endpoints for the station balancer.

Verifies:
- /api/balance accepts the request shape and returns a JSON result
- Invalid caps and durations are rejected by validation (422)
- Duplicate IDs are rejected (400)
- /api/stations/apply returns updated stations
- /api/sample and /health respond
"""

import pytest
from fastapi.testclient import TestClient

from station_balancer.server import app
from station_balancer.world import build_sample_session


@pytest.fixture
def client(monkeypatch):
    """Return a FastAPI TestClient for the app."""
    monkeypatch.delenv("BALANCER_MAX_ITERATIONS", raising=False)
    return TestClient(app)


@pytest.fixture
def sample_payload():
    """Return the sample session as a JSON request body."""
    return build_sample_session().model_dump(mode="json")


class TestBalanceEndpoint:
    """Test the POST /api/balance endpoint."""

    def test_balance_endpoint_smoke(self, client, sample_payload):
        """Smoke test: endpoint accepts request and returns 200 with JSON response."""
        response = client.post("/api/balance", json=sample_payload)

        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"result", "summary", "cap_exceeded", "moved_tests"}

    def test_balance_without_cap(self, client, sample_payload):
        """Verify the uncapped sample needs two moves."""
        response = client.post("/api/balance", json=sample_payload)
        data = response.json()

        result = data["result"]
        assert [s["test_id"] for s in result["suggestions"]] == ["t3", "t1"]
        assert result["suggested_assignments"] == {"s1": ["t2"], "s2": ["t3", "t1"]}
        assert result["station_times"]["s1"] == {"before": 90, "after": 45}
        assert data["moved_tests"] == {"t3": "s2", "t1": "s2"}
        assert data["cap_exceeded"] is False

    def test_balance_with_cap(self, client, sample_payload):
        """Verify the cap phase result and summary lines."""
        payload = {**sample_payload, "max_time": 54}
        response = client.post("/api/balance", json=payload)
        data = response.json()

        assert [s["test_id"] for s in data["result"]["suggestions"]] == ["t2"]
        assert data["summary"][1] == "Suggested Moves (1)"

    def test_cap_exceeded_flag(self, client):
        payload = {
            "stations": [{"id": "s1", "tests": ["a", "b", "c"]}, {"id": "s2"}],
            "tests": [{"id": t, "name": t, "estimated_duration": 10} for t in ["a", "b", "c"]],
            "max_time": 15,
        }
        data = client.post("/api/balance", json=payload).json()

        assert data["cap_exceeded"] is True
        assert data["result"]["adjusted_max_time"] == 20

    def test_max_iterations_respected(self, client, sample_payload):
        payload = {**sample_payload, "max_iterations": 1}
        data = client.post("/api/balance", json=payload).json()

        assert len(data["result"]["suggestions"]) == 1

    @pytest.mark.parametrize("max_time", [0, -10])
    def test_rejects_non_positive_cap(self, client, sample_payload, max_time):
        response = client.post("/api/balance", json={**sample_payload, "max_time": max_time})
        assert response.status_code == 422

    def test_rejects_non_positive_duration(self, client):
        payload = {
            "stations": [{"id": "s1", "tests": ["a"]}, {"id": "s2"}],
            "tests": [{"id": "a", "name": "A", "estimated_duration": 0}],
        }
        response = client.post("/api/balance", json=payload)
        assert response.status_code == 422

    def test_rejects_duplicate_ids(self, client, sample_payload):
        payload = dict(sample_payload)
        payload["stations"] = sample_payload["stations"] + [sample_payload["stations"][0]]
        response = client.post("/api/balance", json=payload)

        assert response.status_code == 400
        assert response.json()["detail"] == "Duplicate station IDs"

    def test_empty_session(self, client):
        data = client.post("/api/balance", json={"stations": [], "tests": []}).json()

        assert data["result"]["suggestions"] == []
        assert data["summary"][-1] == "No changes suggested"


class TestApplyEndpoint:
    """Test the POST /api/stations/apply endpoint."""

    def test_apply_updates_stations(self, client, sample_payload):
        response = client.post(
            "/api/stations/apply",
            json={
                "stations": sample_payload["stations"],
                "suggested_assignments": {"s1": ["t2"], "s2": ["t3", "t1"]},
            },
        )

        assert response.status_code == 200
        stations = response.json()
        assert stations[0]["tests"] == ["t2"]
        assert stations[0]["test_count"] == 1
        assert stations[1]["tests"] == ["t3", "t1"]
        assert stations[1]["test_count"] == 2


class TestMiscEndpoints:
    """Test the sample and health endpoints."""

    def test_sample(self, client):
        data = client.get("/api/sample").json()
        assert [s["id"] for s in data["stations"]] == ["s1", "s2"]
        assert len(data["tests"]) == 3

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}
