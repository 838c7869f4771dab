import pytest
from fastapi.testclient import TestClient

from conftest import T0
from api.routes.session_loader import get_advisor, get_session
from data.monitor import MonitoringSession
from main import app
from models.advisor import RespiratoryAdvisor
from models.simulator import StateSimulator, initial_snapshot


@pytest.fixture
def session() -> MonitoringSession:
    return MonitoringSession(
        simulator=StateSimulator(seed=21),
        interval=0,
        start_snapshot=initial_snapshot(T0),
    )


@pytest.fixture
def advisor() -> RespiratoryAdvisor:
    return RespiratoryAdvisor()


@pytest.fixture
def client(session, advisor):
    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_advisor] = lambda: advisor
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_root_lists_endpoints(client) -> None:
    body = client.get("/").json()
    assert body["message"] == "RespiGuard Snow API"
    assert "assessment" in body["endpoints"]


def test_snapshot_reports_initial_state(client) -> None:
    body = client.get("/api/v1/snapshot").json()
    assert body["env"]["temperature"] == -2.5
    assert body["health"]["spo2"] == 98.0
    assert body["alerts"] == []
    assert body["metric_alerts"] == {"pm25": False, "heart_rate": False, "spo2": False}


def test_tick_advances_and_fills_history(client, session) -> None:
    for _ in range(3):
        assert client.post("/api/v1/simulation/tick").status_code == 200

    body = client.get("/api/v1/history", params={"points": 20}).json()
    assert body["points"] == 3
    assert body["capacity"] == 50
    assert body["series"][-1]["hr"] == session.current.health.heart_rate
    assert set(body["trends"]) >= {"temperature", "pm25", "heart_rate", "spo2"}


def test_history_points_are_validated(client) -> None:
    assert client.get("/api/v1/history", params={"points": 0}).status_code == 422
    assert client.get("/api/v1/history", params={"points": 51}).status_code == 422


def test_latest_assessment_404_before_first_run(client) -> None:
    response = client.get("/api/v1/assessment/latest")
    assert response.status_code == 404
    assert response.json()["detail"] == "No assessment has been run yet"


def test_assessment_uses_rule_engine_without_key(client) -> None:
    response = client.post("/api/v1/assessment")
    assert response.status_code == 200
    body = response.json()
    assert body["risk_level"] in {"Low", "Moderate", "High", "Critical"}
    assert body["source"] == "rule_engine"
    assert body["recommendations"]
    # initial state: -2.5°C, PM2.5 12 -> score 1.15, stable narrative
    assert body["risk_level"] == "Low"
    assert body["weather_context"] == "Stable Winter Conditions"

    latest = client.get("/api/v1/assessment/latest").json()
    assert latest["summary"] == body["summary"]
    assert latest["last_updated"] == body["last_updated"]


def test_advisor_status(client) -> None:
    body = client.get("/api/v1/advisor/status").json()
    assert body["mode"] == "mock"
    assert body["label"] == "Using intelligent mock analysis"
    assert body["simulation_running"] is False
    assert body["last_assessment"] is None
