import pytest
from fastapi.testclient import TestClient
from trafficlight.control.application.controller import IntersectionController
from trafficlight.control.presentation.api import create_app

@pytest.fixture
def api_controller(scheduler):
    return IntersectionController(scheduler, intersection_id="INT-API")

@pytest.fixture
def client(api_controller):
    with TestClient(create_app(api_controller)) as client:
        yield client

def test_get_state(client):
    response = client.get("/intersection/state")
    assert response.status_code == 200
    data = response.json()
    assert data["intersection_id"] == "INT-API"
    assert data["phase"] == "green"
    assert data["active_direction"] == "north-south"
    assert data["heads"] == {"north": "green", "south": "green", "east": "red", "west": "red"}

def test_yellow_then_expiry(client, scheduler):
    response = client.post("/intersection/yellow")
    assert response.status_code == 200
    assert response.json()["command"] == "yellow"
    assert response.json()["state"]["phase"] == "yellow"
    assert response.json()["state"]["yellow_pending"] is True

    scheduler.advance(3)
    data = client.get("/intersection/state").json()
    assert data["active_direction"] == "east-west"
    assert data["phase"] == "green"

def test_red_and_green(client):
    data = client.post("/intersection/red").json()["state"]
    assert data["active_direction"] == "east-west"
    assert data["heads"]["north"] == "red"

    data = client.post("/intersection/green").json()["state"]
    assert data["active_direction"] == "east-west"
    assert data["phase"] == "green"

def test_next(client):
    assert client.post("/intersection/next").json()["state"]["phase"] == "yellow"
    assert client.post("/intersection/next").json()["state"]["active_direction"] == "east-west"

def test_auto_start_stop(client, scheduler):
    data = client.post("/intersection/auto/start").json()["state"]
    assert data["auto_mode"] is True

    scheduler.advance(10)
    assert client.get("/intersection/state").json()["phase"] == "yellow"

    data = client.post("/intersection/auto/stop").json()["state"]
    assert data["auto_mode"] is False

def test_snapshot(client):
    response = client.get("/intersection/snapshot")
    assert response.status_code == 200
    assert response.json()["intersection_id"] == "INT-API"

def test_closed_controller_conflict(client, api_controller):
    api_controller.close()
    response = client.post("/intersection/green")
    assert response.status_code == 409

def test_missing_controller(api_controller):
    app = create_app(api_controller)
    app.state.controller = None
    with TestClient(app) as client:
        response = client.get("/intersection/state")
    assert response.status_code == 503

def test_lifespan_starts_auto_mode_and_closes(api_controller):
    with TestClient(create_app(api_controller, start_auto_mode=True)) as client:
        assert client.get("/intersection/state").json()["auto_mode"] is True
    assert api_controller.closed
