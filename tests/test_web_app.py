"""API tests for the Flask web interface, driven by synthetic ticks."""

import pytest

from refy.services import InMemoryStore, ManualTickDriver
from refy.ui import create_app


@pytest.fixture
def app():
    return create_app(store=InMemoryStore(), driver=ManualTickDriver())


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def state(app):
    return app.extensions["refy"]


def post(client, url, payload=None):
    return client.post(url, json=payload or {})


def start_short_match(client, state, half_duration=60):
    client.put("/api/settings", json={"half_duration": half_duration})
    assert post(client, "/api/kickoff", {"team": "home"}).status_code == 200
    assert post(client, "/api/timer/play").status_code == 200


def test_initial_state(client):
    response = client.get("/api/state")
    assert response.status_code == 200
    data = response.get_json()
    assert data["success"] is True
    assert data["state"]["match"]["status"] == "pre-match"
    assert data["state"]["clock"]["formatted"] == "45:00"


def test_kickoff_validation(client):
    response = post(client, "/api/kickoff", {"team": "visitors"})
    assert response.status_code == 400
    assert "team must be" in response.get_json()["error"]

    assert post(client, "/api/kickoff", {"team": "AWAY"}).status_code == 200
    response = post(client, "/api/kickoff", {"team": "home"})
    assert response.status_code == 409
    assert response.get_json()["state"]["match"]["kickoff_team"] == "away"


def test_illegal_transition_returns_conflict(client):
    response = post(client, "/api/half/next")
    assert response.status_code == 409
    assert response.get_json()["success"] is False


def test_first_half_with_stoppage(client, state):
    start_short_match(client, state)
    state.driver.advance(60)

    data = client.get("/api/state").get_json()["state"]
    assert data["pending_decision"] == "extra-time"
    assert data["vibrate"] == [[200, 100, 200, 100, 200]]
    assert data["game_time_formatted"] == "01:00"
    # Patterns are delivered once
    assert client.get("/api/state").get_json()["state"]["vibrate"] == []

    response = post(client, "/api/extra-time", {"minutes": "2", "seconds": "70"})
    assert response.status_code == 400
    assert "Seconds must be between 0 and 59" in response.get_json()["error"]

    response = post(client, "/api/extra-time", {"preset": 0})
    assert response.status_code == 200
    data = response.get_json()["state"]
    assert data["match"]["status"] == "extra-time"
    assert data["clock"]["remaining_seconds"] == 120
    assert data["stoppage_added_seconds"] == 120

    state.driver.advance(20)
    response = post(client, "/api/half/finish")
    assert response.get_json()["state"]["match"]["status"] == "half-time"
    events = response.get_json()["state"]["match"]["event_log"]
    assert events[-1]["type"] == "Half Ended"
    assert events[-1]["game_time_seconds"] == 80


def test_unknown_preset_without_prompt_is_conflict(client, state):
    start_short_match(client, state)
    response = post(client, "/api/extra-time", {"preset": 9})
    assert response.status_code == 409
    assert response.get_json()["state"]["match"]["status"] == "in-progress"


def test_extra_time_requires_body(client, state):
    start_short_match(client, state)
    state.driver.advance(60)
    assert post(client, "/api/extra-time", {}).status_code == 400
    assert post(client, "/api/extra-time", {"total_seconds": 45}).status_code == 200


def test_goals_cards_and_new_game(client, state):
    start_short_match(client, state, half_duration=600)
    state.driver.advance(30)

    assert post(client, "/api/goal", {"team": "home"}).status_code == 200
    assert post(client, "/api/goal", {"team": "home"}).status_code == 200
    assert post(client, "/api/goal/remove", {"team": "home"}).status_code == 200
    response = post(client, "/api/card", {"team": "away", "kind": "red", "name": "Smith", "number": "9"})
    assert response.status_code == 200
    match = response.get_json()["state"]["match"]
    assert match["score"] == {"home": 1, "away": 0}
    assert match["cards"]["away"]["red"] == 1
    assert match["event_log"][-1]["details"] == "Player: Smith, Number: 9"

    assert post(client, "/api/card", {"team": "away", "kind": "blue"}).status_code == 400

    report = client.get("/api/report").get_json()["report"]
    assert report["events"][0]["type"] == "Red Card"
    assert len(report["card_events"]["away"]["red"]) == 1

    response = post(client, "/api/new-game")
    assert response.get_json()["archived"]["final_score"] == {"home": 1, "away": 0}
    assert response.get_json()["state"]["match"]["status"] == "pre-match"

    history = client.get("/api/history").get_json()
    assert history["count"] == 1
    assert client.get("/api/history/0/report").status_code == 200
    assert client.get("/api/history/5/report").status_code == 404

    store = state.service_factory.store
    assert store.get("currentMatch")["status"] == "pre-match"
    assert len(store.get("matchHistory")) == 1

    assert client.delete("/api/history").status_code == 200
    assert client.get("/api/history").get_json()["count"] == 0


def test_extra_half_flow(client, state):
    start_short_match(client, state)
    for _ in range(2):
        state.driver.advance(60)
        post(client, "/api/extra-time/decline")
        post(client, "/api/half/next")
        post(client, "/api/timer/play")

    data = client.get("/api/state").get_json()["state"]
    assert data["pending_decision"] == "extra-half"

    assert post(client, "/api/extra-half", {"minutes": "", "seconds": "0"}).status_code == 400
    response = post(client, "/api/extra-half", {"minutes": "10", "seconds": "0"})
    assert response.status_code == 200
    data = response.get_json()["state"]
    assert data["match"]["current_half"] == 3
    assert data["clock"]["remaining_seconds"] == 600


def test_reset_and_pause(client, state):
    start_short_match(client, state)
    state.driver.advance(25)
    assert post(client, "/api/timer/pause").status_code == 200
    response = post(client, "/api/timer/reset")
    data = response.get_json()["state"]
    assert data["clock"]["remaining_seconds"] == 60
    assert data["game_time_seconds"] == 0


def test_settings_update(client, state):
    response = client.put("/api/settings", json={"half_duration": 1200, "theme": "dark"})
    assert response.status_code == 200
    assert response.get_json()["settings"]["theme"] == "dark"
    assert state.engine.clock.remaining_seconds == 1200
    assert state.service_factory.store.get("appSettings")["half_duration"] == 1200

    assert client.put("/api/settings", json={"theme": "neon"}).status_code == 400
    assert client.get("/api/settings").get_json()["settings"]["theme"] == "dark"


def test_report_export(client, state):
    start_short_match(client, state)
    response = client.get("/api/report/export")
    assert response.status_code == 200
    assert response.mimetype == "text/csv"
    assert "Kickoff" in response.get_data(as_text=True)


def test_rules_and_coin_flip(client):
    assert post(client, "/api/rules/ask", {"question": "  "}).status_code == 400
    answer = post(client, "/api/rules/ask", {"question": "offside"}).get_json()["answer"]
    assert "Offside" in answer

    result = post(client, "/api/coin-flip").get_json()["result"]
    assert result in ("Heads", "Tails")
