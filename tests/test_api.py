import asyncio
import logging

from fastapi.testclient import TestClient

from conquest.models import RuntimeSettings
from services.api.main import GameSession, create_app


def make_client(seed: str = "42") -> TestClient:
    # no context manager: the background tick loop stays off
    return TestClient(create_app(RuntimeSettings(seed=seed)))


def test_health_and_snapshot():
    client = make_client()
    assert client.get("/health").json() == {"status": "ok"}
    snap = client.get("/snapshot").json()
    assert snap["seed"] == 42
    assert snap["credits"] == 300
    assert snap["systems"]


def test_preview_is_deterministic_and_leaves_session_alone():
    client = make_client()
    first = client.get("/preview", params={"seed": "7"}).json()
    second = client.get("/preview", params={"seed": "7"}).json()
    assert first["systems"] == second["systems"]
    assert client.get("/snapshot").json()["seed"] == 42


def test_build_and_move_commands():
    client = make_client()
    snap = client.get("/snapshot").json()
    home = next(f["at_system"] for f in snap["fleets"] if f["owner"] == "player")

    built = client.post("/build", json={"system_id": home, "size_class": "small"}).json()
    assert built["ok"] is True
    assert client.get("/snapshot").json()["credits"] == 200

    broke = client.post("/build", json={"system_id": home, "size_class": "large"}).json()
    assert broke == {"ok": False, "message": "Not enough credits", "fleet_id": None}

    moved = client.post("/move", json={"fleet_id": built["fleet_id"], "destination_id": home}).json()
    assert moved["ok"] is False


def test_invalid_payloads_are_422():
    client = make_client()
    assert client.post("/build", json={"size_class": "huge"}).status_code == 422
    assert client.post("/move", json={"fleet_id": "x"}).status_code == 422


def test_session_controls():
    client = make_client()
    assert client.post("/speed", json={"multiplier": 3}).json()["ok"] is False
    assert client.post("/speed", json={"multiplier": 2}).json()["ok"] is True
    assert client.post("/speed/cycle").json()["message"] == "Speed x4"
    assert client.post("/pause").json()["message"] == "Paused"
    assert client.get("/snapshot").json()["paused"] is True

    assert client.post("/surrender").json()["ok"] is True
    snap = client.get("/snapshot").json()
    assert snap["outcome"] == "defeat"

    restarted = client.post("/new-game", json={"seed": "9"}).json()
    assert restarted["ok"] is True
    snap = client.get("/snapshot").json()
    assert snap["seed"] == 9
    assert snap["outcome"] is None
    assert client.get("/events", params={"count": 1}).json()[0]["kind"] == "generated"


def test_events_count_must_not_be_negative():
    client = make_client()
    assert client.get("/events", params={"count": 0}).json() == []
    assert client.get("/events", params={"count": -2}).status_code == 422


def test_tick_loop_keeps_running_after_a_failing_step(caplog):
    session = GameSession(RuntimeSettings(seed="3", tick_interval=0.001))
    calls = []

    def flaky_step(elapsed):
        calls.append(elapsed)
        if len(calls) == 1:
            raise RuntimeError("boom")
        if len(calls) >= 3:
            session.stop()

    session.step = flaky_step
    with caplog.at_level(logging.ERROR, logger="conquest.api"):
        asyncio.run(session.run())
    assert len(calls) == 3
    assert "tick failed" in caplog.text
