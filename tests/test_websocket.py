"""WebSocket integration tests for real-time play."""

from __future__ import annotations

import json
import time

import pytest
from starlette.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from torus_snake.server.app import create_app
from torus_snake.server.websocket import Debouncer, parse_direction
from torus_snake.snake import Direction


@pytest.fixture()
def tc():
    """Starlette TestClient run as a context manager so every request and
    WebSocket shares the lifespan's event loop and GameManager."""
    with TestClient(create_app()) as client:
        yield client


def _create_game(tc, **body) -> str:
    resp = tc.post("/games", json=body)
    assert resp.status_code == 201
    return resp.json()["game_id"]


def _wait_for(tc, game_id, predicate, attempts=100):
    for _ in range(attempts):
        state = tc.get(f"/games/{game_id}").json()["state"]
        if predicate(state):
            return state
        time.sleep(0.01)
    raise AssertionError("Condition not reached.")


class TestParseDirection:
    def test_valid(self):
        assert parse_direction('{"direction": "up"}') is Direction.UP
        assert parse_direction('{"direction": "LEFT"}') is Direction.LEFT

    def test_malformed(self):
        for raw in ("not-json", "[]", "123", '{"direction": 5}',
                    '{"direction": "sideways"}', '{"other": "up"}'):
            assert parse_direction(raw) is None


class TestDebouncer:
    def test_drops_events_inside_window(self):
        now = [0.0]
        debounce = Debouncer(200, clock=lambda: now[0])
        assert debounce.accept()
        now[0] = 0.1
        assert not debounce.accept()
        now[0] = 0.25
        assert debounce.accept()

    def test_zero_window_accepts_everything(self):
        debounce = Debouncer(0, clock=lambda: 1.0)
        assert debounce.accept()
        assert debounce.accept()


class TestPlayWebSocket:
    def test_connect_and_receive_initial_state(self, tc):
        game_id = _create_game(tc)
        with tc.websocket_connect(f"/games/{game_id}/play") as ws:
            state = json.loads(ws.receive_text())
            assert state["tick"] == 0
            assert len(state["snake"]) == 4
            assert state["running"] is False

    def test_nonexistent_game_rejected(self, tc):
        with pytest.raises(WebSocketDisconnect), tc.websocket_connect(
            "/games/nonexistent/play",
        ):
            pass

    def test_direction_applied_to_head(self, tc):
        game_id = _create_game(tc, input_debounce_ms=0)
        with tc.websocket_connect(f"/games/{game_id}/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"direction": "left"}))
            state = _wait_for(
                tc, game_id, lambda s: s["snake"][0]["direction"] == "LEFT",
            )
        assert state["snake"][1]["direction"] == "UP"

    def test_reverse_direction_ignored(self, tc):
        game_id = _create_game(tc, input_debounce_ms=0)
        with tc.websocket_connect(f"/games/{game_id}/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"direction": "down"}))
            ws.send_text(json.dumps({"direction": "right"}))
            state = _wait_for(
                tc, game_id, lambda s: s["snake"][0]["direction"] != "UP",
            )
        assert state["snake"][0]["direction"] == "RIGHT"

    def test_invalid_messages_ignored(self, tc):
        game_id = _create_game(tc)
        with tc.websocket_connect(f"/games/{game_id}/play") as ws:
            ws.receive_text()
            ws.send_text("not-json")
            ws.send_text("[]")
            ws.send_text(json.dumps({"direction": "invalid_dir"}))
            ws.send_text(json.dumps({"no_direction_key": True}))
        state = tc.get(f"/games/{game_id}").json()["state"]
        assert state["snake"][0]["direction"] == "UP"

    def test_running_game_broadcasts_ticks(self, tc):
        game_id = _create_game(tc, initial_interval_ms=20, seed=1)
        tc.post(f"/games/{game_id}/start")
        with tc.websocket_connect(f"/games/{game_id}/play") as ws:
            ws.receive_text()
            state = json.loads(ws.receive_text())
            assert state["tick"] >= 1
            assert state["running"] is True
            # First tick moves the game onto the easy level's interval.
            assert state["interval_ms"] == 1000
        tc.post(f"/games/{game_id}/stop")

    def test_disconnect_removes_socket(self, tc):
        game_id = _create_game(tc)
        with tc.websocket_connect(f"/games/{game_id}/play") as ws:
            ws.receive_text()
        session = tc.app.state.game_manager.get_game(game_id)
        for _ in range(100):
            if not session.sockets:
                break
            time.sleep(0.01)
        assert session.sockets == []
