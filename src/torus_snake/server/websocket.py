"""WebSocket handler: direction input in, game state out."""

from __future__ import annotations

import json
import logging
import time

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from torus_snake.server.game_manager import GameManager
from torus_snake.snake import Direction

logger = logging.getLogger(__name__)

ws_router = APIRouter()

_DIRECTION_MAP: dict[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


def _get_manager(ws: WebSocket) -> GameManager:
    return ws.app.state.game_manager


def parse_direction(raw: str) -> Direction | None:
    """Extract a direction from a client message, or ``None`` if malformed."""
    try:
        msg = json.loads(raw)
    except json.JSONDecodeError:
        return None
    if not isinstance(msg, dict):
        return None
    direction_str = msg.get("direction")
    if not isinstance(direction_str, str):
        return None
    return _DIRECTION_MAP.get(direction_str.lower())


class Debouncer:
    """Drops events arriving less than *interval_ms* after the last accepted one."""

    def __init__(self, interval_ms: int, clock=time.monotonic) -> None:
        self.interval = interval_ms / 1000.0
        self._clock = clock
        self._last: float | None = None

    def accept(self) -> bool:
        now = self._clock()
        if self._last is not None and now - self._last < self.interval:
            return False
        self._last = now
        return True


@ws_router.websocket("/games/{game_id}/play")
async def play(websocket: WebSocket, game_id: str) -> None:
    """Player WebSocket: send directions, receive game state each tick."""
    manager = _get_manager(websocket)
    game = manager.get_game(game_id)
    if game is None:
        await websocket.close(code=4004, reason="Game not found.")
        return

    await websocket.accept()
    game.sockets.append(websocket)
    logger.info("Player connected to game %s.", game_id)

    # Send initial state snapshot so the client gets immediate feedback.
    await websocket.send_text(
        json.dumps(game.engine.get_state(), separators=(",", ":")),
    )

    debounce = Debouncer(game.input_debounce_ms)
    try:
        while True:
            direction = parse_direction(await websocket.receive_text())
            if direction is None or not debounce.accept():
                continue
            async with game.lock:
                game.engine.set_direction(direction)
    except WebSocketDisconnect:
        logger.info("Player disconnected from game %s.", game_id)
    finally:
        if websocket in game.sockets:
            game.sockets.remove(websocket)
