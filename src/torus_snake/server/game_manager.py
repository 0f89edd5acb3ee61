"""In-memory registry of single-player game sessions and their tick clocks."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from torus_snake.clock import AsyncioClock
from torus_snake.config import GameConfig, ScorePolicy
from torus_snake.engine import GameEngine
from torus_snake.levels import LevelPolicy
from torus_snake.server.models import GameStatus, GameSummary
from torus_snake.snake import Direction

logger = logging.getLogger(__name__)

_MAX_SESSIONS = 100


@dataclass
class GameSession:
    """A game engine plus the sockets watching it."""

    game_id: str
    engine: GameEngine
    clock: AsyncioClock
    input_debounce_ms: int = 200
    sockets: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    @property
    def status(self) -> GameStatus:
        return GameStatus.RUNNING if self.engine.running else GameStatus.IDLE

    def summary(self) -> GameSummary:
        state = self.engine.state
        return GameSummary(
            game_id=self.game_id,
            status=self.status,
            tick=state.tick,
            score=state.score,
            interval_ms=state.interval_ms,
        )

    async def broadcast(self) -> None:
        """Send the current state to every connected socket."""
        payload = json.dumps(self.engine.get_state(), separators=(",", ":"))
        dead: list[WebSocket] = []

        # Iterate over a snapshot so disconnect handlers can mutate the list.
        for ws in list(self.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in self.sockets:
                self.sockets.remove(ws)


class GameManager:
    """Central registry managing all game sessions."""

    def __init__(self, max_sessions: int = _MAX_SESSIONS) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1.")
        self._sessions: dict[str, GameSession] = {}
        self._max_sessions = max_sessions

    def create_game(
        self,
        rows: int = 16,
        cols: int = 16,
        snake_length: int = 4,
        start_direction: str = "up",
        goal_reward: int = 10,
        initial_interval_ms: int = 1000,
        score_policy: str = "length",
        level_policy: str = "range",
        seed: int | None = None,
        input_debounce_ms: int = 200,
    ) -> GameSession:
        """Create a new idle session and return it."""
        if len(self._sessions) >= self._max_sessions:
            raise OverflowError("Session limit reached. Try again later.")

        try:
            direction = Direction[start_direction.upper()]
        except KeyError as exc:
            raise ValueError(f"Unknown direction {start_direction!r}.") from exc

        config = GameConfig(
            rows=rows,
            cols=cols,
            snake_length=snake_length,
            start_direction=direction,
            goal_reward=goal_reward,
            initial_interval_ms=initial_interval_ms,
            score_policy=ScorePolicy(score_policy),
            level_policy=LevelPolicy(level_policy),
            seed=seed,
        )

        game_id = uuid.uuid4().hex[:12]
        clock = AsyncioClock(name=f"game {game_id}")
        session = GameSession(
            game_id=game_id,
            engine=GameEngine(config, clock=clock),
            clock=clock,
            input_debounce_ms=input_debounce_ms,
        )
        clock.after_tick = session.broadcast
        self._sessions[game_id] = session
        logger.info("Game %s created (%dx%d).", game_id, rows, cols)
        return session

    def get_game(self, game_id: str) -> GameSession | None:
        return self._sessions.get(game_id)

    def require_game(self, game_id: str) -> GameSession:
        session = self._sessions.get(game_id)
        if session is None:
            raise KeyError(f"Game {game_id} not found.")
        return session

    def list_games(self) -> list[GameSummary]:
        return [s.summary() for s in self._sessions.values()]

    async def start_game(self, game_id: str) -> GameSession:
        session = self.require_game(game_id)
        async with session.lock:
            session.engine.start()
        await session.broadcast()
        return session

    async def stop_game(self, game_id: str) -> GameSession:
        session = self.require_game(game_id)
        async with session.lock:
            session.engine.stop()
        await session.broadcast()
        return session

    async def reset_game(self, game_id: str) -> GameSession:
        session = self.require_game(game_id)
        async with session.lock:
            session.engine.reset()
        await session.broadcast()
        return session

    async def remove_game(self, game_id: str) -> None:
        """Stop a session's clock, close its sockets and forget it."""
        session = self.require_game(game_id)
        session.engine.stop()
        await session.clock.wait_stopped()
        await self._close_connections(session)
        del self._sessions[game_id]
        logger.info("Game %s removed.", game_id)

    async def _close_connections(self, session: GameSession) -> None:
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Game removed.")
            except Exception:
                logger.warning(
                    "Failed closing socket in game %s.", session.game_id,
                )
        session.sockets.clear()

    async def cleanup(self) -> None:
        """Stop every running clock."""
        for session in self._sessions.values():
            session.engine.stop()
        await asyncio.gather(
            *(s.clock.wait_stopped() for s in self._sessions.values()),
            return_exceptions=True,
        )
        logger.info("GameManager cleanup complete.")
