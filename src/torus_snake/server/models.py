"""Pydantic models for API request/response schemas."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class GameStatus(str, enum.Enum):
    """Clock state of a game session."""

    IDLE = "idle"
    RUNNING = "running"


class CreateGameRequest(BaseModel):
    """Request body for POST /games."""

    rows: int = Field(default=16, ge=4, le=64)
    cols: int = Field(default=16, ge=4, le=64)
    snake_length: int = Field(default=4, ge=1)
    start_direction: str = "up"
    goal_reward: int = Field(default=10, ge=0)
    initial_interval_ms: int = Field(default=1000, ge=20, le=5000)
    score_policy: str = "length"
    level_policy: str = "range"
    seed: int | None = None
    input_debounce_ms: int = Field(default=200, ge=0, le=2000)


class GameSummary(BaseModel):
    """Compact game info for list endpoints."""

    game_id: str
    status: GameStatus
    tick: int
    score: int
    interval_ms: int


class ControlResponse(BaseModel):
    """Response for start/stop/reset."""

    game_id: str
    status: GameStatus


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
