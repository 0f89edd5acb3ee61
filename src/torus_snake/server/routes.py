"""REST API route handlers for game lifecycle management."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from torus_snake.server.game_manager import GameManager
from torus_snake.server.models import (
    ControlResponse,
    CreateGameRequest,
    ErrorResponse,
    GameSummary,
)

router = APIRouter(
    prefix="/games",
    tags=["games"],
    responses={404: {"model": ErrorResponse}},
)


def _get_manager(request: Request) -> GameManager:
    return request.app.state.game_manager


@router.post("", status_code=201)
async def create_game(body: CreateGameRequest, request: Request) -> GameSummary:
    """Create a new idle game."""
    manager = _get_manager(request)
    try:
        session = manager.create_game(**body.model_dump())
    except OverflowError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return session.summary()


@router.get("")
async def list_games(request: Request) -> list[GameSummary]:
    """List all games."""
    return _get_manager(request).list_games()


@router.get("/{game_id}")
async def get_game(game_id: str, request: Request) -> dict:
    """Get game metadata and the full engine state."""
    game = _get_manager(request).get_game(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="Game not found.")
    return {
        **game.summary().model_dump(mode="json"),
        "state": game.engine.get_state(),
    }


@router.delete("/{game_id}", status_code=204)
async def delete_game(game_id: str, request: Request) -> None:
    """Stop and remove a game."""
    try:
        await _get_manager(request).remove_game(game_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


async def _control(request: Request, game_id: str, action: str) -> ControlResponse:
    manager = _get_manager(request)
    handlers = {
        "start": manager.start_game,
        "stop": manager.stop_game,
        "reset": manager.reset_game,
    }
    try:
        session = await handlers[action](game_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return ControlResponse(game_id=game_id, status=session.status)


@router.post("/{game_id}/start")
async def start_game(game_id: str, request: Request) -> ControlResponse:
    """Start ticking; repeated starts only move the goal."""
    return await _control(request, game_id, "start")


@router.post("/{game_id}/stop")
async def stop_game(game_id: str, request: Request) -> ControlResponse:
    """Stop ticking."""
    return await _control(request, game_id, "stop")


@router.post("/{game_id}/reset")
async def reset_game(game_id: str, request: Request) -> ControlResponse:
    """Stop and reinitialise the game."""
    return await _control(request, game_id, "reset")
