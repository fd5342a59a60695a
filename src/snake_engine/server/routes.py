"""REST API route handlers for session lifecycle and control."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response

from snake_engine.server.models import (
    CreateSessionRequest,
    PauseResponse,
    ScoresResponse,
    SessionSummary,
    SteerRequest,
    SteerResponse,
)
from snake_engine.server.session_manager import GameSession, SessionManager
from snake_engine.snake import Direction

router = APIRouter(tags=["sessions"])


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def _get_session(request: Request, session_id: str) -> GameSession:
    try:
        return _get_manager(request).require_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc


@router.post("/sessions", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create a new, paused game session."""
    manager = _get_manager(request)
    try:
        session = manager.create_session(
            grid_width=body.grid_width,
            grid_height=body.grid_height,
            seed=body.seed,
            speed_curve=body.speed_curve,
            base_interval_ms=body.base_interval_ms,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return session.summary()


@router.get("/sessions")
async def list_sessions(request: Request) -> list[SessionSummary]:
    return _get_manager(request).list_sessions()


@router.get("/sessions/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Return the current snapshot of a session."""
    session = _get_session(request, session_id)
    async with session.lock:
        return session.engine.snapshot().to_dict()


@router.post("/sessions/{session_id}/steer")
async def steer(
    session_id: str, body: SteerRequest, request: Request,
) -> SteerResponse:
    session = _get_session(request, session_id)
    try:
        direction = Direction.parse(body.direction)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    accepted = await _get_manager(request).steer(session, direction)
    return SteerResponse(accepted=accepted)


@router.post("/sessions/{session_id}/pause")
async def toggle_pause(session_id: str, request: Request) -> PauseResponse:
    session = _get_session(request, session_id)
    paused = await _get_manager(request).toggle_pause(session)
    return PauseResponse(paused=paused)


@router.delete("/sessions/{session_id}", status_code=204)
async def close_session(session_id: str, request: Request) -> Response:
    try:
        await _get_manager(request).close_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc
    return Response(status_code=204)


@router.get("/scores")
async def get_scores(request: Request) -> ScoresResponse:
    """Top scores across all sessions, highest first."""
    return ScoresResponse(scores=_get_manager(request).scores.to_list())
