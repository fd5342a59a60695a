"""WebSocket handler for real-time play."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from snake_engine.server.session_manager import SessionManager
from snake_engine.snake import Direction

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Send steering and pause commands, receive a snapshot every tick."""
    manager = _get_manager(websocket)
    session = manager.get_session(session_id)
    if session is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    session.subscribers.append(websocket)
    logger.info("Client connected to session %s.", session_id)

    # Initial snapshot so the client can draw before the first tick.
    async with session.lock:
        state = session.engine.snapshot().to_dict()
    await websocket.send_text(json.dumps(state, separators=(",", ":")))

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue

            if msg.get("action") == "pause":
                await manager.toggle_pause(session)
                async with session.lock:
                    state = session.engine.snapshot().to_dict()
                await websocket.send_text(
                    json.dumps(state, separators=(",", ":")),
                )
                continue

            direction_str = msg.get("direction")
            if not isinstance(direction_str, str):
                continue
            try:
                direction = Direction.parse(direction_str)
            except ValueError:
                continue
            await manager.steer(session, direction)
    except WebSocketDisconnect:
        logger.info("Client disconnected from session %s.", session_id)
    finally:
        if websocket in session.subscribers:
            session.subscribers.remove(websocket)
