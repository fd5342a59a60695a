"""In-memory session registry and per-session real-time frame loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field, replace

from starlette.websockets import WebSocket, WebSocketState

from snake_engine.config import GameConfig
from snake_engine.engine import GameEngine, TickOutcome
from snake_engine.scores import ScoreHistory
from snake_engine.server.models import SessionSummary
from snake_engine.server.storage import HighScoreStore
from snake_engine.snake import Direction

logger = logging.getLogger(__name__)

_MAX_SESSIONS = 100


@dataclass
class GameSession:
    """One engine plus the host state needed to drive it in real time."""

    session_id: str
    engine: GameEngine
    frame_interval: float
    subscribers: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    last_update: float = field(default_factory=time.monotonic)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _task: asyncio.Task | None = field(default=None, repr=False)

    def summary(self) -> SessionSummary:
        engine = self.engine
        return SessionSummary(
            session_id=self.session_id,
            grid_width=engine.grid.width,
            grid_height=engine.grid.height,
            paused=engine.paused,
            score=engine.score,
            tick=engine.tick_count,
        )


class SessionManager:
    """Central registry managing all game sessions.

    All sessions share one :class:`ScoreHistory`, which is saved through
    the optional :class:`HighScoreStore` whenever a run ends.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        store: HighScoreStore | None = None,
        max_sessions: int = _MAX_SESSIONS,
    ) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1.")
        self.config = config if config is not None else GameConfig()
        self.store = store
        self.scores = (
            store.load() if store is not None
            else ScoreHistory(limit=self.config.max_scores)
        )
        self._sessions: dict[str, GameSession] = {}
        self._max_sessions = max_sessions

    def create_session(
        self,
        grid_width: int | None = None,
        grid_height: int | None = None,
        seed: int | None = None,
        speed_curve: str | None = None,
        base_interval_ms: int | None = None,
    ) -> GameSession:
        """Create a session and start its frame loop.

        Must be called from within a running event loop.
        """
        if len(self._sessions) >= self._max_sessions:
            raise ValueError("Too many open sessions.")

        overrides = {
            "board_width": grid_width,
            "board_height": grid_height,
            "seed": seed,
            "speed_curve": speed_curve,
            "base_interval_ms": base_interval_ms,
        }
        config = replace(
            self.config,
            **{k: v for k, v in overrides.items() if v is not None},
        )

        session = GameSession(
            session_id=uuid.uuid4().hex[:12],
            engine=GameEngine.from_config(config, scores=self.scores),
            frame_interval=config.frame_interval,
        )
        self._sessions[session.session_id] = session
        session._task = asyncio.create_task(self._frame_loop(session))
        logger.info(
            "Session %s created (%dx%d).",
            session.session_id, config.board_width, config.board_height,
        )
        return session

    def get_session(self, session_id: str) -> GameSession | None:
        return self._sessions.get(session_id)

    def require_session(self, session_id: str) -> GameSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        return session

    def list_sessions(self) -> list[SessionSummary]:
        return [s.summary() for s in self._sessions.values()]

    async def steer(self, session: GameSession, direction: Direction) -> bool:
        """Forward a steering command. Input is ignored while paused."""
        async with session.lock:
            if session.engine.paused:
                return False
            return session.engine.steer(direction)

    async def toggle_pause(self, session: GameSession) -> bool:
        async with session.lock:
            paused = session.engine.toggle_pause()
        logger.info(
            "Session %s %s.", session.session_id,
            "paused" if paused else "resumed",
        )
        return paused

    async def close_session(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        await self._stop(session)
        logger.info("Session %s closed.", session_id)

    async def _frame_loop(self, session: GameSession) -> None:
        """Poll the engine once per frame; tick when the interval elapses."""
        try:
            while True:
                await asyncio.sleep(session.frame_interval)
                async with session.lock:
                    now = time.monotonic()
                    outcome = session.engine.maybe_tick(now - session.last_update)
                    if outcome is None:
                        continue
                    session.last_update = now
                    state = session.engine.snapshot().to_dict()
                if outcome.lost:
                    await self._on_lost(session, outcome)
                await self.broadcast(session, state)
        except asyncio.CancelledError:
            logger.info("Frame loop cancelled for session %s.", session.session_id)
        except Exception:
            logger.exception("Frame loop error in session %s.", session.session_id)

    async def _on_lost(self, session: GameSession, outcome: TickOutcome) -> None:
        logger.info(
            "Session %s run ended with score %d.",
            session.session_id, outcome.score,
        )
        if self.store is None or outcome.score <= 0:
            return
        try:
            await asyncio.to_thread(self.store.save, self.scores)
        except OSError:
            # The run is already recorded in memory; keep the session playable.
            logger.warning(
                "Failed saving high scores for session %s.",
                session.session_id, exc_info=True,
            )

    async def broadcast(self, session: GameSession, state: dict) -> None:
        """Send *state* to every connected subscriber."""
        payload = json.dumps(state, separators=(",", ":"))
        dead: list[WebSocket] = []

        for ws in list(session.subscribers):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in session.subscribers:
                session.subscribers.remove(ws)

    async def _stop(self, session: GameSession) -> None:
        task = session._task
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
        for ws in list(session.subscribers):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Session closed.")
            except Exception:
                logger.warning(
                    "Failed closing subscriber socket in session %s.",
                    session.session_id,
                )
        session.subscribers.clear()

    async def cleanup(self) -> None:
        """Cancel all frame loops and persist the score history."""
        sessions = list(self._sessions.values())
        self._sessions.clear()
        for session in sessions:
            await self._stop(session)
        if self.store is not None:
            try:
                self.store.save(self.scores)
            except OSError:
                logger.warning("Failed saving high scores on shutdown.", exc_info=True)
        logger.info("SessionManager cleanup complete.")
