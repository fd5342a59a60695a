"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field, NonNegativeInt


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    grid_width: int | None = Field(default=None, ge=5, le=256)
    grid_height: int | None = Field(default=None, ge=4, le=256)
    seed: int | None = None
    speed_curve: str | None = None
    base_interval_ms: int | None = Field(default=None, ge=20, le=2000)


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    grid_width: int
    grid_height: int
    paused: bool
    score: int
    tick: int


class SteerRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/steer."""

    direction: str = Field(min_length=1, max_length=8)


class SteerResponse(BaseModel):
    accepted: bool


class PauseResponse(BaseModel):
    paused: bool


class ScoresResponse(BaseModel):
    """Top scores, highest first."""

    scores: list[int]


class HighScoreFile(BaseModel):
    """On-disk layout of the persisted high-score list."""

    version: int = 1
    scores: list[NonNegativeInt] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
