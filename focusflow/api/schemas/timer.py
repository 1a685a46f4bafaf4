from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel


class TimerSnapshotResponse(BaseModel):
    mode: str
    phase: str
    seconds_left: int
    running: bool
    start_time: datetime | None
    completed_cycles: int


class CompletePhaseRequest(BaseModel):
    snapshot: dict[str, Any]
    completed_at: datetime | None = None


class CompletePhaseResponse(BaseModel):
    finished_phase: str
    duration_seconds: int
    recorded: bool
    session_id: str | None
    next: TimerSnapshotResponse


class RestoreTimerRequest(BaseModel):
    snapshot: dict[str, Any]


class RestoreTimerResponse(BaseModel):
    restored: bool
    snapshot: TimerSnapshotResponse


class ChangeModeRequest(BaseModel):
    snapshot: dict[str, Any]
    mode: str
