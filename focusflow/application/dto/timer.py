from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from focusflow.domain.entities.timer import TimerSnapshot


@dataclass(frozen=True)
class CompletePhaseInput:
    user_id: str
    snapshot: TimerSnapshot
    completed_at: datetime


@dataclass(frozen=True)
class CompletePhaseOutput:
    finished_phase: str
    duration_seconds: int
    recorded: bool
    session_id: str | None
    next_snapshot: TimerSnapshot


@dataclass(frozen=True)
class RestoreTimerOutput:
    snapshot: TimerSnapshot
    restored: bool
