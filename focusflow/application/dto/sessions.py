from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from focusflow.domain.entities.session import Session


@dataclass(frozen=True)
class RecordSessionInput:
    user_id: str
    session_type: str
    mode: str
    start_time: datetime
    end_time: datetime
    duration_seconds: int


@dataclass(frozen=True)
class SessionHistoryOutput:
    sessions: list[Session]
    limit: int
    is_premium: bool
