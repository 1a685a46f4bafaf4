from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal


SessionType = Literal["work", "short_break", "long_break"]
FocusMode = Literal["pomodoro", "deep", "52-17", "ultradian"]

SESSION_TYPES: tuple[str, ...] = ("work", "short_break", "long_break")
FOCUS_MODES: tuple[str, ...] = ("pomodoro", "deep", "52-17", "ultradian")


@dataclass(frozen=True)
class Session:
    id: str
    user_id: str
    session_type: SessionType
    mode: FocusMode
    start_time: datetime
    end_time: datetime
    duration_seconds: int
    created_at: datetime

    @property
    def is_work(self) -> bool:
        return self.session_type == "work"


def is_session_type(value: str) -> bool:
    return value in SESSION_TYPES


def is_focus_mode(value: str) -> bool:
    return value in FOCUS_MODES
