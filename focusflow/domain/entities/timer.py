from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from focusflow.domain.entities.session import FocusMode, SessionType


LONG_BREAK_EVERY = 4


@dataclass(frozen=True)
class TimerConfig:
    label: str
    work_seconds: int
    short_break_seconds: int
    long_break_seconds: int | None
    is_premium: bool

    def duration_for(self, phase: SessionType) -> int:
        if phase == "work":
            return self.work_seconds
        if phase == "long_break" and self.long_break_seconds:
            return self.long_break_seconds
        return self.short_break_seconds


TIMER_CONFIGS: dict[str, TimerConfig] = {
    "pomodoro": TimerConfig(
        label="Pomodoro",
        work_seconds=25 * 60,
        short_break_seconds=5 * 60,
        long_break_seconds=15 * 60,
        is_premium=False,
    ),
    "deep": TimerConfig(
        label="Deep Work",
        work_seconds=50 * 60,
        short_break_seconds=10 * 60,
        long_break_seconds=None,
        is_premium=True,
    ),
    "52-17": TimerConfig(
        label="52/17",
        work_seconds=52 * 60,
        short_break_seconds=17 * 60,
        long_break_seconds=None,
        is_premium=True,
    ),
    "ultradian": TimerConfig(
        label="Ultradian",
        work_seconds=90 * 60,
        short_break_seconds=20 * 60,
        long_break_seconds=None,
        is_premium=True,
    ),
}


@dataclass(frozen=True)
class TimerSnapshot:
    mode: FocusMode
    phase: SessionType
    seconds_left: int
    running: bool
    start_time: datetime | None
    completed_cycles: int
