from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class DailyFocus:
    day: date
    label: str
    minutes: int


@dataclass(frozen=True)
class DashboardStats:
    today_work_minutes: int
    week_work_minutes: int
    today_break_minutes: int
    week_break_minutes: int
    today_cycles: int
    week_cycles: int
    focus_score: int
    streak: int
    weekly_data: list[DailyFocus]


@dataclass(frozen=True)
class WeekdayActivity:
    work_minutes: int
    sessions: int


@dataclass(frozen=True)
class ActivitySummary:
    total_work_minutes: int
    total_break_minutes: int
    total_sessions: int
    focus_score: int
    average_session_length: int
    mode_breakdown: dict[str, int]
    daily_stats: dict[str, WeekdayActivity]
