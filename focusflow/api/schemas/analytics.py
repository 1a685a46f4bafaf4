from __future__ import annotations

from datetime import date

from pydantic import BaseModel


class DailyFocusResponse(BaseModel):
    calendar_day: date
    day: str
    minutes: int


class RatioSliceResponse(BaseModel):
    name: str
    value: int


class DashboardResponse(BaseModel):
    today_work_minutes: int
    week_work_minutes: int
    today_break_minutes: int
    week_break_minutes: int
    today_cycles: int
    week_cycles: int
    focus_score: int
    streak: int
    weekly_data: list[DailyFocusResponse]
    work_break_ratio: list[RatioSliceResponse]
