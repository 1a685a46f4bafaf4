from __future__ import annotations

from datetime import date, datetime, timedelta, timezone, tzinfo
from decimal import ROUND_HALF_UP, Decimal

from focusflow.domain.entities.analytics import (
    ActivitySummary,
    DailyFocus,
    DashboardStats,
    WeekdayActivity,
)
from focusflow.domain.entities.session import Session


WEEK_DAYS = 7
STREAK_LOOKBACK_DAYS = 30

_SHORT_DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_LONG_DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def _round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def session_minutes(duration_seconds: int) -> int:
    return _round_half_up(Decimal(duration_seconds) / Decimal("60"))


def focus_score(*, work_minutes: int, break_minutes: int) -> int:
    total = work_minutes + break_minutes
    if total <= 0:
        return 0
    return _round_half_up(Decimal(work_minutes) * Decimal("100") / Decimal(total))


def local_day(value: datetime, tz: tzinfo) -> date:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(tz).date()


def compute_streak(*, work_days: set[date], today: date, lookback_days: int = STREAK_LOOKBACK_DAYS) -> int:
    """Count consecutive days with work, walking back from today.

    An empty today does not break the streak; the first empty day before it does.
    """
    streak = 0
    for offset in range(lookback_days):
        day = today - timedelta(days=offset)
        if day in work_days:
            streak += 1
        elif offset > 0:
            break
    return streak


def _sum_minutes(sessions: list[Session]) -> int:
    return sum(session_minutes(s.duration_seconds) for s in sessions)


def build_dashboard_stats(
    *,
    sessions: list[Session],
    now: datetime,
    tz: tzinfo = timezone.utc,
) -> DashboardStats:
    today = local_day(now, tz)
    week_start = now - timedelta(days=WEEK_DAYS)

    week_sessions = [s for s in sessions if s.created_at >= week_start]
    today_sessions = [s for s in week_sessions if local_day(s.created_at, tz) == today]

    week_work = [s for s in week_sessions if s.is_work]
    week_breaks = [s for s in week_sessions if not s.is_work]
    today_work = [s for s in today_sessions if s.is_work]
    today_breaks = [s for s in today_sessions if not s.is_work]

    week_work_minutes = _sum_minutes(week_work)
    week_break_minutes = _sum_minutes(week_breaks)

    work_minutes_by_day: dict[date, int] = {}
    for s in sessions:
        if not s.is_work:
            continue
        day = local_day(s.created_at, tz)
        work_minutes_by_day[day] = work_minutes_by_day.get(day, 0) + session_minutes(s.duration_seconds)

    weekly_data = []
    for offset in range(WEEK_DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        weekly_data.append(
            DailyFocus(
                day=day,
                label=_SHORT_DAY_NAMES[day.weekday()],
                minutes=work_minutes_by_day.get(day, 0),
            )
        )

    return DashboardStats(
        today_work_minutes=_sum_minutes(today_work),
        week_work_minutes=week_work_minutes,
        today_break_minutes=_sum_minutes(today_breaks),
        week_break_minutes=week_break_minutes,
        today_cycles=len(today_work),
        week_cycles=len(week_work),
        focus_score=focus_score(work_minutes=week_work_minutes, break_minutes=week_break_minutes),
        streak=compute_streak(work_days=set(work_minutes_by_day), today=today),
        weekly_data=weekly_data,
    )


def build_activity_summary(*, sessions: list[Session], tz: tzinfo = timezone.utc) -> ActivitySummary:
    work_sessions = [s for s in sessions if s.is_work]
    break_sessions = [s for s in sessions if not s.is_work]
    total_work_minutes = _sum_minutes(work_sessions)
    total_break_minutes = _sum_minutes(break_sessions)

    mode_breakdown: dict[str, int] = {}
    for s in work_sessions:
        mode_breakdown[s.mode] = mode_breakdown.get(s.mode, 0) + 1

    daily: dict[str, tuple[int, int]] = {}
    for s in sorted(sessions, key=lambda item: item.created_at):
        name = _LONG_DAY_NAMES[local_day(s.created_at, tz).weekday()]
        minutes, count = daily.get(name, (0, 0))
        if s.is_work:
            minutes += session_minutes(s.duration_seconds)
            count += 1
        daily[name] = (minutes, count)

    average = _round_half_up(Decimal(total_work_minutes) / Decimal(len(work_sessions))) if work_sessions else 0

    return ActivitySummary(
        total_work_minutes=total_work_minutes,
        total_break_minutes=total_break_minutes,
        total_sessions=len(work_sessions),
        focus_score=focus_score(work_minutes=total_work_minutes, break_minutes=total_break_minutes),
        average_session_length=average,
        mode_breakdown=mode_breakdown,
        daily_stats={
            name: WeekdayActivity(work_minutes=minutes, sessions=count)
            for name, (minutes, count) in daily.items()
        },
    )
