from __future__ import annotations

from datetime import timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import APIRouter, Depends, HTTPException

from focusflow.api.deps import get_dashboard_stats_use_case, require_feature
from focusflow.api.schemas.analytics import DailyFocusResponse, DashboardResponse, RatioSliceResponse
from focusflow.application.use_cases.common import utcnow
from focusflow.application.use_cases.get_dashboard_stats import GetDashboardStatsUseCase
from focusflow.domain.entities.profile import AuthenticatedUser
from focusflow.domain.exceptions import SessionStorageError


router = APIRouter()


def _resolve_timezone(name: str) -> tzinfo:
    if name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=f"Unknown timezone '{name}'.") from exc


@router.get("/v1/analytics/dashboard", response_model=DashboardResponse)
def get_dashboard(
    tz: str = "UTC",
    current_user: AuthenticatedUser = Depends(require_feature("analytics_dashboard")),
    use_case: GetDashboardStatsUseCase = Depends(get_dashboard_stats_use_case),
):
    zone = _resolve_timezone(tz)
    try:
        stats = use_case.execute(user_id=current_user.id, now=utcnow(), tz=zone)
    except SessionStorageError as exc:
        raise HTTPException(status_code=503, detail="Please try again.") from exc

    return DashboardResponse(
        today_work_minutes=stats.today_work_minutes,
        week_work_minutes=stats.week_work_minutes,
        today_break_minutes=stats.today_break_minutes,
        week_break_minutes=stats.week_break_minutes,
        today_cycles=stats.today_cycles,
        week_cycles=stats.week_cycles,
        focus_score=stats.focus_score,
        streak=stats.streak,
        weekly_data=[
            DailyFocusResponse(calendar_day=item.day, day=item.label, minutes=item.minutes)
            for item in stats.weekly_data
        ],
        work_break_ratio=[
            RatioSliceResponse(name="Work", value=stats.week_work_minutes),
            RatioSliceResponse(name="Break", value=stats.week_break_minutes),
        ],
    )
