from __future__ import annotations

from datetime import datetime, timedelta, tzinfo

from focusflow.application.ports.session_port import SessionPort
from focusflow.domain.entities.analytics import DashboardStats
from focusflow.domain.services.analytics import STREAK_LOOKBACK_DAYS, build_dashboard_stats


class GetDashboardStatsUseCase:
    def __init__(self, *, session_port: SessionPort):
        self._session_port = session_port

    def execute(self, *, user_id: str, now: datetime, tz: tzinfo) -> DashboardStats:
        # One read covers both the 7-day totals and the 30-day streak scan.
        since = now - timedelta(days=STREAK_LOOKBACK_DAYS + 1)
        sessions = self._session_port.list_sessions_since(user_id=user_id, since=since)
        return build_dashboard_stats(sessions=sessions, now=now, tz=tz)
