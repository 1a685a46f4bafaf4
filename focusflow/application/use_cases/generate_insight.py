from __future__ import annotations

from datetime import timedelta
from uuid import uuid4

from focusflow.application.dto.insights import InsightOutput
from focusflow.application.ports.insight_port import InsightGeneratorPort, InsightPort
from focusflow.application.ports.session_port import SessionPort
from focusflow.domain.services.analytics import WEEK_DAYS, build_activity_summary

from .common import utcnow


NO_DATA_INSIGHT = (
    "## No Data Yet\n\n"
    "You haven't logged any focus sessions in the past 7 days. "
    "Start using the timer to track your productivity and get personalized insights!"
)


class GenerateInsightUseCase:
    def __init__(
        self,
        *,
        session_port: SessionPort,
        insight_port: InsightPort,
        insight_generator: InsightGeneratorPort,
    ):
        self._session_port = session_port
        self._insight_port = insight_port
        self._insight_generator = insight_generator

    def execute(self, *, user_id: str) -> InsightOutput:
        now = utcnow()
        sessions = self._session_port.list_sessions_since(
            user_id=user_id,
            since=now - timedelta(days=WEEK_DAYS),
        )
        if not sessions:
            return InsightOutput(insight_text=NO_DATA_INSIGHT, generated_at=None, stored=False)

        summary = build_activity_summary(sessions=sessions)
        text = self._insight_generator.generate_insight(summary=summary)

        insight = self._insight_port.create_insight(
            insight_id=str(uuid4()),
            user_id=user_id,
            insight_text=text,
            generated_at=now,
        )
        return InsightOutput(
            insight_text=insight.insight_text,
            generated_at=insight.generated_at,
            stored=True,
        )
