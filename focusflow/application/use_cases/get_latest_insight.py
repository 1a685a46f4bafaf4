from __future__ import annotations

from focusflow.application.ports.insight_port import InsightPort
from focusflow.domain.entities.insight import Insight
from focusflow.domain.exceptions import InsightNotFoundError


class GetLatestInsightUseCase:
    def __init__(self, *, insight_port: InsightPort):
        self._insight_port = insight_port

    def execute(self, *, user_id: str) -> Insight:
        insight = self._insight_port.get_latest_insight(user_id=user_id)
        if insight is None:
            raise InsightNotFoundError("No insight generated yet.")
        return insight
