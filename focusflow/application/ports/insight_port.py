from __future__ import annotations

from datetime import datetime
from typing import Protocol

from focusflow.domain.entities.analytics import ActivitySummary
from focusflow.domain.entities.insight import Insight


class InsightPort(Protocol):
    def create_insight(
        self,
        *,
        insight_id: str,
        user_id: str,
        insight_text: str,
        generated_at: datetime,
    ) -> Insight:
        ...

    def get_latest_insight(self, *, user_id: str) -> Insight | None:
        ...


class InsightGeneratorPort(Protocol):
    def generate_insight(self, *, summary: ActivitySummary) -> str:
        ...
