from __future__ import annotations

from datetime import datetime

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from focusflow.application.ports.insight_port import InsightPort
from focusflow.domain.exceptions import InsightStorageError
from focusflow.infrastructure.db.mappers.focus_mapper import map_row_to_insight


class SqlInsightsRepository(InsightPort):
    def __init__(self, engine):
        self._engine = engine

    def create_insight(
        self,
        *,
        insight_id: str,
        user_id: str,
        insight_text: str,
        generated_at: datetime,
    ):
        sql = """
            INSERT INTO public.ai_insights (id, user_id, insight_text, generated_at)
            VALUES (:id, :user_id, :insight_text, :generated_at)
            RETURNING id, user_id, insight_text, generated_at
        """
        try:
            with self._engine.begin() as conn:
                row = conn.execute(
                    text(sql),
                    {
                        "id": insight_id,
                        "user_id": user_id,
                        "insight_text": insight_text,
                        "generated_at": generated_at,
                    },
                ).mappings().one()
        except SQLAlchemyError as exc:
            raise InsightStorageError("Failed to store insight.") from exc
        return map_row_to_insight(row)

    def get_latest_insight(self, *, user_id: str):
        sql = """
            SELECT id, user_id, insight_text, generated_at
            FROM public.ai_insights
            WHERE user_id = :user_id
            ORDER BY generated_at DESC
            LIMIT 1
        """
        try:
            with self._engine.connect() as conn:
                row = conn.execute(text(sql), {"user_id": user_id}).mappings().first()
        except SQLAlchemyError as exc:
            raise InsightStorageError("Failed to read insights.") from exc
        if row is None:
            return None
        return map_row_to_insight(row)
