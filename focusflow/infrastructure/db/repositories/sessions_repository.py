from __future__ import annotations

from datetime import datetime

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from focusflow.application.ports.session_port import SessionPort
from focusflow.domain.exceptions import SessionStorageError
from focusflow.infrastructure.db.mappers.focus_mapper import map_row_to_session


_SESSION_COLUMNS = """
    id, user_id, session_type, mode, start_time, end_time, duration_seconds, created_at
"""


class SqlSessionsRepository(SessionPort):
    def __init__(self, engine):
        self._engine = engine

    def create_session(
        self,
        *,
        session_id: str,
        user_id: str,
        session_type: str,
        mode: str,
        start_time: datetime,
        end_time: datetime,
        duration_seconds: int,
        created_at: datetime,
    ):
        sql = f"""
            INSERT INTO public.sessions (
                id, user_id, session_type, mode, start_time, end_time, duration_seconds, created_at
            ) VALUES (
                :id, :user_id, :session_type, :mode, :start_time, :end_time, :duration_seconds, :created_at
            )
            RETURNING {_SESSION_COLUMNS}
        """
        params = {
            "id": session_id,
            "user_id": user_id,
            "session_type": session_type,
            "mode": mode,
            "start_time": start_time,
            "end_time": end_time,
            "duration_seconds": duration_seconds,
            "created_at": created_at,
        }
        try:
            with self._engine.begin() as conn:
                row = conn.execute(text(sql), params).mappings().one()
        except SQLAlchemyError as exc:
            raise SessionStorageError("Failed to record session.") from exc
        return map_row_to_session(row)

    def list_sessions_since(self, *, user_id: str, since: datetime):
        sql = f"""
            SELECT {_SESSION_COLUMNS}
            FROM public.sessions
            WHERE user_id = :user_id
              AND created_at >= :since
            ORDER BY created_at ASC
        """
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(text(sql), {"user_id": user_id, "since": since}).mappings().all()
        except SQLAlchemyError as exc:
            raise SessionStorageError("Failed to read sessions.") from exc
        return [map_row_to_session(row) for row in rows]

    def list_recent_sessions(self, *, user_id: str, limit: int):
        sql = f"""
            SELECT {_SESSION_COLUMNS}
            FROM public.sessions
            WHERE user_id = :user_id
            ORDER BY created_at DESC
            LIMIT :limit
        """
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(text(sql), {"user_id": user_id, "limit": limit}).mappings().all()
        except SQLAlchemyError as exc:
            raise SessionStorageError("Failed to read session history.") from exc
        return [map_row_to_session(row) for row in rows]
