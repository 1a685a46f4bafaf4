from __future__ import annotations

from datetime import datetime
from typing import Protocol

from focusflow.domain.entities.session import Session


class SessionPort(Protocol):
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
    ) -> Session:
        ...

    def list_sessions_since(self, *, user_id: str, since: datetime) -> list[Session]:
        ...

    def list_recent_sessions(self, *, user_id: str, limit: int) -> list[Session]:
        ...
