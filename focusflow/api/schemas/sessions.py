from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class RecordSessionRequest(BaseModel):
    session_type: str = Field(..., min_length=1)
    mode: str = Field(..., min_length=1)
    start_time: datetime
    end_time: datetime
    duration_seconds: int


class SessionResponse(BaseModel):
    id: str
    session_type: str
    mode: str
    start_time: datetime
    end_time: datetime
    duration_seconds: int
    created_at: datetime


class SessionHistoryResponse(BaseModel):
    sessions: list[SessionResponse]
    limit: int
    is_premium: bool
