from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class InsightResponse(BaseModel):
    insight: str
    generated_at: datetime | None
    stored: bool
