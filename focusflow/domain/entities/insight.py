from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Insight:
    id: str
    user_id: str
    insight_text: str
    generated_at: datetime
