from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class InsightOutput:
    insight_text: str
    generated_at: datetime | None
    stored: bool
