from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


FeatureCode = Literal["premium_modes", "analytics_dashboard", "ai_insights", "unlimited_history"]

FEATURE_LABELS: dict[str, str] = {
    "premium_modes": "Advanced focus modes",
    "analytics_dashboard": "The Productivity Dashboard",
    "ai_insights": "AI Insights",
    "unlimited_history": "Unlimited session history",
}


@dataclass(frozen=True)
class FeatureDecision:
    feature: str
    allowed: bool
    upsell: str | None
