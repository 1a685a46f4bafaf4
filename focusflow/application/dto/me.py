from __future__ import annotations

from dataclasses import dataclass

from focusflow.domain.entities.feature import FeatureDecision


@dataclass(frozen=True)
class MeOutput:
    user_id: str
    email: str
    is_premium: bool
    has_billing_account: bool
    features: dict[str, FeatureDecision]
