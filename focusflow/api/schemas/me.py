from __future__ import annotations

from pydantic import BaseModel


class FeatureDecisionResponse(BaseModel):
    allowed: bool
    upsell: str | None = None


class MeResponse(BaseModel):
    user_id: str
    email: str
    is_premium: bool
    has_billing_account: bool
    features: dict[str, FeatureDecisionResponse]
