from __future__ import annotations

from pydantic import BaseModel


class CreateCheckoutSessionResponse(BaseModel):
    checkout_session_id: str
    checkout_url: str


class CreatePortalSessionResponse(BaseModel):
    portal_url: str


class StripeWebhookResponse(BaseModel):
    received: bool = True
    event_type: str
    handled: bool
