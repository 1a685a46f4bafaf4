from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CreateCheckoutSessionInput:
    user_id: str
    email: str
    success_url: str
    cancel_url: str


@dataclass(frozen=True)
class CreateCheckoutSessionOutput:
    checkout_session_id: str
    checkout_url: str


@dataclass(frozen=True)
class CreatePortalSessionInput:
    user_id: str
    return_url: str


@dataclass(frozen=True)
class CreatePortalSessionOutput:
    portal_url: str


@dataclass(frozen=True)
class StripeWebhookInput:
    signature: str
    payload: bytes


@dataclass(frozen=True)
class StripeWebhookOutput:
    event_type: str
    handled: bool


@dataclass(frozen=True)
class StripeCheckoutSessionResult:
    id: str
    url: str
