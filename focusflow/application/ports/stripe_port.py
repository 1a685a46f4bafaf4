from __future__ import annotations

from typing import Protocol

from focusflow.application.dto.billing import StripeCheckoutSessionResult
from focusflow.domain.entities.billing_event import BillingEvent


class StripePort(Protocol):
    def create_customer(self, *, user_id: str, email: str) -> str:
        ...

    def create_checkout_session(
        self,
        *,
        user_id: str,
        customer_id: str,
        success_url: str,
        cancel_url: str,
    ) -> StripeCheckoutSessionResult:
        ...

    def create_portal_session(self, *, customer_id: str, return_url: str) -> str:
        ...

    def verify_webhook(self, *, signature: str, payload: bytes) -> BillingEvent:
        ...
