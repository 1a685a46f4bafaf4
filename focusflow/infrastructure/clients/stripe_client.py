from __future__ import annotations

import json
import logging
from typing import Any

import stripe

from focusflow.application.dto.billing import StripeCheckoutSessionResult
from focusflow.application.ports.stripe_port import StripePort
from focusflow.domain.entities.billing_event import (
    BillingEvent,
    CheckoutCompleted,
    InvoicePaid,
    SubscriptionChanged,
    SubscriptionDeleted,
    UnhandledEvent,
)
from focusflow.domain.exceptions import BillingError, WebhookSignatureError


logger = logging.getLogger(__name__)

SUBSCRIPTION_CHANGED_EVENTS = frozenset({"customer.subscription.created", "customer.subscription.updated"})
INVOICE_PAID_EVENTS = frozenset({"invoice.paid", "invoice.payment_succeeded", "invoice_payment.paid"})

PREMIUM_PRODUCT_NAME = "FocusFlow Premium"
PREMIUM_PRODUCT_DESCRIPTION = (
    "Unlock all premium features including advanced focus modes, AI insights, and detailed analytics."
)


class StripeClient(StripePort):
    def __init__(
        self,
        *,
        secret_key: str,
        webhook_secret: str,
        price_id: str = "",
        price_cents: int = 999,
        currency: str = "usd",
    ):
        stripe.api_key = secret_key
        self._webhook_secret = webhook_secret
        self._price_id = price_id
        self._price_cents = price_cents
        self._currency = currency

    def create_customer(self, *, user_id: str, email: str) -> str:
        try:
            customer = stripe.Customer.create(email=email, metadata={"user_id": user_id})
        except Exception as exc:  # pragma: no cover - external API
            raise BillingError("Failed to create Stripe customer.") from exc

        customer_id = getattr(customer, "id", None)
        if not customer_id:
            raise BillingError("Stripe customer id is missing.")
        return str(customer_id)

    def create_checkout_session(
        self,
        *,
        user_id: str,
        customer_id: str,
        success_url: str,
        cancel_url: str,
    ) -> StripeCheckoutSessionResult:
        payload: dict = {
            "mode": "subscription",
            "customer": customer_id,
            "line_items": [self._line_item()],
            "success_url": success_url,
            "cancel_url": cancel_url,
            "client_reference_id": user_id,
            "metadata": {"user_id": user_id},
        }

        try:
            session = stripe.checkout.Session.create(**payload)
        except Exception as exc:  # pragma: no cover - external API
            raise BillingError("Failed to create Stripe checkout session.") from exc

        session_id = getattr(session, "id", None)
        session_url = getattr(session, "url", None)
        if not session_id or not session_url:
            raise BillingError("Stripe checkout session response is incomplete.")

        return StripeCheckoutSessionResult(id=str(session_id), url=str(session_url))

    def create_portal_session(self, *, customer_id: str, return_url: str) -> str:
        try:
            session = stripe.billing_portal.Session.create(customer=customer_id, return_url=return_url)
        except Exception as exc:  # pragma: no cover - external API
            raise BillingError("Failed to create Stripe billing portal session.") from exc

        url = getattr(session, "url", None)
        if not url:
            raise BillingError("Stripe billing portal response is incomplete.")
        return str(url)

    def verify_webhook(self, *, signature: str, payload: bytes) -> BillingEvent:
        try:
            body = payload.decode("utf-8") if isinstance(payload, bytes) else str(payload)
            stripe.WebhookSignature.verify_header(
                body,
                signature,
                self._webhook_secret,
                tolerance=stripe.Webhook.DEFAULT_TOLERANCE,
            )
        except Exception as exc:
            logger.warning("stripe_client: signature_verification_failed error=%s", exc)
            raise WebhookSignatureError("Invalid Stripe webhook signature.") from exc

        try:
            event = json.loads(body)
        except ValueError as exc:
            raise WebhookSignatureError("Stripe webhook payload is not valid JSON.") from exc

        return parse_billing_event(event)

    def _line_item(self) -> dict:
        if self._price_id:
            return {"price": self._price_id, "quantity": 1}
        return {
            "price_data": {
                "currency": self._currency,
                "product_data": {
                    "name": PREMIUM_PRODUCT_NAME,
                    "description": PREMIUM_PRODUCT_DESCRIPTION,
                },
                "unit_amount": self._price_cents,
                "recurring": {"interval": "month"},
            },
            "quantity": 1,
        }


def parse_billing_event(event: dict[str, Any]) -> BillingEvent:
    event_type = str(event.get("type", ""))
    event_id = str(event.get("id", ""))
    data_object = (event.get("data") or {}).get("object") or {}

    if event_type == "checkout.session.completed":
        metadata = data_object.get("metadata") or {}
        return BillingEvent(
            event_type=event_type,
            data=CheckoutCompleted(
                event_id=event_id,
                user_id=metadata.get("user_id") or data_object.get("client_reference_id"),
                customer_id=_ref(data_object.get("customer")),
                subscription_id=_ref(data_object.get("subscription")),
            ),
        )

    if event_type in SUBSCRIPTION_CHANGED_EVENTS:
        return BillingEvent(
            event_type=event_type,
            data=SubscriptionChanged(
                event_id=event_id,
                customer_id=_ref(data_object.get("customer")),
                subscription_id=_ref(data_object.get("id")),
                status=str(data_object.get("status") or ""),
            ),
        )

    if event_type in INVOICE_PAID_EVENTS:
        return BillingEvent(
            event_type=event_type,
            data=InvoicePaid(
                event_id=event_id,
                customer_id=_ref(data_object.get("customer")),
                subscription_id=_invoice_subscription_id(data_object),
            ),
        )

    if event_type == "customer.subscription.deleted":
        return BillingEvent(
            event_type=event_type,
            data=SubscriptionDeleted(
                event_id=event_id,
                customer_id=_ref(data_object.get("customer")),
                subscription_id=_ref(data_object.get("id")),
            ),
        )

    return BillingEvent(event_type=event_type, data=UnhandledEvent(event_id=event_id))


def _ref(value: Any) -> str | None:
    """Stripe references arrive either as an id string or as an expanded object."""
    if isinstance(value, str):
        return value or None
    if isinstance(value, dict):
        ref = value.get("id")
        return str(ref) if ref else None
    return None


def _invoice_subscription_id(invoice: dict[str, Any]) -> str | None:
    subscription_id = _ref(invoice.get("subscription"))
    if subscription_id:
        return subscription_id
    # Newer API versions nest the subscription under the invoice parent.
    parent = invoice.get("parent") or {}
    details = parent.get("subscription_details") or {}
    return _ref(details.get("subscription"))
