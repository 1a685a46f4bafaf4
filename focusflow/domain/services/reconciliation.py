from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal
from uuid import UUID

from focusflow.domain.entities.billing_event import (
    BillingEventData,
    CheckoutCompleted,
    InvoicePaid,
    SubscriptionChanged,
    SubscriptionDeleted,
    UnhandledEvent,
)
from focusflow.domain.entities.profile import KEEP, EntitlementUpdate


LookupKind = Literal["user", "customer", "customer_or_subscription"]


@dataclass(frozen=True)
class EntitlementPlan:
    lookup: LookupKind
    update: EntitlementUpdate
    user_id: str | None = None
    customer_id: str | None = None
    subscription_id: str | None = None

    @property
    def has_lookup_key(self) -> bool:
        if self.lookup == "user":
            return _is_user_id(self.user_id)
        if self.lookup == "customer":
            return bool(self.customer_id)
        return bool(self.customer_id or self.subscription_id)


def _is_user_id(value: str | None) -> bool:
    # Profiles are keyed by the auth provider's UUID user ids.
    if not value:
        return False
    try:
        UUID(value)
    except ValueError:
        return False
    return True


def _plan_checkout_completed(event: CheckoutCompleted) -> EntitlementPlan:
    return EntitlementPlan(
        lookup="user",
        user_id=event.user_id,
        update=EntitlementUpdate(
            is_premium=True,
            subscription_ref=event.subscription_id,
            customer_ref=event.customer_id if event.customer_id else KEEP,
        ),
    )


def _plan_subscription_changed(event: SubscriptionChanged) -> EntitlementPlan:
    return EntitlementPlan(
        lookup="customer",
        customer_id=event.customer_id,
        update=EntitlementUpdate(
            is_premium=event.is_active,
            subscription_ref=event.subscription_id if event.subscription_id else KEEP,
        ),
    )


def _plan_invoice_paid(event: InvoicePaid) -> EntitlementPlan:
    return EntitlementPlan(
        lookup="customer",
        customer_id=event.customer_id,
        update=EntitlementUpdate(
            is_premium=True,
            subscription_ref=event.subscription_id if event.subscription_id else KEEP,
        ),
    )


def _plan_subscription_deleted(event: SubscriptionDeleted) -> EntitlementPlan:
    return EntitlementPlan(
        lookup="customer_or_subscription",
        customer_id=event.customer_id,
        subscription_id=event.subscription_id,
        update=EntitlementUpdate(is_premium=False, subscription_ref=None),
    )


def _plan_unhandled(event: UnhandledEvent) -> None:
    _ = event
    return None


_PLANNERS: dict[type, Callable[..., EntitlementPlan | None]] = {
    CheckoutCompleted: _plan_checkout_completed,
    SubscriptionChanged: _plan_subscription_changed,
    InvoicePaid: _plan_invoice_paid,
    SubscriptionDeleted: _plan_subscription_deleted,
    UnhandledEvent: _plan_unhandled,
}


def plan_entitlement_change(event: BillingEventData) -> EntitlementPlan | None:
    """Map a verified billing event to the profile lookup and overwrite it implies.

    Returns None for event kinds that carry no entitlement change.
    """
    planner = _PLANNERS.get(type(event))
    if planner is None:
        raise TypeError(f"No entitlement planner for {type(event).__name__}.")
    return planner(event)
