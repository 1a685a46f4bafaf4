from __future__ import annotations

from dataclasses import dataclass
from typing import Union


ACTIVE_SUBSCRIPTION_STATUSES = frozenset({"active", "trialing"})


@dataclass(frozen=True)
class CheckoutCompleted:
    event_id: str
    user_id: str | None
    customer_id: str | None
    subscription_id: str | None


@dataclass(frozen=True)
class SubscriptionChanged:
    event_id: str
    customer_id: str | None
    subscription_id: str | None
    status: str

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_SUBSCRIPTION_STATUSES


@dataclass(frozen=True)
class InvoicePaid:
    event_id: str
    customer_id: str | None
    subscription_id: str | None


@dataclass(frozen=True)
class SubscriptionDeleted:
    event_id: str
    customer_id: str | None
    subscription_id: str | None


@dataclass(frozen=True)
class UnhandledEvent:
    event_id: str


BillingEventData = Union[
    CheckoutCompleted,
    SubscriptionChanged,
    InvoicePaid,
    SubscriptionDeleted,
    UnhandledEvent,
]


@dataclass(frozen=True)
class BillingEvent:
    event_type: str
    data: BillingEventData
