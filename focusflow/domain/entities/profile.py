from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Profile:
    id: str
    user_id: str
    email: str
    is_premium: bool
    stripe_customer_id: str | None
    stripe_subscription_id: str | None
    created_at: datetime
    updated_at: datetime

    def entitlement(self) -> Entitlement:
        return Entitlement(
            user_id=self.user_id,
            is_premium=self.is_premium,
            subscription_ref=self.stripe_subscription_id,
            customer_ref=self.stripe_customer_id,
        )


@dataclass(frozen=True)
class Entitlement:
    user_id: str
    is_premium: bool
    subscription_ref: str | None
    customer_ref: str | None


# Sentinel for "leave the stored value as is" in an EntitlementUpdate.
KEEP = object()


@dataclass(frozen=True)
class EntitlementUpdate:
    """Overwrite applied to a profile's entitlement fields.

    Fields set to ``KEEP`` are not written. Every update is a plain overwrite,
    so applying the same update twice yields the same row.
    """

    is_premium: bool
    subscription_ref: object = KEEP
    customer_ref: object = KEEP

    def as_columns(self) -> dict[str, object]:
        columns: dict[str, object] = {"is_premium": self.is_premium}
        if self.subscription_ref is not KEEP:
            columns["stripe_subscription_id"] = self.subscription_ref
        if self.customer_ref is not KEEP:
            columns["stripe_customer_id"] = self.customer_ref
        return columns


@dataclass(frozen=True)
class AuthenticatedUser:
    id: str
    email: str
