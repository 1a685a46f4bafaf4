from __future__ import annotations

from datetime import datetime
from typing import Protocol

from focusflow.domain.entities.profile import Entitlement, EntitlementUpdate, Profile


class ProfilePort(Protocol):
    def get_profile_by_user_id(self, *, user_id: str) -> Profile | None:
        ...

    def create_profile_if_missing(
        self,
        *,
        profile_id: str,
        user_id: str,
        email: str,
        now: datetime,
    ) -> Profile:
        ...

    def link_stripe_customer(self, *, user_id: str, stripe_customer_id: str, now: datetime) -> None:
        ...


class EntitlementReaderPort(Protocol):
    def get_entitlement(self, *, user_id: str) -> Entitlement | None:
        ...

    def find_user_id_by_customer(self, *, stripe_customer_id: str) -> str | None:
        ...

    def find_user_id_by_customer_or_subscription(
        self,
        *,
        stripe_customer_id: str | None,
        stripe_subscription_id: str | None,
    ) -> str | None:
        ...


class EntitlementWriterPort(Protocol):
    def apply_entitlement_update(self, *, user_id: str, update: EntitlementUpdate, now: datetime) -> bool:
        ...
