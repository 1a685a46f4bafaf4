from __future__ import annotations

from datetime import datetime

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from focusflow.application.ports.profile_port import (
    EntitlementReaderPort,
    EntitlementWriterPort,
    ProfilePort,
)
from focusflow.domain.entities.profile import EntitlementUpdate
from focusflow.domain.exceptions import EntitlementStorageError
from focusflow.infrastructure.db.mappers.focus_mapper import map_row_to_entitlement, map_row_to_profile


_PROFILE_COLUMNS = """
    id, user_id, email, is_premium, stripe_customer_id, stripe_subscription_id, created_at, updated_at
"""

_ENTITLEMENT_COLUMNS = frozenset({"is_premium", "stripe_subscription_id", "stripe_customer_id"})


class SqlProfilesRepository(ProfilePort, EntitlementReaderPort, EntitlementWriterPort):
    def __init__(self, engine):
        self._engine = engine

    def get_profile_by_user_id(self, *, user_id: str):
        sql = f"""
            SELECT {_PROFILE_COLUMNS}
            FROM public.profiles
            WHERE user_id = :user_id
            LIMIT 1
        """
        try:
            with self._engine.connect() as conn:
                row = conn.execute(text(sql), {"user_id": user_id}).mappings().first()
        except SQLAlchemyError as exc:
            raise EntitlementStorageError("Failed to read profile.") from exc
        if row is None:
            return None
        return map_row_to_profile(row)

    def create_profile_if_missing(
        self,
        *,
        profile_id: str,
        user_id: str,
        email: str,
        now: datetime,
    ):
        insert_sql = """
            INSERT INTO public.profiles (
                id, user_id, email, is_premium, created_at, updated_at
            ) VALUES (
                :id, :user_id, :email, false, :created_at, :updated_at
            )
            ON CONFLICT (user_id) DO NOTHING
        """
        select_sql = f"""
            SELECT {_PROFILE_COLUMNS}
            FROM public.profiles
            WHERE user_id = :user_id
            LIMIT 1
        """
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    text(insert_sql),
                    {
                        "id": profile_id,
                        "user_id": user_id,
                        "email": email,
                        "created_at": now,
                        "updated_at": now,
                    },
                )
                row = conn.execute(text(select_sql), {"user_id": user_id}).mappings().one()
        except SQLAlchemyError as exc:
            raise EntitlementStorageError("Failed to create profile.") from exc
        return map_row_to_profile(row)

    def link_stripe_customer(self, *, user_id: str, stripe_customer_id: str, now: datetime) -> None:
        sql = """
            UPDATE public.profiles
            SET stripe_customer_id = :stripe_customer_id,
                updated_at = :updated_at
            WHERE user_id = :user_id
        """
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    text(sql),
                    {
                        "user_id": user_id,
                        "stripe_customer_id": stripe_customer_id,
                        "updated_at": now,
                    },
                )
        except SQLAlchemyError as exc:
            raise EntitlementStorageError("Failed to link Stripe customer.") from exc

    def get_entitlement(self, *, user_id: str):
        sql = """
            SELECT user_id, is_premium, stripe_customer_id, stripe_subscription_id
            FROM public.profiles
            WHERE user_id = :user_id
            LIMIT 1
        """
        try:
            with self._engine.connect() as conn:
                row = conn.execute(text(sql), {"user_id": user_id}).mappings().first()
        except SQLAlchemyError as exc:
            raise EntitlementStorageError("Failed to read entitlement.") from exc
        if row is None:
            return None
        return map_row_to_entitlement(row)

    def find_user_id_by_customer(self, *, stripe_customer_id: str) -> str | None:
        sql = """
            SELECT user_id
            FROM public.profiles
            WHERE stripe_customer_id = :stripe_customer_id
            LIMIT 1
        """
        try:
            with self._engine.connect() as conn:
                value = conn.execute(text(sql), {"stripe_customer_id": stripe_customer_id}).scalar()
        except SQLAlchemyError as exc:
            raise EntitlementStorageError("Failed to look up profile by customer.") from exc
        return str(value) if value is not None else None

    def find_user_id_by_customer_or_subscription(
        self,
        *,
        stripe_customer_id: str | None,
        stripe_subscription_id: str | None,
    ) -> str | None:
        sql = """
            SELECT user_id
            FROM public.profiles
            WHERE stripe_customer_id = :stripe_customer_id
               OR stripe_subscription_id = :stripe_subscription_id
            ORDER BY CASE WHEN stripe_customer_id = :stripe_customer_id THEN 0 ELSE 1 END
            LIMIT 1
        """
        try:
            with self._engine.connect() as conn:
                value = conn.execute(
                    text(sql),
                    {
                        "stripe_customer_id": stripe_customer_id,
                        "stripe_subscription_id": stripe_subscription_id,
                    },
                ).scalar()
        except SQLAlchemyError as exc:
            raise EntitlementStorageError("Failed to look up profile by subscription.") from exc
        return str(value) if value is not None else None

    def apply_entitlement_update(self, *, user_id: str, update: EntitlementUpdate, now: datetime) -> bool:
        columns = update.as_columns()
        unknown = set(columns) - _ENTITLEMENT_COLUMNS
        if unknown:
            raise ValueError(f"Not entitlement columns: {sorted(unknown)}")

        assignments = ",\n                ".join(f"{name} = :{name}" for name in sorted(columns))
        sql = f"""
            UPDATE public.profiles
            SET {assignments},
                updated_at = :updated_at
            WHERE user_id = :user_id
        """
        try:
            with self._engine.begin() as conn:
                result = conn.execute(text(sql), {**columns, "updated_at": now, "user_id": user_id})
        except SQLAlchemyError as exc:
            raise EntitlementStorageError("Failed to apply entitlement update.") from exc
        return result.rowcount > 0
