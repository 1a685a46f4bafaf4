from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from focusflow.domain.entities.insight import Insight
from focusflow.domain.entities.profile import Entitlement, Profile
from focusflow.domain.entities.session import Session


def _as_str(value: Any) -> str:
    return str(value)


def _as_aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def map_row_to_profile(row: Mapping[str, Any]) -> Profile:
    return Profile(
        id=_as_str(row["id"]),
        user_id=_as_str(row["user_id"]),
        email=row["email"],
        is_premium=bool(row["is_premium"]),
        stripe_customer_id=row.get("stripe_customer_id"),
        stripe_subscription_id=row.get("stripe_subscription_id"),
        created_at=_as_aware(row["created_at"]),
        updated_at=_as_aware(row["updated_at"]),
    )


def map_row_to_entitlement(row: Mapping[str, Any]) -> Entitlement:
    return Entitlement(
        user_id=_as_str(row["user_id"]),
        is_premium=bool(row["is_premium"]),
        subscription_ref=row.get("stripe_subscription_id"),
        customer_ref=row.get("stripe_customer_id"),
    )


def map_row_to_session(row: Mapping[str, Any]) -> Session:
    return Session(
        id=_as_str(row["id"]),
        user_id=_as_str(row["user_id"]),
        session_type=row["session_type"],
        mode=row["mode"],
        start_time=_as_aware(row["start_time"]),
        end_time=_as_aware(row["end_time"]),
        duration_seconds=int(row["duration_seconds"]),
        created_at=_as_aware(row["created_at"]),
    )


def map_row_to_insight(row: Mapping[str, Any]) -> Insight:
    return Insight(
        id=_as_str(row["id"]),
        user_id=_as_str(row["user_id"]),
        insight_text=row["insight_text"],
        generated_at=_as_aware(row["generated_at"]),
    )
