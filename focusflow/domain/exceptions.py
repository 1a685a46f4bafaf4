from __future__ import annotations


class DomainError(Exception):
    """Base for domain errors."""


class FeatureAccessDeniedError(DomainError):
    """Feature requires a premium entitlement."""

    def __init__(self, message: str, *, feature: str = "", upsell: str = ""):
        super().__init__(message)
        self.feature = feature
        self.upsell = upsell


class SessionInputError(DomainError):
    """Invalid parameters for a focus session."""


class SessionStorageError(DomainError):
    """Session could not be persisted or read."""


class InsightStorageError(DomainError):
    """Insight could not be persisted or read."""


class TimerStateError(DomainError):
    """Timer snapshot is invalid."""


class BillingError(DomainError):
    """Billing provider call failed or returned incomplete data."""


class WebhookSignatureError(BillingError):
    """Webhook payload failed signature verification."""


class EntitlementStorageError(DomainError):
    """Entitlement read or write failed."""


class InsightGenerationError(DomainError):
    """Text generation service failed."""


class InsightNotFoundError(DomainError):
    """User has no generated insight yet."""
