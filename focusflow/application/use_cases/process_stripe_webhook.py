from __future__ import annotations

import logging

from focusflow.application.dto.billing import StripeWebhookInput, StripeWebhookOutput
from focusflow.application.ports.profile_port import EntitlementReaderPort, EntitlementWriterPort
from focusflow.application.ports.stripe_port import StripePort
from focusflow.domain.services.reconciliation import EntitlementPlan, plan_entitlement_change

from .common import utcnow


logger = logging.getLogger(__name__)


class ProcessStripeWebhookUseCase:
    """Reconciles the premium entitlement from verified Stripe events.

    Holds no state between calls. Signature failures propagate before any
    profile is read; lookup misses are acknowledged without a write; storage
    failures propagate so the endpoint answers non-2xx and Stripe redelivers.
    """

    def __init__(
        self,
        *,
        entitlement_reader: EntitlementReaderPort,
        entitlement_writer: EntitlementWriterPort,
        stripe_port: StripePort,
    ):
        self._entitlement_reader = entitlement_reader
        self._entitlement_writer = entitlement_writer
        self._stripe_port = stripe_port

    def execute(self, command: StripeWebhookInput) -> StripeWebhookOutput:
        event = self._stripe_port.verify_webhook(signature=command.signature, payload=command.payload)
        logger.info(
            "stripe_webhook: verified event_type=%s event_id=%s",
            event.event_type,
            event.data.event_id,
        )

        plan = plan_entitlement_change(event.data)
        if plan is None:
            logger.info("stripe_webhook: unhandled event_type=%s", event.event_type)
            return StripeWebhookOutput(event_type=event.event_type, handled=False)

        if not plan.has_lookup_key:
            logger.warning(
                "stripe_webhook: missing_lookup_key event_type=%s lookup=%s",
                event.event_type,
                plan.lookup,
            )
            return StripeWebhookOutput(event_type=event.event_type, handled=False)

        user_id = self._resolve_user_id(plan)
        if user_id is None:
            logger.warning(
                "stripe_webhook: profile_not_found event_type=%s lookup=%s customer_id=%s subscription_id=%s",
                event.event_type,
                plan.lookup,
                plan.customer_id,
                plan.subscription_id,
            )
            return StripeWebhookOutput(event_type=event.event_type, handled=False)

        applied = self._entitlement_writer.apply_entitlement_update(
            user_id=user_id,
            update=plan.update,
            now=utcnow(),
        )
        if not applied:
            logger.warning(
                "stripe_webhook: profile_not_found event_type=%s user_id=%s",
                event.event_type,
                user_id,
            )
            return StripeWebhookOutput(event_type=event.event_type, handled=False)

        logger.info(
            "stripe_webhook: entitlement_applied event_type=%s user_id=%s is_premium=%s",
            event.event_type,
            user_id,
            plan.update.is_premium,
        )
        return StripeWebhookOutput(event_type=event.event_type, handled=True)

    def _resolve_user_id(self, plan: EntitlementPlan) -> str | None:
        if plan.lookup == "user":
            return plan.user_id
        if plan.lookup == "customer":
            return self._entitlement_reader.find_user_id_by_customer(stripe_customer_id=plan.customer_id)
        return self._entitlement_reader.find_user_id_by_customer_or_subscription(
            stripe_customer_id=plan.customer_id,
            stripe_subscription_id=plan.subscription_id,
        )
