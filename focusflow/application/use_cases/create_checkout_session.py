from __future__ import annotations

from focusflow.application.dto.billing import CreateCheckoutSessionInput, CreateCheckoutSessionOutput
from focusflow.application.ports.profile_port import ProfilePort
from focusflow.application.ports.stripe_port import StripePort
from focusflow.application.use_cases.ensure_profile import EnsureProfileUseCase
from focusflow.domain.entities.profile import AuthenticatedUser

from .common import utcnow


class CreateCheckoutSessionUseCase:
    def __init__(
        self,
        *,
        ensure_profile_use_case: EnsureProfileUseCase,
        profile_port: ProfilePort,
        stripe_port: StripePort,
    ):
        self._ensure_profile_use_case = ensure_profile_use_case
        self._profile_port = profile_port
        self._stripe_port = stripe_port

    def execute(self, command: CreateCheckoutSessionInput) -> CreateCheckoutSessionOutput:
        profile = self._ensure_profile_use_case.execute(
            user=AuthenticatedUser(id=command.user_id, email=command.email)
        )

        customer_id = profile.stripe_customer_id
        if not customer_id:
            customer_id = self._stripe_port.create_customer(user_id=profile.user_id, email=profile.email)
            self._profile_port.link_stripe_customer(
                user_id=profile.user_id,
                stripe_customer_id=customer_id,
                now=utcnow(),
            )

        result = self._stripe_port.create_checkout_session(
            user_id=profile.user_id,
            customer_id=customer_id,
            success_url=command.success_url,
            cancel_url=command.cancel_url,
        )
        return CreateCheckoutSessionOutput(
            checkout_session_id=result.id,
            checkout_url=result.url,
        )
