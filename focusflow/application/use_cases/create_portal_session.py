from __future__ import annotations

from focusflow.application.dto.billing import CreatePortalSessionInput, CreatePortalSessionOutput
from focusflow.application.ports.profile_port import ProfilePort
from focusflow.application.ports.stripe_port import StripePort
from focusflow.domain.exceptions import BillingError


class CreatePortalSessionUseCase:
    def __init__(self, *, profile_port: ProfilePort, stripe_port: StripePort):
        self._profile_port = profile_port
        self._stripe_port = stripe_port

    def execute(self, command: CreatePortalSessionInput) -> CreatePortalSessionOutput:
        profile = self._profile_port.get_profile_by_user_id(user_id=command.user_id)
        if profile is None or not profile.stripe_customer_id:
            raise BillingError("No billing account found for this user.")

        url = self._stripe_port.create_portal_session(
            customer_id=profile.stripe_customer_id,
            return_url=command.return_url,
        )
        return CreatePortalSessionOutput(portal_url=url)
