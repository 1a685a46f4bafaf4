from __future__ import annotations

from focusflow.application.dto.me import MeOutput
from focusflow.application.use_cases.ensure_profile import EnsureProfileUseCase
from focusflow.domain.entities.profile import AuthenticatedUser
from focusflow.domain.services.feature_gate import decide_all_features


class GetMeUseCase:
    def __init__(self, *, ensure_profile_use_case: EnsureProfileUseCase):
        self._ensure_profile_use_case = ensure_profile_use_case

    def execute(self, *, user: AuthenticatedUser) -> MeOutput:
        profile = self._ensure_profile_use_case.execute(user=user)
        return MeOutput(
            user_id=profile.user_id,
            email=profile.email,
            is_premium=profile.is_premium,
            has_billing_account=bool(profile.stripe_customer_id),
            features=decide_all_features(is_premium=profile.is_premium),
        )
