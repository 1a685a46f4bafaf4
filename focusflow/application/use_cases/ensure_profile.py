from __future__ import annotations

from uuid import uuid4

from focusflow.application.ports.profile_port import ProfilePort
from focusflow.domain.entities.profile import AuthenticatedUser, Profile

from .common import utcnow


class EnsureProfileUseCase:
    """Upsert-on-login: returns the user's profile, creating a free one if absent."""

    def __init__(self, *, profile_port: ProfilePort):
        self._profile_port = profile_port

    def execute(self, *, user: AuthenticatedUser) -> Profile:
        profile = self._profile_port.get_profile_by_user_id(user_id=user.id)
        if profile is not None:
            return profile
        return self._profile_port.create_profile_if_missing(
            profile_id=str(uuid4()),
            user_id=user.id,
            email=user.email,
            now=utcnow(),
        )
