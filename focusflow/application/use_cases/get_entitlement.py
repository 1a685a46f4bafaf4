from __future__ import annotations

from focusflow.application.ports.profile_port import EntitlementReaderPort
from focusflow.domain.entities.profile import Entitlement


class GetEntitlementUseCase:
    def __init__(self, *, entitlement_port: EntitlementReaderPort):
        self._entitlement_port = entitlement_port

    def execute(self, *, user_id: str) -> Entitlement:
        entitlement = self._entitlement_port.get_entitlement(user_id=user_id)
        if entitlement is None:
            return Entitlement(user_id=user_id, is_premium=False, subscription_ref=None, customer_ref=None)
        return entitlement
