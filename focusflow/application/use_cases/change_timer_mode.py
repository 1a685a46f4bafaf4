from __future__ import annotations

from typing import Any, Mapping

from focusflow.application.use_cases.get_entitlement import GetEntitlementUseCase
from focusflow.domain.entities.timer import TimerSnapshot
from focusflow.domain.services.timer_machine import change_mode, snapshot_from_dict


class ChangeTimerModeUseCase:
    def __init__(self, *, get_entitlement_use_case: GetEntitlementUseCase):
        self._get_entitlement_use_case = get_entitlement_use_case

    def execute(self, *, user_id: str, payload: Mapping[str, Any], mode: str) -> TimerSnapshot:
        current = snapshot_from_dict(payload)
        entitlement = self._get_entitlement_use_case.execute(user_id=user_id)
        return change_mode(current, mode=mode, is_premium=entitlement.is_premium)
