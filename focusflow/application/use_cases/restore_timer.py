from __future__ import annotations

from typing import Any, Mapping

from focusflow.application.dto.timer import RestoreTimerOutput
from focusflow.application.use_cases.get_entitlement import GetEntitlementUseCase
from focusflow.domain.entities.timer import TIMER_CONFIGS
from focusflow.domain.services.timer_machine import restore, snapshot_from_dict


class RestoreTimerUseCase:
    def __init__(self, *, get_entitlement_use_case: GetEntitlementUseCase):
        self._get_entitlement_use_case = get_entitlement_use_case

    def execute(self, *, user_id: str, payload: Mapping[str, Any]) -> RestoreTimerOutput:
        saved = snapshot_from_dict(payload)
        entitlement = self._get_entitlement_use_case.execute(user_id=user_id)
        return RestoreTimerOutput(
            snapshot=restore(saved, is_premium=entitlement.is_premium),
            restored=entitlement.is_premium or not TIMER_CONFIGS[saved.mode].is_premium,
        )
