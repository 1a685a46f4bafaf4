from __future__ import annotations

import logging

from focusflow.application.dto.sessions import RecordSessionInput
from focusflow.application.dto.timer import CompletePhaseInput, CompletePhaseOutput
from focusflow.application.use_cases.get_entitlement import GetEntitlementUseCase
from focusflow.application.use_cases.record_session import RecordSessionUseCase
from focusflow.domain.entities.timer import TIMER_CONFIGS
from focusflow.domain.exceptions import DomainError
from focusflow.domain.services.timer_machine import complete_phase, ensure_mode_allowed


logger = logging.getLogger(__name__)


class CompleteTimerPhaseUseCase:
    def __init__(
        self,
        *,
        record_session_use_case: RecordSessionUseCase,
        get_entitlement_use_case: GetEntitlementUseCase,
    ):
        self._record_session_use_case = record_session_use_case
        self._get_entitlement_use_case = get_entitlement_use_case

    def execute(self, command: CompletePhaseInput) -> CompletePhaseOutput:
        mode = command.snapshot.mode
        if TIMER_CONFIGS[mode].is_premium:
            entitlement = self._get_entitlement_use_case.execute(user_id=command.user_id)
            ensure_mode_allowed(mode, is_premium=entitlement.is_premium)

        completion = complete_phase(command.snapshot, now=command.completed_at)

        session_id = None
        if completion.should_record:
            try:
                session = self._record_session_use_case.execute(
                    RecordSessionInput(
                        user_id=command.user_id,
                        session_type=completion.phase,
                        mode=completion.mode,
                        start_time=completion.start_time,
                        end_time=completion.end_time,
                        duration_seconds=completion.duration_seconds,
                    )
                )
                session_id = session.id
            except DomainError as exc:
                # The timer keeps advancing; the phase is simply not logged.
                logger.warning(
                    "complete_timer_phase: record_failed user_id=%s phase=%s mode=%s error=%s",
                    command.user_id,
                    completion.phase,
                    completion.mode,
                    exc,
                )

        return CompletePhaseOutput(
            finished_phase=completion.phase,
            duration_seconds=completion.duration_seconds,
            recorded=session_id is not None,
            session_id=session_id,
            next_snapshot=completion.next_snapshot,
        )
