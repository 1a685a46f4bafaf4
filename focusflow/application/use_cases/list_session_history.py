from __future__ import annotations

from focusflow.application.dto.sessions import SessionHistoryOutput
from focusflow.application.ports.session_port import SessionPort
from focusflow.application.use_cases.get_entitlement import GetEntitlementUseCase


FREE_HISTORY_LIMIT = 7
PREMIUM_HISTORY_LIMIT = 100


class ListSessionHistoryUseCase:
    def __init__(
        self,
        *,
        session_port: SessionPort,
        get_entitlement_use_case: GetEntitlementUseCase,
    ):
        self._session_port = session_port
        self._get_entitlement_use_case = get_entitlement_use_case

    def execute(self, *, user_id: str) -> SessionHistoryOutput:
        entitlement = self._get_entitlement_use_case.execute(user_id=user_id)
        limit = PREMIUM_HISTORY_LIMIT if entitlement.is_premium else FREE_HISTORY_LIMIT
        sessions = self._session_port.list_recent_sessions(user_id=user_id, limit=limit)
        return SessionHistoryOutput(sessions=sessions, limit=limit, is_premium=entitlement.is_premium)
