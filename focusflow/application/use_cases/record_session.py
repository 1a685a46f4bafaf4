from __future__ import annotations

from uuid import uuid4

from focusflow.application.dto.sessions import RecordSessionInput
from focusflow.application.ports.session_port import SessionPort
from focusflow.domain.entities.session import Session, is_focus_mode, is_session_type
from focusflow.domain.exceptions import SessionInputError

from .common import utcnow


class RecordSessionUseCase:
    def __init__(self, *, session_port: SessionPort):
        self._session_port = session_port

    def execute(self, command: RecordSessionInput) -> Session:
        if not is_session_type(command.session_type):
            raise SessionInputError(f"Unknown session type '{command.session_type}'.")
        if not is_focus_mode(command.mode):
            raise SessionInputError(f"Unknown focus mode '{command.mode}'.")
        duration = command.duration_seconds
        if not isinstance(duration, int) or isinstance(duration, bool) or duration < 0:
            raise SessionInputError("duration_seconds must be a non-negative integer.")

        return self._session_port.create_session(
            session_id=str(uuid4()),
            user_id=command.user_id,
            session_type=command.session_type,
            mode=command.mode,
            start_time=command.start_time,
            end_time=command.end_time,
            duration_seconds=duration,
            created_at=utcnow(),
        )
