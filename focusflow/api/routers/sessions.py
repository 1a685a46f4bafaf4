from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from focusflow.api.deps import (
    get_current_user,
    get_list_session_history_use_case,
    get_record_session_use_case,
)
from focusflow.api.schemas.sessions import RecordSessionRequest, SessionHistoryResponse, SessionResponse
from focusflow.application.dto.sessions import RecordSessionInput
from focusflow.application.use_cases.list_session_history import ListSessionHistoryUseCase
from focusflow.application.use_cases.record_session import RecordSessionUseCase
from focusflow.domain.entities.profile import AuthenticatedUser
from focusflow.domain.entities.session import Session
from focusflow.domain.exceptions import EntitlementStorageError, SessionInputError, SessionStorageError


logger = logging.getLogger(__name__)

router = APIRouter()


def _to_response(session: Session) -> SessionResponse:
    return SessionResponse(
        id=session.id,
        session_type=session.session_type,
        mode=session.mode,
        start_time=session.start_time,
        end_time=session.end_time,
        duration_seconds=session.duration_seconds,
        created_at=session.created_at,
    )


@router.post("/v1/sessions", response_model=SessionResponse, status_code=201)
def record_session(
    req: RecordSessionRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    use_case: RecordSessionUseCase = Depends(get_record_session_use_case),
):
    try:
        session = use_case.execute(
            RecordSessionInput(
                user_id=current_user.id,
                session_type=req.session_type,
                mode=req.mode,
                start_time=req.start_time,
                end_time=req.end_time,
                duration_seconds=req.duration_seconds,
            )
        )
    except SessionInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except SessionStorageError as exc:
        logger.error("sessions: record_failed user_id=%s error=%s", current_user.id, exc)
        raise HTTPException(status_code=503, detail="Please try again.") from exc

    return _to_response(session)


@router.get("/v1/sessions", response_model=SessionHistoryResponse)
def list_sessions(
    current_user: AuthenticatedUser = Depends(get_current_user),
    use_case: ListSessionHistoryUseCase = Depends(get_list_session_history_use_case),
):
    try:
        output = use_case.execute(user_id=current_user.id)
    except (SessionStorageError, EntitlementStorageError) as exc:
        raise HTTPException(status_code=503, detail="Please try again.") from exc

    return SessionHistoryResponse(
        sessions=[_to_response(session) for session in output.sessions],
        limit=output.limit,
        is_premium=output.is_premium,
    )
