from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from focusflow.api.deps import (
    get_change_timer_mode_use_case,
    get_complete_timer_phase_use_case,
    get_current_user,
    get_restore_timer_use_case,
    premium_required,
)
from focusflow.api.schemas.timer import (
    ChangeModeRequest,
    CompletePhaseRequest,
    CompletePhaseResponse,
    RestoreTimerRequest,
    RestoreTimerResponse,
    TimerSnapshotResponse,
)
from focusflow.application.dto.timer import CompletePhaseInput
from focusflow.application.use_cases.change_timer_mode import ChangeTimerModeUseCase
from focusflow.application.use_cases.common import utcnow
from focusflow.application.use_cases.complete_timer_phase import CompleteTimerPhaseUseCase
from focusflow.application.use_cases.restore_timer import RestoreTimerUseCase
from focusflow.domain.entities.profile import AuthenticatedUser
from focusflow.domain.entities.timer import TimerSnapshot
from focusflow.domain.exceptions import EntitlementStorageError, FeatureAccessDeniedError, TimerStateError
from focusflow.domain.services.timer_machine import snapshot_from_dict


router = APIRouter()


def _snapshot_response(snapshot: TimerSnapshot) -> TimerSnapshotResponse:
    return TimerSnapshotResponse(
        mode=snapshot.mode,
        phase=snapshot.phase,
        seconds_left=snapshot.seconds_left,
        running=snapshot.running,
        start_time=snapshot.start_time,
        completed_cycles=snapshot.completed_cycles,
    )


@router.post("/v1/timer/complete", response_model=CompletePhaseResponse)
def complete_phase(
    req: CompletePhaseRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    use_case: CompleteTimerPhaseUseCase = Depends(get_complete_timer_phase_use_case),
):
    try:
        snapshot = snapshot_from_dict(req.snapshot)
        output = use_case.execute(
            CompletePhaseInput(
                user_id=current_user.id,
                snapshot=snapshot,
                completed_at=req.completed_at or utcnow(),
            )
        )
    except TimerStateError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except FeatureAccessDeniedError as exc:
        raise premium_required(feature=exc.feature, upsell=exc.upsell) from exc
    except EntitlementStorageError as exc:
        raise HTTPException(status_code=503, detail="Please try again.") from exc

    return CompletePhaseResponse(
        finished_phase=output.finished_phase,
        duration_seconds=output.duration_seconds,
        recorded=output.recorded,
        session_id=output.session_id,
        next=_snapshot_response(output.next_snapshot),
    )


@router.post("/v1/timer/mode", response_model=TimerSnapshotResponse)
def change_timer_mode(
    req: ChangeModeRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    use_case: ChangeTimerModeUseCase = Depends(get_change_timer_mode_use_case),
):
    try:
        snapshot = use_case.execute(user_id=current_user.id, payload=req.snapshot, mode=req.mode)
    except TimerStateError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except FeatureAccessDeniedError as exc:
        raise premium_required(feature=exc.feature, upsell=exc.upsell) from exc
    except EntitlementStorageError as exc:
        raise HTTPException(status_code=503, detail="Please try again.") from exc

    return _snapshot_response(snapshot)


@router.post("/v1/timer/restore", response_model=RestoreTimerResponse)
def restore_timer(
    req: RestoreTimerRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    use_case: RestoreTimerUseCase = Depends(get_restore_timer_use_case),
):
    try:
        output = use_case.execute(user_id=current_user.id, payload=req.snapshot)
    except TimerStateError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except EntitlementStorageError as exc:
        raise HTTPException(status_code=503, detail="Please try again.") from exc

    return RestoreTimerResponse(restored=output.restored, snapshot=_snapshot_response(output.snapshot))
