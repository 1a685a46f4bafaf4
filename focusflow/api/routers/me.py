from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from focusflow.api.deps import get_current_user, get_get_me_use_case
from focusflow.api.schemas.me import FeatureDecisionResponse, MeResponse
from focusflow.application.use_cases.get_me import GetMeUseCase
from focusflow.domain.entities.profile import AuthenticatedUser
from focusflow.domain.exceptions import EntitlementStorageError


router = APIRouter()


@router.get("/v1/me", response_model=MeResponse)
def get_me(
    current_user: AuthenticatedUser = Depends(get_current_user),
    use_case: GetMeUseCase = Depends(get_get_me_use_case),
):
    try:
        output = use_case.execute(user=current_user)
    except EntitlementStorageError as exc:
        raise HTTPException(status_code=503, detail="Please try again.") from exc

    return MeResponse(
        user_id=output.user_id,
        email=output.email,
        is_premium=output.is_premium,
        has_billing_account=output.has_billing_account,
        features={
            code: FeatureDecisionResponse(allowed=decision.allowed, upsell=decision.upsell)
            for code, decision in output.features.items()
        },
    )
