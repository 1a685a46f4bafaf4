from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from focusflow.api.deps import (
    get_generate_insight_use_case,
    get_latest_insight_use_case,
    require_feature,
)
from focusflow.api.schemas.insights import InsightResponse
from focusflow.application.use_cases.generate_insight import GenerateInsightUseCase
from focusflow.application.use_cases.get_latest_insight import GetLatestInsightUseCase
from focusflow.domain.entities.profile import AuthenticatedUser
from focusflow.domain.exceptions import (
    InsightGenerationError,
    InsightNotFoundError,
    InsightStorageError,
    SessionStorageError,
)


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/v1/insights", response_model=InsightResponse)
def generate_insight(
    current_user: AuthenticatedUser = Depends(require_feature("ai_insights")),
    use_case: GenerateInsightUseCase = Depends(get_generate_insight_use_case),
):
    try:
        output = use_case.execute(user_id=current_user.id)
    except InsightGenerationError as exc:
        logger.error("insights: generation_failed user_id=%s error=%s", current_user.id, exc)
        raise HTTPException(status_code=502, detail="Failed to generate insight") from exc
    except (SessionStorageError, InsightStorageError) as exc:
        raise HTTPException(status_code=503, detail="Please try again.") from exc

    return InsightResponse(
        insight=output.insight_text,
        generated_at=output.generated_at,
        stored=output.stored,
    )


@router.get("/v1/insights/latest", response_model=InsightResponse)
def get_latest_insight(
    current_user: AuthenticatedUser = Depends(require_feature("ai_insights")),
    use_case: GetLatestInsightUseCase = Depends(get_latest_insight_use_case),
):
    try:
        insight = use_case.execute(user_id=current_user.id)
    except InsightNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InsightStorageError as exc:
        raise HTTPException(status_code=503, detail="Please try again.") from exc

    return InsightResponse(insight=insight.insight_text, generated_at=insight.generated_at, stored=True)
