from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, Header, HTTPException

from focusflow.application.use_cases.change_timer_mode import ChangeTimerModeUseCase
from focusflow.application.use_cases.complete_timer_phase import CompleteTimerPhaseUseCase
from focusflow.application.use_cases.create_checkout_session import CreateCheckoutSessionUseCase
from focusflow.application.use_cases.create_portal_session import CreatePortalSessionUseCase
from focusflow.application.use_cases.ensure_profile import EnsureProfileUseCase
from focusflow.application.use_cases.generate_insight import GenerateInsightUseCase
from focusflow.application.use_cases.get_dashboard_stats import GetDashboardStatsUseCase
from focusflow.application.use_cases.get_entitlement import GetEntitlementUseCase
from focusflow.application.use_cases.get_latest_insight import GetLatestInsightUseCase
from focusflow.application.use_cases.get_me import GetMeUseCase
from focusflow.application.use_cases.list_session_history import ListSessionHistoryUseCase
from focusflow.application.use_cases.process_stripe_webhook import ProcessStripeWebhookUseCase
from focusflow.application.use_cases.record_session import RecordSessionUseCase
from focusflow.application.use_cases.restore_timer import RestoreTimerUseCase
from focusflow.domain.entities.feature import FeatureCode
from focusflow.domain.entities.profile import AuthenticatedUser
from focusflow.domain.exceptions import EntitlementStorageError
from focusflow.domain.services.feature_gate import decide_feature_access
from focusflow.infrastructure.db.engine import get_engine
from focusflow.infrastructure.db.repositories.insights_repository import SqlInsightsRepository
from focusflow.infrastructure.db.repositories.profiles_repository import SqlProfilesRepository
from focusflow.infrastructure.db.repositories.sessions_repository import SqlSessionsRepository
from focusflow.shared.config import get_settings


def _get_db_engine():
    settings = get_settings()
    if not settings.postgres_dsn:
        raise HTTPException(status_code=500, detail="POSTGRES_DSN is required.")
    return get_engine(settings.postgres_dsn)


def _get_profiles_repository() -> SqlProfilesRepository:
    return SqlProfilesRepository(_get_db_engine())


def _get_sessions_repository() -> SqlSessionsRepository:
    return SqlSessionsRepository(_get_db_engine())


def _get_insights_repository() -> SqlInsightsRepository:
    return SqlInsightsRepository(_get_db_engine())


@lru_cache(maxsize=1)
def _get_token_service() -> "JwtTokenService":
    from focusflow.infrastructure.security.token_service import JwtTokenService

    settings = get_settings()
    if not settings.jwt_secret:
        raise HTTPException(status_code=500, detail="JWT_SECRET is required.")
    return JwtTokenService(jwt_secret=settings.jwt_secret, audience=settings.jwt_audience)


@lru_cache(maxsize=1)
def _get_stripe_client() -> "StripeClient":
    from focusflow.infrastructure.clients.stripe_client import StripeClient

    settings = get_settings()
    if not settings.stripe_secret_key:
        raise HTTPException(status_code=500, detail="STRIPE_SECRET_KEY is required.")
    if not settings.stripe_webhook_secret:
        raise HTTPException(status_code=500, detail="STRIPE_WEBHOOK_SECRET is required.")
    return StripeClient(
        secret_key=settings.stripe_secret_key,
        webhook_secret=settings.stripe_webhook_secret,
        price_id=settings.stripe_price_id,
        price_cents=settings.premium_price_cents,
        currency=settings.premium_currency,
    )


@lru_cache(maxsize=1)
def _get_insight_generator() -> "OpenAiInsightClient":
    from focusflow.infrastructure.clients.openai_insight_client import OpenAiInsightClient

    settings = get_settings()
    if not settings.openai_api_key:
        raise HTTPException(status_code=500, detail="OPENAI_API_KEY is required.")
    return OpenAiInsightClient(
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        timeout_seconds=settings.openai_timeout_seconds,
        max_tokens=settings.openai_max_tokens,
    )


def get_get_entitlement_use_case() -> GetEntitlementUseCase:
    return GetEntitlementUseCase(entitlement_port=_get_profiles_repository())


def get_ensure_profile_use_case() -> EnsureProfileUseCase:
    return EnsureProfileUseCase(profile_port=_get_profiles_repository())


def get_get_me_use_case() -> GetMeUseCase:
    return GetMeUseCase(ensure_profile_use_case=get_ensure_profile_use_case())


def get_record_session_use_case() -> RecordSessionUseCase:
    return RecordSessionUseCase(session_port=_get_sessions_repository())


def get_complete_timer_phase_use_case() -> CompleteTimerPhaseUseCase:
    return CompleteTimerPhaseUseCase(
        record_session_use_case=get_record_session_use_case(),
        get_entitlement_use_case=get_get_entitlement_use_case(),
    )


def get_restore_timer_use_case() -> RestoreTimerUseCase:
    return RestoreTimerUseCase(get_entitlement_use_case=get_get_entitlement_use_case())


def get_change_timer_mode_use_case() -> ChangeTimerModeUseCase:
    return ChangeTimerModeUseCase(get_entitlement_use_case=get_get_entitlement_use_case())


def get_list_session_history_use_case() -> ListSessionHistoryUseCase:
    return ListSessionHistoryUseCase(
        session_port=_get_sessions_repository(),
        get_entitlement_use_case=get_get_entitlement_use_case(),
    )


def get_dashboard_stats_use_case() -> GetDashboardStatsUseCase:
    return GetDashboardStatsUseCase(session_port=_get_sessions_repository())


def get_generate_insight_use_case() -> GenerateInsightUseCase:
    return GenerateInsightUseCase(
        session_port=_get_sessions_repository(),
        insight_port=_get_insights_repository(),
        insight_generator=_get_insight_generator(),
    )


def get_latest_insight_use_case() -> GetLatestInsightUseCase:
    return GetLatestInsightUseCase(insight_port=_get_insights_repository())


def get_create_checkout_session_use_case() -> CreateCheckoutSessionUseCase:
    return CreateCheckoutSessionUseCase(
        ensure_profile_use_case=get_ensure_profile_use_case(),
        profile_port=_get_profiles_repository(),
        stripe_port=_get_stripe_client(),
    )


def get_create_portal_session_use_case() -> CreatePortalSessionUseCase:
    return CreatePortalSessionUseCase(
        profile_port=_get_profiles_repository(),
        stripe_port=_get_stripe_client(),
    )


def get_process_stripe_webhook_use_case() -> ProcessStripeWebhookUseCase:
    # The only factory that hands out the entitlement writer.
    repository = _get_profiles_repository()
    return ProcessStripeWebhookUseCase(
        entitlement_reader=repository,
        entitlement_writer=repository,
        stripe_port=_get_stripe_client(),
    )


def get_current_user(
    authorization: str | None = Header(None),
) -> AuthenticatedUser:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization header.")
    token = authorization.replace("Bearer ", "", 1).strip()
    if not token:
        raise HTTPException(status_code=401, detail="Missing access token.")

    token_service = _get_token_service()
    try:
        payload = token_service.decode_access_token(token=token)
    except ValueError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc

    return AuthenticatedUser(id=payload.user_id, email=payload.email)


def premium_required(*, feature: str, upsell: str | None) -> HTTPException:
    return HTTPException(
        status_code=403,
        detail={
            "message": "Premium required",
            "feature": feature,
            "upsell": upsell,
        },
    )


def require_feature(feature_code: FeatureCode):
    def _dependency(
        user: AuthenticatedUser = Depends(get_current_user),
        entitlement_use_case: GetEntitlementUseCase = Depends(get_get_entitlement_use_case),
    ) -> AuthenticatedUser:
        try:
            entitlement = entitlement_use_case.execute(user_id=user.id)
        except EntitlementStorageError as exc:
            raise HTTPException(status_code=503, detail="Please try again.") from exc

        decision = decide_feature_access(is_premium=entitlement.is_premium, feature=feature_code)
        if not decision.allowed:
            raise premium_required(feature=decision.feature, upsell=decision.upsell)
        return user

    return _dependency
