from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Request

from focusflow.api.deps import (
    get_create_checkout_session_use_case,
    get_create_portal_session_use_case,
    get_current_user,
    get_process_stripe_webhook_use_case,
)
from focusflow.api.schemas.billing import (
    CreateCheckoutSessionResponse,
    CreatePortalSessionResponse,
    StripeWebhookResponse,
)
from focusflow.application.dto.billing import (
    CreateCheckoutSessionInput,
    CreatePortalSessionInput,
    StripeWebhookInput,
)
from focusflow.application.use_cases.create_checkout_session import CreateCheckoutSessionUseCase
from focusflow.application.use_cases.create_portal_session import CreatePortalSessionUseCase
from focusflow.application.use_cases.process_stripe_webhook import ProcessStripeWebhookUseCase
from focusflow.domain.entities.profile import AuthenticatedUser
from focusflow.domain.exceptions import BillingError, EntitlementStorageError, WebhookSignatureError
from focusflow.shared.config import get_settings


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/v1/billing/checkout-session", response_model=CreateCheckoutSessionResponse)
def create_checkout_session(
    current_user: AuthenticatedUser = Depends(get_current_user),
    use_case: CreateCheckoutSessionUseCase = Depends(get_create_checkout_session_use_case),
):
    settings = get_settings()
    try:
        output = use_case.execute(
            CreateCheckoutSessionInput(
                user_id=current_user.id,
                email=current_user.email,
                success_url=settings.stripe_success_url,
                cancel_url=settings.stripe_cancel_url,
            )
        )
    except BillingError as exc:
        logger.error("billing: checkout_failed user_id=%s error=%s", current_user.id, exc)
        raise HTTPException(status_code=502, detail="Failed to create checkout session") from exc
    except EntitlementStorageError as exc:
        raise HTTPException(status_code=503, detail="Failed to create checkout session") from exc

    return CreateCheckoutSessionResponse(
        checkout_session_id=output.checkout_session_id,
        checkout_url=output.checkout_url,
    )


@router.post("/v1/billing/portal-session", response_model=CreatePortalSessionResponse)
def create_portal_session(
    current_user: AuthenticatedUser = Depends(get_current_user),
    use_case: CreatePortalSessionUseCase = Depends(get_create_portal_session_use_case),
):
    settings = get_settings()
    try:
        output = use_case.execute(
            CreatePortalSessionInput(
                user_id=current_user.id,
                return_url=settings.stripe_portal_return_url,
            )
        )
    except BillingError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except EntitlementStorageError as exc:
        raise HTTPException(status_code=503, detail="Failed to create portal session") from exc

    return CreatePortalSessionResponse(portal_url=output.portal_url)


@router.post("/v1/billing/webhook", response_model=StripeWebhookResponse)
async def stripe_webhook(
    request: Request,
    stripe_signature: str | None = Header(None, alias="Stripe-Signature"),
    use_case: ProcessStripeWebhookUseCase = Depends(get_process_stripe_webhook_use_case),
):
    if not stripe_signature:
        logger.warning("billing: webhook_missing_signature")
        raise HTTPException(status_code=400, detail="No signature")

    payload = await request.body()
    try:
        output = use_case.execute(
            StripeWebhookInput(
                signature=stripe_signature,
                payload=payload,
            )
        )
    except WebhookSignatureError as exc:
        raise HTTPException(status_code=400, detail="Invalid signature") from exc
    except Exception as exc:  # noqa: BLE001
        logger.exception("billing: webhook_handler_failed")
        raise HTTPException(status_code=500, detail="Webhook handler failed") from exc

    return StripeWebhookResponse(event_type=output.event_type, handled=output.handled)
