from __future__ import annotations

from fastapi.testclient import TestClient

from focusflow.api.deps import (
    get_create_portal_session_use_case,
    get_current_user,
    get_process_stripe_webhook_use_case,
)
from focusflow.application.dto.billing import CreatePortalSessionOutput, StripeWebhookOutput
from focusflow.domain.entities.profile import AuthenticatedUser
from focusflow.domain.exceptions import BillingError, EntitlementStorageError, WebhookSignatureError
from focusflow.main import app


class FakeWebhookUseCase:
    def __init__(self, *, error: Exception | None = None):
        self.commands = []
        self._error = error

    def execute(self, command):
        self.commands.append(command)
        if self._error is not None:
            raise self._error
        return StripeWebhookOutput(event_type="checkout.session.completed", handled=True)


class FakePortalUseCase:
    def __init__(self, *, error: Exception | None = None):
        self._error = error

    def execute(self, _command):
        if self._error is not None:
            raise self._error
        return CreatePortalSessionOutput(portal_url="https://billing.stripe.test/session")


def _post_webhook(use_case: FakeWebhookUseCase, headers: dict | None = None):
    app.dependency_overrides[get_process_stripe_webhook_use_case] = lambda: use_case
    client = TestClient(app)
    response = client.post("/v1/billing/webhook", content=b'{"id": "evt_1"}', headers=headers or {})
    app.dependency_overrides.clear()
    return response


def test_webhook_acknowledges_verified_event():
    use_case = FakeWebhookUseCase()

    response = _post_webhook(use_case, {"Stripe-Signature": "t=1,v1=abc"})

    assert response.status_code == 200
    assert response.json() == {
        "received": True,
        "event_type": "checkout.session.completed",
        "handled": True,
    }
    assert use_case.commands[0].payload == b'{"id": "evt_1"}'
    assert use_case.commands[0].signature == "t=1,v1=abc"


def test_webhook_without_signature_header_is_rejected():
    use_case = FakeWebhookUseCase()

    response = _post_webhook(use_case)

    assert response.status_code == 400
    assert use_case.commands == []


def test_webhook_with_invalid_signature_is_rejected():
    response = _post_webhook(
        FakeWebhookUseCase(error=WebhookSignatureError("Invalid Stripe webhook signature.")),
        {"Stripe-Signature": "t=1,v1=bad"},
    )

    assert response.status_code == 400


def test_webhook_processing_failure_returns_server_error():
    response = _post_webhook(
        FakeWebhookUseCase(error=EntitlementStorageError("Failed to apply entitlement update.")),
        {"Stripe-Signature": "t=1,v1=abc"},
    )

    assert response.status_code == 500


def test_portal_session_without_customer_returns_bad_request():
    app.dependency_overrides[get_current_user] = lambda: AuthenticatedUser(id="user-1", email="alice@example.com")
    app.dependency_overrides[get_create_portal_session_use_case] = lambda: FakePortalUseCase(
        error=BillingError("No billing account found for this user.")
    )

    client = TestClient(app)
    response = client.post("/v1/billing/portal-session")

    assert response.status_code == 400
    assert response.json()["detail"] == "No billing account found for this user."

    app.dependency_overrides.clear()


def test_portal_session_returns_url():
    app.dependency_overrides[get_current_user] = lambda: AuthenticatedUser(id="user-1", email="alice@example.com")
    app.dependency_overrides[get_create_portal_session_use_case] = lambda: FakePortalUseCase()

    client = TestClient(app)
    response = client.post("/v1/billing/portal-session")

    assert response.status_code == 200
    assert response.json() == {"portal_url": "https://billing.stripe.test/session"}

    app.dependency_overrides.clear()
