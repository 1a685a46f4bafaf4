from __future__ import annotations

from datetime import date, datetime, timezone

from fastapi.testclient import TestClient

from focusflow.api.deps import (
    get_change_timer_mode_use_case,
    get_complete_timer_phase_use_case,
    get_current_user,
    get_dashboard_stats_use_case,
    get_generate_insight_use_case,
    get_get_entitlement_use_case,
    get_get_me_use_case,
    get_latest_insight_use_case,
    get_record_session_use_case,
)
from focusflow.application.dto.insights import InsightOutput
from focusflow.application.dto.me import MeOutput
from focusflow.application.dto.timer import CompletePhaseOutput
from focusflow.application.use_cases.change_timer_mode import ChangeTimerModeUseCase
from focusflow.application.use_cases.complete_timer_phase import CompleteTimerPhaseUseCase
from focusflow.domain.entities.analytics import DailyFocus, DashboardStats
from focusflow.domain.entities.profile import AuthenticatedUser, Entitlement
from focusflow.domain.entities.session import Session
from focusflow.domain.entities.timer import TimerSnapshot
from focusflow.domain.exceptions import (
    InsightGenerationError,
    InsightNotFoundError,
    InsightStorageError,
    SessionInputError,
)
from focusflow.domain.services.feature_gate import decide_all_features
from focusflow.main import app


NOW = datetime(2026, 3, 11, 9, 0, tzinfo=timezone.utc)


class FakeEntitlementUseCase:
    def __init__(self, *, is_premium: bool):
        self._is_premium = is_premium

    def execute(self, *, user_id: str) -> Entitlement:
        return Entitlement(user_id=user_id, is_premium=self._is_premium, subscription_ref=None, customer_ref=None)


class FakeDashboardUseCase:
    def __init__(self):
        self.calls = []

    def execute(self, *, user_id: str, now: datetime, tz) -> DashboardStats:
        self.calls.append((user_id, tz))
        return DashboardStats(
            today_work_minutes=25,
            week_work_minutes=40,
            today_break_minutes=5,
            week_break_minutes=10,
            today_cycles=1,
            week_cycles=2,
            focus_score=80,
            streak=3,
            weekly_data=[DailyFocus(day=date(2026, 3, 11), label="Wed", minutes=25)],
        )


class FakeGenerateInsightUseCase:
    def __init__(self, *, error: Exception | None = None):
        self._error = error

    def execute(self, *, user_id: str) -> InsightOutput:
        _ = user_id
        if self._error is not None:
            raise self._error
        return InsightOutput(insight_text="## Overview", generated_at=NOW, stored=True)


class FakeLatestInsightUseCase:
    def __init__(self, *, error: Exception | None = None):
        self._error = error or InsightNotFoundError("No insight generated yet.")

    def execute(self, *, user_id: str):
        _ = user_id
        raise self._error


class FakeRecordSessionUseCase:
    def execute(self, command) -> Session:
        if command.session_type == "nap":
            raise SessionInputError("Unknown session type 'nap'.")
        return Session(
            id="s-1",
            user_id=command.user_id,
            session_type=command.session_type,
            mode=command.mode,
            start_time=command.start_time,
            end_time=command.end_time,
            duration_seconds=command.duration_seconds,
            created_at=NOW,
        )


class RecordingSessionUseCase(FakeRecordSessionUseCase):
    def __init__(self):
        self.commands = []

    def execute(self, command) -> Session:
        self.commands.append(command)
        return super().execute(command)


class FakeCompletePhaseUseCase:
    def __init__(self):
        self.commands = []

    def execute(self, command) -> CompletePhaseOutput:
        self.commands.append(command)
        return CompletePhaseOutput(
            finished_phase="work",
            duration_seconds=1500,
            recorded=True,
            session_id="s-1",
            next_snapshot=TimerSnapshot(
                mode="pomodoro",
                phase="short_break",
                seconds_left=300,
                running=False,
                start_time=command.completed_at,
                completed_cycles=1,
            ),
        )


def _login(*, is_premium: bool) -> None:
    app.dependency_overrides[get_current_user] = lambda: AuthenticatedUser(id="user-1", email="alice@example.com")
    app.dependency_overrides[get_get_entitlement_use_case] = lambda: FakeEntitlementUseCase(is_premium=is_premium)


def test_dashboard_is_gated_for_free_user():
    _login(is_premium=False)
    app.dependency_overrides[get_dashboard_stats_use_case] = lambda: FakeDashboardUseCase()

    client = TestClient(app)
    response = client.get("/v1/analytics/dashboard")

    assert response.status_code == 403
    detail = response.json()["detail"]
    assert detail["feature"] == "analytics_dashboard"
    assert "The Productivity Dashboard" in detail["upsell"]

    app.dependency_overrides.clear()


def test_dashboard_returns_stats_for_premium_user():
    _login(is_premium=True)
    use_case = FakeDashboardUseCase()
    app.dependency_overrides[get_dashboard_stats_use_case] = lambda: use_case

    client = TestClient(app)
    response = client.get("/v1/analytics/dashboard", params={"tz": "UTC"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["focus_score"] == 80
    assert payload["weekly_data"] == [{"calendar_day": "2026-03-11", "day": "Wed", "minutes": 25}]
    assert payload["work_break_ratio"] == [{"name": "Work", "value": 40}, {"name": "Break", "value": 10}]
    assert use_case.calls[0][1] == timezone.utc

    app.dependency_overrides.clear()


def test_dashboard_rejects_unknown_timezone():
    _login(is_premium=True)
    app.dependency_overrides[get_dashboard_stats_use_case] = lambda: FakeDashboardUseCase()

    client = TestClient(app)
    response = client.get("/v1/analytics/dashboard", params={"tz": "Mars/Olympus_Mons"})

    assert response.status_code == 400

    app.dependency_overrides.clear()


def test_insight_generation_failure_is_bad_gateway():
    _login(is_premium=True)
    app.dependency_overrides[get_generate_insight_use_case] = lambda: FakeGenerateInsightUseCase(
        error=InsightGenerationError("Failed to generate insight.")
    )

    client = TestClient(app)
    response = client.post("/v1/insights")

    assert response.status_code == 502
    assert response.json()["detail"] == "Failed to generate insight"

    app.dependency_overrides.clear()


def test_insights_are_gated_for_free_user():
    _login(is_premium=False)
    app.dependency_overrides[get_generate_insight_use_case] = lambda: FakeGenerateInsightUseCase()

    client = TestClient(app)
    response = client.post("/v1/insights")

    assert response.status_code == 403
    assert response.json()["detail"]["feature"] == "ai_insights"

    app.dependency_overrides.clear()


def test_latest_insight_missing_is_not_found():
    _login(is_premium=True)
    app.dependency_overrides[get_latest_insight_use_case] = lambda: FakeLatestInsightUseCase()

    client = TestClient(app)
    response = client.get("/v1/insights/latest")

    assert response.status_code == 404

    app.dependency_overrides.clear()


def test_latest_insight_storage_failure_is_unavailable():
    _login(is_premium=True)
    app.dependency_overrides[get_latest_insight_use_case] = lambda: FakeLatestInsightUseCase(
        error=InsightStorageError("Failed to load insight.")
    )

    client = TestClient(app)
    response = client.get("/v1/insights/latest")

    assert response.status_code == 503

    app.dependency_overrides.clear()


def test_record_session_returns_created():
    _login(is_premium=False)
    app.dependency_overrides[get_record_session_use_case] = lambda: FakeRecordSessionUseCase()

    client = TestClient(app)
    response = client.post(
        "/v1/sessions",
        json={
            "session_type": "work",
            "mode": "pomodoro",
            "start_time": "2026-03-11T08:35:00Z",
            "end_time": "2026-03-11T09:00:00Z",
            "duration_seconds": 1500,
        },
    )

    assert response.status_code == 201
    assert response.json()["id"] == "s-1"

    app.dependency_overrides.clear()


def test_record_session_invalid_type_is_bad_request():
    _login(is_premium=False)
    app.dependency_overrides[get_record_session_use_case] = lambda: FakeRecordSessionUseCase()

    client = TestClient(app)
    response = client.post(
        "/v1/sessions",
        json={
            "session_type": "nap",
            "mode": "pomodoro",
            "start_time": "2026-03-11T08:35:00Z",
            "end_time": "2026-03-11T09:00:00Z",
            "duration_seconds": 1500,
        },
    )

    assert response.status_code == 400

    app.dependency_overrides.clear()


def test_complete_timer_phase_returns_next_snapshot():
    _login(is_premium=False)
    use_case = FakeCompletePhaseUseCase()
    app.dependency_overrides[get_complete_timer_phase_use_case] = lambda: use_case

    client = TestClient(app)
    response = client.post(
        "/v1/timer/complete",
        json={
            "snapshot": {
                "mode": "pomodoro",
                "phase": "work",
                "seconds_left": 0,
                "running": True,
                "start_time": "2026-03-11T08:35:00Z",
                "completed_cycles": 0,
            },
            "completed_at": "2026-03-11T09:00:00Z",
        },
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["recorded"] is True
    assert payload["next"]["phase"] == "short_break"
    assert use_case.commands[0].completed_at == NOW

    app.dependency_overrides.clear()


def test_complete_timer_phase_rejects_bad_snapshot():
    _login(is_premium=False)
    app.dependency_overrides[get_complete_timer_phase_use_case] = lambda: FakeCompletePhaseUseCase()

    client = TestClient(app)
    response = client.post("/v1/timer/complete", json={"snapshot": {"mode": "marathon"}})

    assert response.status_code == 400

    app.dependency_overrides.clear()


def test_free_user_cannot_complete_premium_mode_phase():
    _login(is_premium=False)
    recorder = RecordingSessionUseCase()
    app.dependency_overrides[get_complete_timer_phase_use_case] = lambda: CompleteTimerPhaseUseCase(
        record_session_use_case=recorder,
        get_entitlement_use_case=FakeEntitlementUseCase(is_premium=False),
    )

    client = TestClient(app)
    response = client.post(
        "/v1/timer/complete",
        json={
            "snapshot": {
                "mode": "ultradian",
                "phase": "work",
                "seconds_left": 0,
                "running": True,
                "start_time": "2026-03-11T07:30:00Z",
                "completed_cycles": 0,
            },
            "completed_at": "2026-03-11T09:00:00Z",
        },
    )

    assert response.status_code == 403
    assert response.json()["detail"]["feature"] == "premium_modes"
    assert recorder.commands == []

    app.dependency_overrides.clear()


def _change_mode(*, is_premium: bool):
    _login(is_premium=is_premium)
    app.dependency_overrides[get_change_timer_mode_use_case] = lambda: ChangeTimerModeUseCase(
        get_entitlement_use_case=FakeEntitlementUseCase(is_premium=is_premium)
    )

    client = TestClient(app)
    response = client.post(
        "/v1/timer/mode",
        json={"snapshot": {"mode": "pomodoro", "phase": "work", "seconds_left": 1500}, "mode": "deep"},
    )
    app.dependency_overrides.clear()
    return response


def test_change_timer_mode_is_gated_for_free_user():
    response = _change_mode(is_premium=False)

    assert response.status_code == 403
    assert response.json()["detail"]["feature"] == "premium_modes"


def test_change_timer_mode_for_premium_user():
    response = _change_mode(is_premium=True)

    assert response.status_code == 200
    payload = response.json()
    assert payload["mode"] == "deep"
    assert payload["seconds_left"] == 3000


def test_missing_authorization_is_unauthorized():
    client = TestClient(app)

    response = client.get("/v1/sessions")

    assert response.status_code == 401


def test_health():
    client = TestClient(app)

    assert client.get("/health").json() == {"status": "ok"}


class FakeGetMeUseCase:
    def execute(self, *, user: AuthenticatedUser):
        return MeOutput(
            user_id=user.id,
            email=user.email,
            is_premium=False,
            has_billing_account=False,
            features=decide_all_features(is_premium=False),
        )


def test_me_lists_feature_decisions():
    _login(is_premium=False)
    app.dependency_overrides[get_get_me_use_case] = lambda: FakeGetMeUseCase()

    client = TestClient(app)
    response = client.get("/v1/me")

    assert response.status_code == 200
    payload = response.json()
    assert payload["is_premium"] is False
    assert payload["features"]["ai_insights"]["allowed"] is False
    assert payload["features"]["ai_insights"]["upsell"]

    app.dependency_overrides.clear()
