from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from focusflow.domain.entities.timer import TIMER_CONFIGS, TimerSnapshot
from focusflow.domain.exceptions import FeatureAccessDeniedError, TimerStateError
from focusflow.domain.services.timer_machine import (
    change_mode,
    complete_phase,
    ensure_mode_allowed,
    initial_snapshot,
    next_phase,
    restore,
    snapshot_from_dict,
    snapshot_to_dict,
)


NOW = datetime(2026, 3, 11, 9, 0, tzinfo=timezone.utc)


def test_initial_snapshot_is_idle_pomodoro_work():
    snapshot = initial_snapshot()

    assert snapshot.mode == "pomodoro"
    assert snapshot.phase == "work"
    assert snapshot.seconds_left == 1500
    assert snapshot.running is False
    assert snapshot.start_time is None
    assert snapshot.completed_cycles == 0


def test_every_fourth_pomodoro_work_phase_goes_to_long_break():
    snapshot = TimerSnapshot(
        mode="pomodoro",
        phase="work",
        seconds_left=0,
        running=True,
        start_time=NOW,
        completed_cycles=0,
    )
    phases = []
    for _ in range(8):
        completion = complete_phase(snapshot, now=NOW)
        phases.append(completion.next_snapshot.phase)
        snapshot = completion.next_snapshot

    assert phases == [
        "short_break",
        "work",
        "short_break",
        "work",
        "short_break",
        "work",
        "long_break",
        "work",
    ]
    assert snapshot.completed_cycles == 4


def test_modes_without_long_break_always_take_short_breaks():
    assert next_phase("deep", "work", 4) == "short_break"
    assert next_phase("52-17", "work", 8) == "short_break"


@pytest.mark.parametrize("phase", ["short_break", "long_break"])
def test_breaks_always_return_to_work(phase):
    assert next_phase("pomodoro", phase, 4) == "work"


def test_complete_phase_reports_configured_duration_and_next_snapshot():
    snapshot = TimerSnapshot(
        mode="ultradian",
        phase="work",
        seconds_left=0,
        running=True,
        start_time=NOW - timedelta(minutes=90),
        completed_cycles=0,
    )

    completion = complete_phase(snapshot, now=NOW)

    assert completion.should_record is True
    assert completion.duration_seconds == TIMER_CONFIGS["ultradian"].work_seconds
    assert completion.end_time == NOW
    assert completion.next_snapshot.phase == "short_break"
    assert completion.next_snapshot.seconds_left == 1200
    assert completion.next_snapshot.running is False
    assert completion.next_snapshot.start_time == NOW
    assert completion.next_snapshot.completed_cycles == 1


def test_complete_phase_without_start_time_is_not_recorded():
    completion = complete_phase(initial_snapshot(), now=NOW)

    assert completion.should_record is False


def test_change_mode_to_premium_mode_requires_premium():
    with pytest.raises(FeatureAccessDeniedError) as exc_info:
        change_mode(initial_snapshot(), mode="deep", is_premium=False)

    assert exc_info.value.feature == "premium_modes"
    assert "Premium" in exc_info.value.upsell


def test_change_mode_resets_to_work_of_new_mode():
    snapshot = change_mode(initial_snapshot(), mode="52-17", is_premium=True)

    assert snapshot.mode == "52-17"
    assert snapshot.seconds_left == 3120


def test_change_mode_to_current_mode_keeps_snapshot():
    snapshot = TimerSnapshot(
        mode="pomodoro",
        phase="short_break",
        seconds_left=120,
        running=True,
        start_time=NOW,
        completed_cycles=1,
    )

    assert change_mode(snapshot, mode="pomodoro", is_premium=False) is snapshot


def test_ensure_mode_allowed_gates_only_premium_modes():
    ensure_mode_allowed("pomodoro", is_premium=False)
    ensure_mode_allowed("ultradian", is_premium=True)

    with pytest.raises(FeatureAccessDeniedError):
        ensure_mode_allowed("ultradian", is_premium=False)


def test_change_mode_rejects_unknown_mode():
    with pytest.raises(TimerStateError):
        change_mode(initial_snapshot(), mode="marathon", is_premium=True)


def test_restore_premium_mode_for_free_user_falls_back_to_pomodoro():
    saved = TimerSnapshot(
        mode="deep",
        phase="short_break",
        seconds_left=100,
        running=True,
        start_time=NOW,
        completed_cycles=3,
    )

    assert restore(saved, is_premium=False) == initial_snapshot()
    restored = restore(saved, is_premium=True)
    assert restored.mode == "deep"
    assert restored.seconds_left == 100
    assert restored.running is False


def test_snapshot_dict_conversion_keeps_fields():
    snapshot = TimerSnapshot(
        mode="pomodoro",
        phase="long_break",
        seconds_left=42,
        running=False,
        start_time=NOW,
        completed_cycles=4,
    )

    payload = snapshot_to_dict(snapshot)

    assert payload["start_time"] == "2026-03-11T09:00:00+00:00"
    assert snapshot_from_dict(payload) == snapshot


def test_snapshot_from_dict_accepts_zulu_timestamps():
    snapshot = snapshot_from_dict(
        {"mode": "pomodoro", "phase": "work", "seconds_left": 10, "start_time": "2026-03-11T09:00:00Z"}
    )

    assert snapshot.start_time == NOW
    assert snapshot.completed_cycles == 0


@pytest.mark.parametrize(
    "payload",
    [
        {"mode": "marathon", "phase": "work", "seconds_left": 10},
        {"mode": "pomodoro", "phase": "nap", "seconds_left": 10},
        {"mode": "pomodoro", "phase": "work", "seconds_left": -1},
        {"mode": "pomodoro", "phase": "work", "seconds_left": True},
        {"mode": "pomodoro", "phase": "work", "seconds_left": 10, "completed_cycles": "2"},
        {"mode": "pomodoro", "phase": "work", "seconds_left": 10, "start_time": "yesterday"},
    ],
)
def test_snapshot_from_dict_rejects_invalid_payloads(payload):
    with pytest.raises(TimerStateError):
        snapshot_from_dict(payload)
