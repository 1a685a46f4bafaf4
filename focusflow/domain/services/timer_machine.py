"""Focus timer state machine.

States are the phases ``work``, ``short_break`` and ``long_break``; the
``running`` flag marks a counting phase versus a pending one. Completing a
work phase moves to a short break, except every fourth work phase under the
pomodoro mode, which moves to a long break. Breaks always return to work.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Mapping

from focusflow.domain.entities.session import SessionType, is_focus_mode, is_session_type
from focusflow.domain.entities.timer import LONG_BREAK_EVERY, TIMER_CONFIGS, TimerSnapshot
from focusflow.domain.exceptions import FeatureAccessDeniedError, TimerStateError
from focusflow.domain.services.feature_gate import build_upsell_message


DEFAULT_MODE = "pomodoro"


@dataclass(frozen=True)
class PhaseCompletion:
    phase: SessionType
    mode: str
    start_time: datetime | None
    end_time: datetime
    duration_seconds: int
    next_snapshot: TimerSnapshot

    @property
    def should_record(self) -> bool:
        return self.start_time is not None


def phase_duration(mode: str, phase: SessionType) -> int:
    return TIMER_CONFIGS[mode].duration_for(phase)


def initial_snapshot(mode: str = DEFAULT_MODE) -> TimerSnapshot:
    return TimerSnapshot(
        mode=mode,
        phase="work",
        seconds_left=phase_duration(mode, "work"),
        running=False,
        start_time=None,
        completed_cycles=0,
    )


def ensure_mode_allowed(mode: str, *, is_premium: bool) -> None:
    if TIMER_CONFIGS[mode].is_premium and not is_premium:
        raise FeatureAccessDeniedError(
            f"Mode '{mode}' requires Premium.",
            feature="premium_modes",
            upsell=build_upsell_message("premium_modes"),
        )


def change_mode(snapshot: TimerSnapshot, *, mode: str, is_premium: bool) -> TimerSnapshot:
    if not is_focus_mode(mode):
        raise TimerStateError(f"Unknown focus mode '{mode}'.")
    ensure_mode_allowed(mode, is_premium=is_premium)
    if mode == snapshot.mode:
        return snapshot
    return initial_snapshot(mode)


def next_phase(mode: str, phase: SessionType, completed_cycles: int) -> SessionType:
    if phase != "work":
        return "work"
    config = TIMER_CONFIGS[mode]
    if mode == DEFAULT_MODE and completed_cycles % LONG_BREAK_EVERY == 0 and config.long_break_seconds:
        return "long_break"
    return "short_break"


def complete_phase(snapshot: TimerSnapshot, *, now: datetime) -> PhaseCompletion:
    cycles = snapshot.completed_cycles
    if snapshot.phase == "work":
        cycles += 1
    following = next_phase(snapshot.mode, snapshot.phase, cycles)

    return PhaseCompletion(
        phase=snapshot.phase,
        mode=snapshot.mode,
        start_time=snapshot.start_time,
        end_time=now,
        duration_seconds=phase_duration(snapshot.mode, snapshot.phase),
        next_snapshot=TimerSnapshot(
            mode=snapshot.mode,
            phase=following,
            seconds_left=phase_duration(snapshot.mode, following),
            running=False,
            start_time=now,
            completed_cycles=cycles,
        ),
    )


def restore(snapshot: TimerSnapshot, *, is_premium: bool) -> TimerSnapshot:
    if TIMER_CONFIGS[snapshot.mode].is_premium and not is_premium:
        return initial_snapshot()
    return replace(snapshot, running=False)


def snapshot_to_dict(snapshot: TimerSnapshot) -> dict[str, Any]:
    return {
        "mode": snapshot.mode,
        "phase": snapshot.phase,
        "seconds_left": snapshot.seconds_left,
        "running": snapshot.running,
        "start_time": snapshot.start_time.isoformat() if snapshot.start_time else None,
        "completed_cycles": snapshot.completed_cycles,
    }


def snapshot_from_dict(payload: Mapping[str, Any]) -> TimerSnapshot:
    mode = payload.get("mode")
    phase = payload.get("phase")
    if not isinstance(mode, str) or not is_focus_mode(mode):
        raise TimerStateError("Timer snapshot has an unknown mode.")
    if not isinstance(phase, str) or not is_session_type(phase):
        raise TimerStateError("Timer snapshot has an unknown phase.")

    seconds_left = payload.get("seconds_left")
    completed_cycles = payload.get("completed_cycles", 0)
    if not isinstance(seconds_left, int) or isinstance(seconds_left, bool) or seconds_left < 0:
        raise TimerStateError("seconds_left must be a non-negative integer.")
    if not isinstance(completed_cycles, int) or isinstance(completed_cycles, bool) or completed_cycles < 0:
        raise TimerStateError("completed_cycles must be a non-negative integer.")

    start_time = payload.get("start_time")
    if isinstance(start_time, str):
        try:
            start_time = datetime.fromisoformat(start_time.replace("Z", "+00:00"))
        except ValueError as exc:
            raise TimerStateError("start_time is not an ISO timestamp.") from exc
    elif start_time is not None and not isinstance(start_time, datetime):
        raise TimerStateError("start_time is not an ISO timestamp.")

    return TimerSnapshot(
        mode=mode,
        phase=phase,
        seconds_left=seconds_left,
        running=bool(payload.get("running", False)),
        start_time=start_time,
        completed_cycles=completed_cycles,
    )
