from __future__ import annotations

import asyncio
from datetime import datetime

import pytest

from services.availability import AvailabilityGate, compute_auto_enabled


class HourClock:
    def __init__(self, hour: int):
        self.hour = hour

    def __call__(self) -> datetime:
        return datetime(2026, 10, 19, self.hour, 30)


@pytest.mark.parametrize("hour", range(24))
def test_auto_window_covers_eight_to_twenty_two(hour: int) -> None:
    assert compute_auto_enabled(hour) == (8 <= hour < 22)


def test_window_boundaries() -> None:
    assert compute_auto_enabled(7) is False
    assert compute_auto_enabled(8) is True
    assert compute_auto_enabled(21) is True
    assert compute_auto_enabled(22) is False


def test_window_wrapping_midnight() -> None:
    assert compute_auto_enabled(23, start=20, end=6) is True
    assert compute_auto_enabled(5, start=20, end=6) is True
    assert compute_auto_enabled(6, start=20, end=6) is False
    assert compute_auto_enabled(12, start=20, end=6) is False


def test_initial_state() -> None:
    state = AvailabilityGate(clock=HourClock(12)).state
    assert state.enabled is True
    assert state.auto_mode_enabled is False


def test_tick_is_noop_without_auto_mode() -> None:
    gate = AvailabilityGate(clock=HourClock(23))
    gate.set_enabled(True)
    gate.tick()
    assert gate.enabled is True


def test_tick_applies_schedule_in_auto_mode() -> None:
    clock = HourClock(23)
    gate = AvailabilityGate(auto_mode=True, clock=clock)

    gate.tick()
    assert gate.enabled is False

    clock.hour = 8
    gate.tick()
    assert gate.enabled is True


def test_enabling_auto_mode_waits_for_next_tick() -> None:
    gate = AvailabilityGate(clock=HourClock(3))
    gate.set_auto_mode(True)
    assert gate.enabled is True

    gate.tick()
    assert gate.enabled is False


@pytest.mark.parametrize("prior", [True, False])
def test_disabling_auto_mode_always_reenables(prior: bool) -> None:
    gate = AvailabilityGate(auto_mode=True, clock=HourClock(3))
    gate.set_enabled(prior)

    state = gate.set_auto_mode(False)

    assert state.enabled is True
    assert state.auto_mode_enabled is False


def test_manual_override_holds_until_next_tick() -> None:
    gate = AvailabilityGate(auto_mode=True, clock=HourClock(12))
    gate.set_enabled(False)
    assert gate.enabled is False

    gate.tick()
    assert gate.enabled is True


def test_manual_override_sticks_without_auto_mode() -> None:
    gate = AvailabilityGate(clock=HourClock(12))
    gate.set_enabled(False)
    for _ in range(3):
        gate.tick()
    assert gate.enabled is False


@pytest.mark.asyncio
async def test_run_periodic_ticks_until_cancelled() -> None:
    gate = AvailabilityGate(auto_mode=True, clock=HourClock(2))
    task = asyncio.create_task(gate.run_periodic(0.01))
    await asyncio.sleep(0.03)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert gate.enabled is False
