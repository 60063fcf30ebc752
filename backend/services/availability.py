"""Availability gate — decides whether the display shows anything right now.

Two inputs drive it: a manual on/off override and an optional auto mode that
recomputes the state from the hour of day on every tick. The tick runs on the
event loop while sync route handlers run in FastAPI's thread pool, so the
state is guarded by a lock.
"""

import asyncio
import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

import pandas as pd

logger = logging.getLogger(__name__)

DEFAULT_START_HOUR = 8
DEFAULT_END_HOUR = 22


@dataclass(frozen=True)
class AvailabilityState:
    enabled: bool = True
    auto_mode_enabled: bool = False


def compute_auto_enabled(
    hour: int, start: int = DEFAULT_START_HOUR, end: int = DEFAULT_END_HOUR
) -> bool:
    """True when ``hour`` falls in the half-open window [start, end).

    A window with start > end wraps past midnight.
    """
    if start <= end:
        return start <= hour < end
    return hour >= start or hour < end


def local_clock(tz: str | None = None) -> Callable[[], datetime]:
    """Clock reading the machine's local time, or ``tz`` when given."""
    return lambda: pd.Timestamp.now(tz=tz)


class AvailabilityGate:
    def __init__(
        self,
        auto_mode: bool = False,
        start_hour: int = DEFAULT_START_HOUR,
        end_hour: int = DEFAULT_END_HOUR,
        clock: Callable[[], datetime] | None = None,
    ):
        self._lock = threading.Lock()
        self._state = AvailabilityState(enabled=True, auto_mode_enabled=auto_mode)
        self._start_hour = start_hour
        self._end_hour = end_hour
        self._clock = clock or local_clock()

    @property
    def state(self) -> AvailabilityState:
        with self._lock:
            return self._state

    @property
    def enabled(self) -> bool:
        return self.state.enabled

    def tick(self) -> AvailabilityState:
        """Recompute ``enabled`` from the current hour when auto mode is on."""
        hour = self._clock().hour
        with self._lock:
            if not self._state.auto_mode_enabled:
                return self._state
            enabled = compute_auto_enabled(hour, self._start_hour, self._end_hour)
            if enabled != self._state.enabled:
                logger.info("Auto mode switched display %s at hour %d", "on" if enabled else "off", hour)
            self._state = AvailabilityState(enabled=enabled, auto_mode_enabled=True)
            return self._state

    def set_enabled(self, value: bool) -> AvailabilityState:
        with self._lock:
            self._state = AvailabilityState(enabled=value, auto_mode_enabled=self._state.auto_mode_enabled)
            logger.info("Display manually set %s", "on" if value else "off")
            return self._state

    def set_auto_mode(self, value: bool) -> AvailabilityState:
        """Toggle auto mode.

        Turning it on waits for the next tick. Turning it off re-enables the
        display so it is never left dark with nothing scheduled to wake it.
        """
        with self._lock:
            enabled = self._state.enabled if value else True
            self._state = AvailabilityState(enabled=enabled, auto_mode_enabled=value)
            logger.info("Auto mode %s", "enabled" if value else "disabled")
            return self._state

    async def run_periodic(self, interval_seconds: float) -> None:
        """Tick immediately, then every ``interval_seconds`` until cancelled."""
        while True:
            self.tick()
            await asyncio.sleep(interval_seconds)
