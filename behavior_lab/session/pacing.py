"""
session/pacing.py

Wall clock in, ticks out.

The pacer only decides how many ticks to run. After a stall it
catches up, but never more than a fixed number of ticks per frame.
"""

from __future__ import annotations
import logging
import math
import time
from typing import Callable, Optional

from behavior_lab.core.state import SessionState

from .engine import tick

logger = logging.getLogger(__name__)

SPEED_RANGE = (0.25, 3.0)


class Pacer:
    """
    Drives a session from a monotonic clock.

    Call ``frame()`` once per display frame.
    """

    def __init__(
        self,
        state: SessionState,
        speed: float = 1.0,
        clock: Callable[[], float] = time.monotonic
    ):
        self.state = state
        self.clock = clock
        self.speed = speed
        self._last = clock()

    @property
    def speed(self) -> float:
        return self._speed

    @speed.setter
    def speed(self, value: float) -> None:
        low, high = SPEED_RANGE
        if not (low <= value <= high):
            raise ValueError(f"Speed {value} outside [{low}, {high}]")
        self._speed = value

    def reset(self, state: Optional[SessionState] = None) -> None:
        """Attach a new session (restart, next session) and restart the clock."""
        if state is not None:
            self.state = state
        self._last = self.clock()

    def frame(self) -> int:
        """Run the ticks owed since the last frame. Returns how many ran."""
        now = self.clock()
        state = self.state

        if state.is_paused or state.is_complete:
            # Paused time is not owed
            self._last = now
            return 0

        elapsed = now - self._last
        if elapsed < state.dt:
            return 0

        owed = int(math.floor(elapsed * self.speed / state.dt))
        cap = state.config.max_ticks_per_frame
        if owed > cap:
            logger.debug(f"Frame owed {owed} ticks, running {cap}")

        ran = 0
        for _ in range(min(owed, cap)):
            tick(state)
            ran += 1

        self._last = now
        return ran


def run_to_completion(state: SessionState, max_ticks: Optional[int] = None) -> int:
    """
    Tick a session headless until it completes.

    Stops early if the session is paused or ``max_ticks`` is reached.
    Returns the number of ticks run.
    """
    ran = 0
    while not state.is_complete and not state.is_paused:
        if max_ticks is not None and ran >= max_ticks:
            break
        tick(state)
        ran += 1
    return ran
