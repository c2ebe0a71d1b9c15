"""
core/rates.py

Responses per minute, sampled once per simulated second.

A fixed-length window of 0/1 flags per behavior class,
one flag per tick. The rate is the window's count over the
window's duration.
"""

from __future__ import annotations
import math
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from .emission import Emission
    from .state import SessionState

_BOUNDARY_EPSILON = 1e-9


def window_rate(window: List[int], dt: float) -> float:
    """Occurrences per minute over the window; 0 for an empty window."""
    if not window:
        return 0.0
    minutes = len(window) * dt / 60.0
    return sum(window) / minutes if minutes > 0 else 0.0


def record_window(state: SessionState, emission: Emission) -> None:
    """Append this tick's flags and trim both windows from the front."""
    state.recent_target.append(1 if emission.target else 0)
    state.recent_alt.append(1 if emission.alt else 0)

    limit = state.config.window_steps
    if len(state.recent_target) > limit:
        del state.recent_target[:-limit]
    if len(state.recent_alt) > limit:
        del state.recent_alt[:-limit]


def crossed_second(t: float, dt: float) -> bool:
    """Has an integer-second boundary been crossed between t - dt and t?"""
    return math.floor(t + _BOUNDARY_EPSILON) > math.floor(t - dt + _BOUNDARY_EPSILON)


def append_sample(state: SessionState) -> None:
    """Push one (time, target rate, alt rate) triple onto the charting series."""
    state.time_points.append(state.t)
    state.target_rates.append(window_rate(state.recent_target, state.dt))
    state.alt_rates.append(window_rate(state.recent_alt, state.dt))


def sample_if_due(state: SessionState) -> bool:
    if crossed_second(state.t, state.dt):
        append_sample(state)
        return True
    return False
