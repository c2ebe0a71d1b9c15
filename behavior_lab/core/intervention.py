"""
core/intervention.py

What gets reinforced this tick?

Six strategies. Two watch the alternative behavior's schedule,
two watch the clock, one withholds everything, one suppresses.

Inspired by:
- Cooper, Heron & Heward, Applied Behavior Analysis
"""

from __future__ import annotations
import logging
from enum import Enum
from typing import TYPE_CHECKING

from .events import log_event
from .state import BehaviorClass, EventKind, Intervention

if TYPE_CHECKING:
    from .emission import Emission
    from .state import SessionState

logger = logging.getLogger(__name__)


class DeliveryTarget(Enum):
    """The policy's decision for one tick."""
    NONE = "none"
    ALTERNATIVE = "alt"
    CURRENT_STATE = "current_state"   # Timer-based: whatever is happening now


def advance_timers(state: SessionState, emission: Emission) -> None:
    """
    Time-based strategy timers, advanced every tick.

    The DRO timer restarts on any target occurrence; the NCR
    timer runs regardless of behavior.
    """
    if emission.target:
        state.dro_timer = 0.0
    else:
        state.dro_timer += state.dt

    state.ncr_timer += state.dt


def decide(
    state: SessionState,
    emission: Emission,
    target_eligible: bool,
    alt_eligible: bool
) -> DeliveryTarget:
    """
    Apply the active intervention.

    Extinction and punishment never deliver, but they may change
    state (burst trigger, suppression) and log events.
    """
    intervention = state.intervention

    if intervention in (Intervention.DRA, Intervention.DRI):
        if emission.alt and alt_eligible:
            return DeliveryTarget.ALTERNATIVE
        return DeliveryTarget.NONE

    if intervention is Intervention.DRO:
        if _timer_due(state.dro_timer, state.dro_interval):
            state.dro_timer = 0.0
            return DeliveryTarget.CURRENT_STATE
        return DeliveryTarget.NONE

    if intervention is Intervention.NCR:
        if _timer_due(state.ncr_timer, state.ncr_interval):
            state.ncr_timer = 0.0
            return DeliveryTarget.CURRENT_STATE
        return DeliveryTarget.NONE

    if intervention is Intervention.EXTINCTION:
        if emission.target:
            _check_burst(state)
        return DeliveryTarget.NONE

    if intervention is Intervention.PUNISHMENT:
        if emission.target and target_eligible:
            _punish(state)
        return DeliveryTarget.NONE

    return DeliveryTarget.NONE


# Timers accumulate dt in floating point
_TIMER_EPSILON = 1e-9


def _timer_due(timer: float, interval: float) -> bool:
    return timer >= interval - _TIMER_EPSILON


def _check_burst(state: SessionState) -> None:
    """
    Extinction burst: a previously reinforced behavior, now withheld,
    spikes in intensity. Does not re-trigger while a burst is running.
    """
    cfg = state.config
    if (
        state.recent_reinf_target < cfg.burst_reinf_threshold
        and state.burst < cfg.burst_level_threshold
    ):
        state.burst = cfg.burst_level
        log_event(state, EventKind.BURST_DETECTED, "Extinction burst detected!")
        logger.debug(f"t={state.t:.1f} extinction burst triggered")


def _punish(state: SessionState) -> None:
    state.recent_reinf_target -= state.config.punishment_suppression
    log_event(
        state, EventKind.PUNISHMENT, "Punisher delivered", BehaviorClass.TARGET
    )
    logger.debug(f"t={state.t:.1f} punisher delivered, rT={state.recent_reinf_target:.3f}")
