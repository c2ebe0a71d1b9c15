"""
core/delivery.py

Consequences, and the slow relaxation back to baseline.

Reinforcement raises recent-reinforcement history and feeds
satiation. Every tick, history fades, satiation drains, burst
intensity dies away, and motivation follows satiation.

Inspired by:
- Exponential forgetting curves
- Appetite satiation (motivating operations)
"""

from __future__ import annotations
import logging
from enum import Enum
from typing import TYPE_CHECKING

from .events import log_event
from .schedules import reset_schedule
from .state import BehaviorClass, EventKind, clamp01

if TYPE_CHECKING:
    from .emission import Emission
    from .state import SessionState

logger = logging.getLogger(__name__)


class DeliveryOutcome(Enum):
    """Where a delivered reinforcer actually landed."""
    TO_TARGET = "target"
    TO_ALTERNATIVE = "alt"
    TO_NONE = "none"          # Time-based delivery while nothing was happening


def apply_decay(state: SessionState) -> None:
    """
    Age every time-decaying variable by one tick.

    MO is recomputed from SAT, never stored independently.
    """
    cfg = state.config

    state.recent_reinf_target *= cfg.reinf_decay
    state.recent_reinf_alt *= cfg.reinf_decay
    state.sat = clamp01(state.sat * cfg.sat_decay)
    state.mo = clamp01(cfg.mo_baseline + cfg.mo_gain * (1 - state.sat))
    state.burst = clamp01(state.burst * cfg.burst_decay)


def reinforcement_magnitude(state: SessionState) -> float:
    return state.reinforcer.magnitude * state.config.reinforcement_scale


def _consequences(state: SessionState, outcome: DeliveryOutcome, details: str) -> None:
    """Shared by every delivery path: satiation, counter, events."""
    cfg = state.config
    magnitude = reinforcement_magnitude(state)

    if outcome is DeliveryOutcome.TO_ALTERNATIVE:
        state.recent_reinf_alt += magnitude
    elif outcome is DeliveryOutcome.TO_TARGET:
        state.recent_reinf_target += magnitude

    state.sat = clamp01(state.sat + magnitude * cfg.satiation_gain)
    state.reinforcers_delivered += 1

    behavior = None
    if outcome is not DeliveryOutcome.TO_NONE:
        behavior = BehaviorClass(outcome.value)
    log_event(state, EventKind.REINFORCEMENT, details, behavior)

    if state.sat > cfg.satiation_threshold:
        log_event(state, EventKind.SATIATION, "Animal is getting satiated")

    logger.debug(
        f"t={state.t:.1f} delivered to {outcome.value}, "
        f"SAT={state.sat:.3f}, total={state.reinforcers_delivered}"
    )


def deliver_to_alternative(state: SessionState) -> DeliveryOutcome:
    """Schedule-governed delivery for the alternative class."""
    outcome = DeliveryOutcome.TO_ALTERNATIVE
    _consequences(
        state, outcome,
        f"Reinforced: alt behavior ({state.reinforcer.kind.value})"
    )
    reset_schedule(state.schedule_alt, state.schedule_alt_state, state.t, state.rng)
    return outcome


def deliver_to_current_state(state: SessionState, emission: Emission) -> DeliveryOutcome:
    """
    Time-based delivery (DRO, NCR).

    Reinforces whatever the animal is doing at this moment: the
    alternative behavior if it just occurred, otherwise nothing.
    """
    if emission.alt:
        outcome = DeliveryOutcome.TO_ALTERNATIVE
        details = f"Reinforced: alt behavior on timer ({state.reinforcer.kind.value})"
    else:
        outcome = DeliveryOutcome.TO_NONE
        details = f"Reinforced: no specific behavior on timer ({state.reinforcer.kind.value})"

    _consequences(state, outcome, details)
    return outcome


def deliver_manual(state: SessionState, behavior: BehaviorClass) -> DeliveryOutcome:
    """Operator override. Schedules and the intervention policy are bypassed."""
    if behavior is BehaviorClass.TARGET:
        outcome = DeliveryOutcome.TO_TARGET
    else:
        outcome = DeliveryOutcome.TO_ALTERNATIVE

    _consequences(state, outcome, f"Manual reinforcement: {behavior.value} behavior")
    return outcome
