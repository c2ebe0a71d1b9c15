"""
session/engine.py

One tick at a time.

The pacing loop decides how many ticks to run; this module
decides what a tick does. Each tick is a complete state
transition, applied in a fixed order:

    decay -> emission -> schedule bookkeeping -> intervention
    -> delivery -> animation cue -> windowing -> time -> completion

Mutators (intervention, schedule, reinforcer, manual
reinforcement, pause) run between ticks, never inside one.
"""

from __future__ import annotations
import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Optional, Union

import numpy as np

from behavior_lab.core.config import EngineConfig
from behavior_lab.core.delivery import (
    DeliveryOutcome,
    apply_decay,
    deliver_manual,
    deliver_to_alternative,
    deliver_to_current_state,
)
from behavior_lab.core.emission import Emission, sample_emission
from behavior_lab.core.events import describe_behavior, log_event
from behavior_lab.core.intervention import DeliveryTarget, advance_timers, decide
from behavior_lab.core.rates import append_sample, record_window, sample_if_due
from behavior_lab.core.schedules import clear_schedule, is_eligible, mark_response
from behavior_lab.core.state import (
    AnimationCue,
    BehaviorClass,
    CueKind,
    EventKind,
    Intervention,
    ReinforcerConfig,
    ReinforcerKind,
    ScheduleConfig,
    ScheduleKind,
    SessionState,
)

if TYPE_CHECKING:
    from behavior_lab.scenarios.catalog import Scenario

logger = logging.getLogger(__name__)

_TIME_EPSILON = 1e-9


# ==================== Lifecycle ====================

def initialize(
    scenario: Scenario,
    session_number: int = 1,
    rng: Optional[np.random.Generator] = None,
    config: Optional[EngineConfig] = None
) -> SessionState:
    """
    Fresh session state from a scenario's defaults.

    Pass a seeded generator as ``rng`` for reproducible runs;
    the default generator is unseeded.
    """
    config = config or EngineConfig()
    defaults = scenario.defaults

    state = SessionState(
        intervention=defaults.intervention,
        schedule_target=replace(defaults.schedule_target),
        schedule_alt=replace(defaults.schedule_alt),
        reinforcer=replace(defaults.reinforcer),
        session_duration=defaults.session_duration,
        session_number=session_number,
        dt=config.dt,
        mo=config.initial_mo,
        sat=config.initial_sat,
        dro_interval=defaults.schedule_alt.param or config.default_dro_interval,
        ncr_interval=config.ncr_interval,
        window_seconds=config.window_seconds,
        animation=AnimationCue(CueKind.IDLE, 0.0, 1.0),
        config=config,
        rng=rng if rng is not None else np.random.default_rng(),
    )

    logger.info(
        f"Session {session_number} initialized for '{scenario.title}': "
        f"{state.intervention.value}, target={state.schedule_target.label()}, "
        f"alt={state.schedule_alt.label()}, {state.session_duration:g}s"
    )
    return state


def restart(state: SessionState, scenario: Scenario) -> SessionState:
    """Start the same session over, keeping the random source."""
    return initialize(scenario, state.session_number, state.rng, state.config)


def next_session(state: SessionState, scenario: Scenario) -> SessionState:
    return initialize(scenario, state.session_number + 1, state.rng, state.config)


# ==================== Tick ====================

def tick(state: SessionState) -> None:
    """
    Advance the session by one fixed timestep.

    No-op while paused or after completion.
    """
    if state.is_paused or state.is_complete:
        return

    cfg = state.config

    # 1) Decay
    apply_decay(state)

    # 2) Emission
    emission = sample_emission(state, cfg.emission, state.rng)

    # 3) Schedule bookkeeping
    if emission.target:
        _record_occurrence(state, BehaviorClass.TARGET)
    if emission.alt:
        _record_occurrence(state, BehaviorClass.ALT)

    advance_timers(state, emission)

    target_eligible = _eligible(state, BehaviorClass.TARGET)
    alt_eligible = _eligible(state, BehaviorClass.ALT)

    # 4) Intervention decision
    decision = decide(state, emission, target_eligible, alt_eligible)

    # 5) Delivery
    outcome: Optional[DeliveryOutcome] = None
    if decision is DeliveryTarget.ALTERNATIVE:
        outcome = deliver_to_alternative(state)
    elif decision is DeliveryTarget.CURRENT_STATE:
        outcome = deliver_to_current_state(state, emission)

    # 6) Animation cue
    _update_cue(state, emission, delivered=outcome is not None)

    # 7) Rate windows and per-second samples
    record_window(state, emission)
    sample_if_due(state)

    # 8) Time
    state.step += 1
    state.t = state.step * state.dt

    # 9) Completion
    if state.t >= state.session_duration - _TIME_EPSILON:
        _complete(state)


def _record_occurrence(state: SessionState, behavior: BehaviorClass) -> None:
    if behavior is BehaviorClass.TARGET:
        state.target_behavior_count += 1
    else:
        state.alt_behavior_count += 1

    mark_response(state.runtime_for(behavior))
    log_event(
        state, EventKind.BEHAVIOR,
        f"{describe_behavior(behavior)} behavior occurred",
        behavior
    )


def _eligible(state: SessionState, behavior: BehaviorClass) -> bool:
    return is_eligible(
        state.schedule_for(behavior), state.runtime_for(behavior), state.t, state.rng
    )


def _update_cue(state: SessionState, emission: Emission, delivered: bool) -> None:
    """
    Display hint for the presentation layer.

    Reinforcement beats behavior; behavior beats ambient mood.
    Ambient cues change only once the previous cue has expired.
    """
    cfg = state.config

    if delivered:
        state.animation = AnimationCue(
            CueKind.REINFORCEMENT, state.t, cfg.reinforcement_cue_duration
        )
    elif emission.alt:
        state.animation = AnimationCue(
            CueKind.ALT_BEHAVIOR, state.t, cfg.behavior_cue_duration
        )
    elif emission.target:
        state.animation = AnimationCue(
            CueKind.TARGET_BEHAVIOR, state.t, cfg.behavior_cue_duration
        )
    elif state.animation.expired(state.t):
        if state.burst > cfg.burst_level_threshold:
            kind = CueKind.BURST
        elif state.sat > cfg.satiation_threshold:
            kind = CueKind.SLEEPY
        else:
            kind = CueKind.IDLE
        state.animation = AnimationCue(kind, state.t, cfg.ambient_cue_duration)


def _complete(state: SessionState) -> None:
    state.is_complete = True
    append_sample(state)
    log_event(state, EventKind.SESSION_END, "Session completed")

    logger.info(
        f"Session {state.session_number} complete at t={state.t:.1f}: "
        f"target={state.target_behavior_count}, alt={state.alt_behavior_count}, "
        f"reinforcers={state.reinforcers_delivered}"
    )


# ==================== Mutators ====================

def _writable(state: SessionState, operation: str) -> bool:
    if state.is_complete:
        logger.warning(f"Ignoring {operation}: session {state.session_number} is complete")
        return False
    return True


def set_intervention(
    state: SessionState,
    intervention: Union[Intervention, str]
) -> None:
    """Switch strategy mid-session; logged as an intervention change."""
    if not _writable(state, "intervention change"):
        return

    state.intervention = Intervention(intervention)
    log_event(
        state, EventKind.INTERVENTION_CHANGE,
        f"Changed intervention to {state.intervention.value}"
    )
    logger.info(f"t={state.t:.1f} intervention -> {state.intervention.value}")


def set_schedule(
    state: SessionState,
    behavior: Union[BehaviorClass, str],
    kind: Union[ScheduleKind, str],
    param: Optional[float] = None
) -> None:
    """
    Replace one class's schedule.

    Accumulated responses and any drawn requirement are discarded;
    the time of last reinforcement is kept.
    """
    if not _writable(state, "schedule change"):
        return

    behavior = BehaviorClass(behavior)
    config = ScheduleConfig(ScheduleKind(kind), param)

    if behavior is BehaviorClass.TARGET:
        state.schedule_target = config
    else:
        state.schedule_alt = config
    clear_schedule(state.runtime_for(behavior))

    logger.info(f"t={state.t:.1f} {behavior.value} schedule -> {config.label()}")


def set_reinforcer(
    state: SessionState,
    kind: Union[ReinforcerKind, str],
    magnitude: int
) -> None:
    if not _writable(state, "reinforcer change"):
        return
    state.reinforcer = ReinforcerConfig(ReinforcerKind(kind), magnitude)


def toggle_pause(state: SessionState) -> bool:
    """Flip the pause flag. Returns the new value."""
    state.is_paused = not state.is_paused
    return state.is_paused


def deliver_manual_reinforcement(
    state: SessionState,
    behavior: Union[BehaviorClass, str]
) -> Optional[DeliveryOutcome]:
    """
    "Reinforce now": deliver to the named class immediately.

    Schedules and the active intervention are not consulted.
    """
    if not _writable(state, "manual reinforcement"):
        return None

    outcome = deliver_manual(state, BehaviorClass(behavior))
    state.animation = AnimationCue(
        CueKind.REINFORCEMENT, state.t, state.config.manual_cue_duration
    )
    return outcome
