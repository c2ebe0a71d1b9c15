"""
core/schedules.py

When does a response earn a reinforcer?

One small state machine per behavior class. Ratio schedules count
responses, interval schedules watch the clock. Variable schedules
draw their requirement once and keep it until the next delivery.

Inspired by:
- Ferster & Skinner, Schedules of Reinforcement (1957)
"""

from __future__ import annotations
import logging
from typing import Dict
import numpy as np

from .state import Requirement, ScheduleConfig, ScheduleKind, ScheduleRuntime

logger = logging.getLogger(__name__)

# Clock times are step * dt, so elapsed intervals carry rounding error
_TIME_EPSILON = 1e-9

# Used when a schedule arrives without a parameter
DEFAULT_PARAMS: Dict[ScheduleKind, float] = {
    ScheduleKind.FR: 1,
    ScheduleKind.VR: 5,
    ScheduleKind.FI: 10.0,
    ScheduleKind.VI: 10.0,
}

# Standard deviation of variable requirements, as a fraction of the mean
VARIABLE_SPREAD = 0.3

# Accepted by the surrounding controls, not by the engine
RATIO_RANGE = (1, 20)
INTERVAL_RANGE = (1, 60)


def effective_param(config: ScheduleConfig) -> float:
    """The schedule's parameter, or its default when missing (or zero)."""
    if config.param:
        return config.param
    return DEFAULT_PARAMS.get(config.kind, 0)


def draw_requirement(config: ScheduleConfig, rng: np.random.Generator) -> Requirement:
    """
    Draw a fresh requirement for a variable schedule.

    VR: round(normal(mean, 0.3 * mean)), at least 1 response.
    VI: normal(mean, 0.3 * mean), at least 1 second.
    Fixed kinds have nothing to draw.
    """
    if not config.kind.is_variable:
        return Requirement.unresolved()

    mean = effective_param(config)
    sample = rng.normal(mean, VARIABLE_SPREAD * mean)

    if config.kind is ScheduleKind.VR:
        return Requirement.resolved(float(max(1, int(round(sample)))))
    return Requirement.resolved(float(max(1.0, sample)))


def is_eligible(
    config: ScheduleConfig,
    runtime: ScheduleRuntime,
    now: float,
    rng: np.random.Generator
) -> bool:
    """
    Does a response right now qualify for reinforcement?

    Resolves a variable requirement on first use; that is the only
    mutation this check performs.
    """
    kind = config.kind

    if kind is ScheduleKind.CRF:
        return True

    if kind is ScheduleKind.EXT:
        return False

    if kind is ScheduleKind.FR:
        return runtime.responses >= effective_param(config)

    if kind is ScheduleKind.FI:
        return now - runtime.last_reinforcement_time >= effective_param(config) - _TIME_EPSILON

    # Variable kinds
    if not runtime.requirement.is_resolved:
        runtime.requirement = draw_requirement(config, rng)

    if kind is ScheduleKind.VR:
        return runtime.responses >= runtime.requirement.value

    return now - runtime.last_reinforcement_time >= runtime.requirement.value - _TIME_EPSILON


def mark_response(runtime: ScheduleRuntime) -> None:
    """Every occurrence counts, whichever schedule is governing delivery."""
    runtime.responses += 1


def reset_schedule(
    config: ScheduleConfig,
    runtime: ScheduleRuntime,
    now: float,
    rng: np.random.Generator
) -> None:
    """
    Restart the schedule after it delivered.

    Variable kinds draw the next requirement immediately, so a
    requirement is never reused across deliveries.
    """
    runtime.responses = 0
    runtime.last_reinforcement_time = now
    runtime.requirement = draw_requirement(config, rng)

    logger.debug(f"Schedule {config.label()} reset at t={now:.1f}, next {runtime.requirement}")


def clear_schedule(runtime: ScheduleRuntime) -> None:
    """Forget accumulated responses and any drawn requirement (schedule change)."""
    runtime.responses = 0
    runtime.requirement = Requirement.unresolved()


def validate_schedule_param(config: ScheduleConfig) -> None:
    """
    Range check for the surrounding controls.

    Ratio kinds accept 1-20 responses, interval kinds 1-60 seconds.
    The engine itself never calls this.
    """
    if config.param is None:
        return

    if config.kind.is_ratio:
        low, high = RATIO_RANGE
    elif config.kind.is_interval:
        low, high = INTERVAL_RANGE
    else:
        return

    if not (low <= config.param <= high):
        raise ValueError(
            f"{config.kind.value} parameter {config.param} outside [{low}, {high}]"
        )
