"""
core/emission.py

Internal state in, behavior out.

Each tick the animal either does the target behavior, the
alternative behavior, or nothing. Never both: the two are
competing responses, and the sampling order enforces it.

Inspired by:
- Matching law (response allocation between alternatives)
- Logistic choice models
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple
import numpy as np

if TYPE_CHECKING:
    from .state import SessionState


@dataclass
class EmissionConfig:
    """
    Weights of the emission model.

    These are empirically tuned, not derived. Adjust freely.
    """
    # Target propensity: sigmoid(bias + w_mo*MO + w_reinf*rT - w_sat*SAT + w_burst*BURST + noise)
    target_bias: float = -0.5
    target_mo_weight: float = 1.5
    target_reinf_weight: float = 1.5
    target_sat_weight: float = 1.5
    target_burst_weight: float = 3.0

    # Alternative propensity: sigmoid(bias + w_reinf*rA - competition + w_mo*MO + noise)
    alt_bias: float = -1.0
    alt_reinf_weight: float = 2.5
    alt_mo_weight: float = 0.8
    competition_penalty: float = 0.3   # Applied while target has any recent reinforcement

    noise_amplitude: float = 0.1       # Uniform on [-a, a]

    # Minimum propensities, so some behavior always happens
    target_floor: float = 0.35
    alt_floor: float = 0.25

    # Per-tick probability = propensity * dt * multiplier
    rate_multiplier: float = 1.8


@dataclass(frozen=True)
class Emission:
    """Which behavior (if any) occurred this tick."""
    target: bool = False
    alt: bool = False

    @property
    def any(self) -> bool:
        return self.target or self.alt


NO_EMISSION = Emission()


def sigmoid(x: float) -> float:
    return 1.0 / (1.0 + np.exp(-x))


def propensities(
    state: SessionState,
    config: EmissionConfig,
    rng: np.random.Generator
) -> Tuple[float, float]:
    """
    Floored propensities (p_target, p_alt) for the current state.

    Each propensity gets its own noise draw.
    """
    a = config.noise_amplitude

    target_raw = sigmoid(
        config.target_bias
        + config.target_mo_weight * state.mo
        + config.target_reinf_weight * state.recent_reinf_target
        - config.target_sat_weight * state.sat
        + config.target_burst_weight * state.burst
        + rng.uniform(-a, a)
    )

    competition = config.competition_penalty if state.recent_reinf_target > 0 else 0.0
    alt_raw = sigmoid(
        config.alt_bias
        + config.alt_reinf_weight * state.recent_reinf_alt
        - competition
        + config.alt_mo_weight * state.mo
        + rng.uniform(-a, a)
    )

    return (
        float(max(target_raw, config.target_floor)),
        float(max(alt_raw, config.alt_floor)),
    )


def sample_emission(
    state: SessionState,
    config: EmissionConfig,
    rng: np.random.Generator
) -> Emission:
    """
    Sample this tick's behavior.

    Alternative first; target only if the alternative did not occur.
    """
    p_target, p_alt = propensities(state, config, rng)

    alt = rng.random() < min(1.0, p_alt * state.dt * config.rate_multiplier)
    target = (not alt) and rng.random() < min(
        1.0, p_target * state.dt * config.rate_multiplier
    )

    return Emission(target=bool(target), alt=bool(alt))
