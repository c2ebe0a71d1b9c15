"""
core/config.py

The unchanging nature of the engine.
Set once per session, honored on every tick.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import os

from .emission import EmissionConfig


@dataclass
class EngineConfig:
    """Constants of the session dynamics."""
    # Clock
    dt: float = 0.1                        # Fixed timestep (seconds)
    window_seconds: float = 10.0           # Sliding window for rate samples
    max_ticks_per_frame: int = 10          # Catch-up cap for pacing

    # Initial internal variables
    initial_mo: float = 0.6
    initial_sat: float = 0.2

    # Decay, applied every tick
    reinf_decay: float = 0.98              # Recent reinforcement accumulators
    sat_decay: float = 0.999
    burst_decay: float = 0.95

    # MO is derived: baseline + gain * (1 - SAT)
    mo_baseline: float = 0.2
    mo_gain: float = 0.8

    # Reinforcement consequences
    reinforcement_scale: float = 0.2       # magnitude = reinforcer.magnitude * scale
    satiation_gain: float = 0.05           # SAT += magnitude * gain
    satiation_threshold: float = 0.7

    # Extinction burst trigger
    burst_reinf_threshold: float = 0.1     # rT must be below this
    burst_level_threshold: float = 0.5     # BURST must be below this
    burst_level: float = 1.0

    punishment_suppression: float = 0.3

    # Time-based strategies
    ncr_interval: float = 15.0
    default_dro_interval: float = 10.0

    # Animation cue durations (seconds)
    reinforcement_cue_duration: float = 1.5
    manual_cue_duration: float = 1.0
    behavior_cue_duration: float = 1.0
    ambient_cue_duration: float = 2.0

    # Summary: fraction of rate samples for baseline/final means
    summary_window_fraction: float = 0.2

    emission: EmissionConfig = field(default_factory=EmissionConfig)

    @property
    def window_steps(self) -> int:
        """Sliding window length in ticks."""
        return max(1, int(round(self.window_seconds / self.dt)))

    @classmethod
    def from_env(cls) -> EngineConfig:
        """Create config from environment variables."""
        return cls(
            dt=float(os.environ.get("BEHAVIOR_LAB_DT", "0.1")),
            window_seconds=float(os.environ.get("BEHAVIOR_LAB_WINDOW_SECONDS", "10")),
            ncr_interval=float(os.environ.get("BEHAVIOR_LAB_NCR_INTERVAL", "15")),
            max_ticks_per_frame=int(
                os.environ.get("BEHAVIOR_LAB_MAX_TICKS_PER_FRAME", "10")
            ),
        )
