"""
core/state.py

What the session IS at this moment.

One mutable aggregate, owned by whoever drives the clock.
Every other module reads it, and only tick and the mutators write it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional
import numpy as np

from .config import EngineConfig


class ScheduleKind(Enum):
    """Reinforcement schedule kinds."""
    CRF = "CRF"    # Continuous
    EXT = "EXT"    # Extinction
    FR = "FR"      # Fixed ratio
    VR = "VR"      # Variable ratio
    FI = "FI"      # Fixed interval
    VI = "VI"      # Variable interval

    @property
    def is_ratio(self) -> bool:
        return self in (ScheduleKind.FR, ScheduleKind.VR)

    @property
    def is_interval(self) -> bool:
        return self in (ScheduleKind.FI, ScheduleKind.VI)

    @property
    def is_variable(self) -> bool:
        return self in (ScheduleKind.VR, ScheduleKind.VI)


class Intervention(Enum):
    """Intervention strategies. Exactly one is active at a time."""
    DRA = "DRA"                  # Differential reinforcement of alternative
    DRI = "DRI"                  # Differential reinforcement of incompatible
    DRO = "DRO"                  # Differential reinforcement of other
    NCR = "NCR"                  # Non-contingent reinforcement
    EXTINCTION = "Extinction"
    PUNISHMENT = "Punishment"


class ReinforcerKind(Enum):
    CLICKER = "clicker"
    TREAT = "treat"
    PRAISE = "praise"


class BehaviorClass(Enum):
    """The two competing response classes."""
    TARGET = "target"
    ALT = "alt"


class EventKind(Enum):
    REINFORCEMENT = "reinforcement"
    PUNISHMENT = "punishment"
    BURST_DETECTED = "burst_detected"
    SATIATION = "satiation"
    BEHAVIOR = "behavior"
    SESSION_END = "session_end"
    INTERVENTION_CHANGE = "intervention_change"


class CueKind(Enum):
    """Animation hints for the presentation layer."""
    IDLE = "idle"
    TARGET_BEHAVIOR = "target_behavior"
    ALT_BEHAVIOR = "alt_behavior"
    REINFORCEMENT = "reinforcement"
    BURST = "burst"
    SLEEPY = "sleepy"


@dataclass(frozen=True)
class Requirement:
    """
    The resolved requirement of a variable schedule.

    Unresolved and zero are different things: unresolved means
    "draw one at the next check", zero would be a degenerate requirement.
    """
    value: Optional[float] = None

    @classmethod
    def unresolved(cls) -> Requirement:
        return cls(None)

    @classmethod
    def resolved(cls, value: float) -> Requirement:
        return cls(value)

    @property
    def is_resolved(self) -> bool:
        return self.value is not None

    def __repr__(self) -> str:
        if self.value is None:
            return "Requirement(unresolved)"
        return f"Requirement({self.value:.2f})"


@dataclass
class ScheduleConfig:
    """A schedule kind plus its optional parameter (count or seconds)."""
    kind: ScheduleKind
    param: Optional[float] = None

    def __post_init__(self):
        # Accept raw strings from catalogs and CLIs
        self.kind = ScheduleKind(self.kind)

    def label(self) -> str:
        if self.param is None:
            return self.kind.value
        return f"{self.kind.value}{self.param:g}"

    def to_dict(self) -> dict:
        return {"type": self.kind.value, "param": self.param}

    @classmethod
    def from_dict(cls, data: dict) -> ScheduleConfig:
        return cls(kind=ScheduleKind(data["type"]), param=data.get("param"))


@dataclass
class ScheduleRuntime:
    """Mutable counters for one schedule, one per behavior class."""
    responses: int = 0
    last_reinforcement_time: float = 0.0
    requirement: Requirement = field(default_factory=Requirement.unresolved)


@dataclass
class ReinforcerConfig:
    kind: ReinforcerKind = ReinforcerKind.TREAT
    magnitude: int = 2          # 1, 2 or 3

    def __post_init__(self):
        self.kind = ReinforcerKind(self.kind)

    def to_dict(self) -> dict:
        return {"type": self.kind.value, "magnitude": self.magnitude}

    @classmethod
    def from_dict(cls, data: dict) -> ReinforcerConfig:
        return cls(kind=ReinforcerKind(data["type"]), magnitude=int(data["magnitude"]))


@dataclass
class Event:
    """One notable occurrence, in time order."""
    t: float
    kind: EventKind
    details: str
    behavior: Optional[BehaviorClass] = None

    def to_dict(self) -> dict:
        return {
            "t": self.t,
            "type": self.kind.value,
            "details": self.details,
            "behaviorType": self.behavior.value if self.behavior else None,
        }


@dataclass
class AnimationCue:
    kind: CueKind = CueKind.IDLE
    start_time: float = 0.0
    duration: float = 1.0

    def expired(self, now: float) -> bool:
        return now - self.start_time > self.duration


@dataclass
class SessionState:
    """
    The whole session, in one place.

    Internal variables MO, SAT and BURST live in [0, 1] and are
    clamped, not validated. The recent-reinforcement accumulators
    are unbounded and decay toward zero.
    """
    # Configuration
    intervention: Intervention
    schedule_target: ScheduleConfig
    schedule_alt: ScheduleConfig
    reinforcer: ReinforcerConfig
    session_duration: float

    # Clock
    session_number: int = 1
    t: float = 0.0
    dt: float = 0.1
    step: int = 0
    is_paused: bool = False
    is_complete: bool = False

    # Internal variables
    mo: float = 0.6
    sat: float = 0.2
    burst: float = 0.0
    recent_reinf_target: float = 0.0
    recent_reinf_alt: float = 0.0

    # Schedule runtime
    schedule_target_state: ScheduleRuntime = field(default_factory=ScheduleRuntime)
    schedule_alt_state: ScheduleRuntime = field(default_factory=ScheduleRuntime)

    # Time-based strategies
    dro_timer: float = 0.0
    dro_interval: float = 10.0
    ncr_timer: float = 0.0
    ncr_interval: float = 15.0

    # Counters
    target_behavior_count: int = 0
    alt_behavior_count: int = 0
    reinforcers_delivered: int = 0

    # Charting series, one entry per simulated second
    time_points: List[float] = field(default_factory=list)
    target_rates: List[float] = field(default_factory=list)
    alt_rates: List[float] = field(default_factory=list)

    # Sliding windows of 0/1 flags, one entry per tick
    recent_target: List[int] = field(default_factory=list)
    recent_alt: List[int] = field(default_factory=list)
    window_seconds: float = 10.0

    events: List[Event] = field(default_factory=list)
    animation: AnimationCue = field(default_factory=AnimationCue)

    config: EngineConfig = field(default_factory=EngineConfig, repr=False)

    # Random source for noise, emission and variable schedules
    rng: np.random.Generator = field(
        default_factory=np.random.default_rng, repr=False, compare=False
    )

    def schedule_for(self, behavior: BehaviorClass) -> ScheduleConfig:
        if behavior is BehaviorClass.TARGET:
            return self.schedule_target
        return self.schedule_alt

    def runtime_for(self, behavior: BehaviorClass) -> ScheduleRuntime:
        if behavior is BehaviorClass.TARGET:
            return self.schedule_target_state
        return self.schedule_alt_state

    @property
    def progress(self) -> float:
        """Fraction of the planned session elapsed, in [0, 1]."""
        if self.session_duration <= 0:
            return 1.0
        return min(1.0, self.t / self.session_duration)

    def __repr__(self) -> str:
        return (
            f"SessionState(t={self.t:.1f}/{self.session_duration:g}, "
            f"intervention={self.intervention.value}, "
            f"MO={self.mo:.2f}, SAT={self.sat:.2f}, BURST={self.burst:.2f}, "
            f"reinforcers={self.reinforcers_delivered})"
        )


def clamp01(x: float) -> float:
    return max(0.0, min(1.0, x))
