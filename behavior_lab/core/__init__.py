"""
Core components of the behavioral simulation engine.

- state: The session aggregate and its vocabulary
- schedules: Reinforcement schedule state machine
- emission: Internal state to behavior
- intervention: What gets reinforced
- delivery: Consequences and decay
- rates: Sliding-window response rates
- events: Append-only event log
"""

from .config import EngineConfig
from .emission import Emission, EmissionConfig
from .state import (
    AnimationCue,
    BehaviorClass,
    CueKind,
    Event,
    EventKind,
    Intervention,
    ReinforcerConfig,
    ReinforcerKind,
    Requirement,
    ScheduleConfig,
    ScheduleKind,
    ScheduleRuntime,
    SessionState,
)

__all__ = [
    "EngineConfig",
    "Emission",
    "EmissionConfig",
    "AnimationCue",
    "BehaviorClass",
    "CueKind",
    "Event",
    "EventKind",
    "Intervention",
    "ReinforcerConfig",
    "ReinforcerKind",
    "Requirement",
    "ScheduleConfig",
    "ScheduleKind",
    "ScheduleRuntime",
    "SessionState",
]
