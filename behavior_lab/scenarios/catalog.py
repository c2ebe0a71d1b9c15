"""
scenarios/catalog.py

Training problems to practice on.

Each scenario names the behavior to change, the behavior to build
in its place, and sensible starting parameters. The engine treats
these purely as initializer input.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from behavior_lab.core.state import (
    Intervention,
    ReinforcerConfig,
    ScheduleConfig,
)

logger = logging.getLogger(__name__)


class BehaviorGoal(Enum):
    INCREASE = "increase"
    REDUCE = "reduce"


class Difficulty(Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


@dataclass
class ScenarioDefaults:
    """Starting parameters for a session."""
    intervention: Intervention
    schedule_target: ScheduleConfig
    schedule_alt: ScheduleConfig
    reinforcer: ReinforcerConfig
    session_duration: float          # Seconds

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ScenarioDefaults:
        return cls(
            intervention=Intervention(data["intervention"]),
            schedule_target=ScheduleConfig.from_dict(data["scheduleTarget"]),
            schedule_alt=ScheduleConfig.from_dict(data["scheduleAlt"]),
            reinforcer=ReinforcerConfig.from_dict(data["reinforcer"]),
            session_duration=float(data["sessionDuration"]),
        )


@dataclass
class Scenario:
    id: str
    title: str
    description: str
    target_behavior: str
    alternative_behavior: str
    goal: BehaviorGoal
    recommended_intervention: Intervention
    difficulty: Difficulty
    defaults: ScenarioDefaults

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Scenario:
        return cls(
            id=data["id"],
            title=data["title"],
            description=data.get("description", ""),
            target_behavior=data["targetBehavior"],
            alternative_behavior=data["alternativeBehavior"],
            goal=BehaviorGoal(data["goal"]),
            recommended_intervention=Intervention(
                data.get("recommendedIntervention", data["defaultParams"]["intervention"])
            ),
            difficulty=Difficulty(data.get("difficulty", "Medium")),
            defaults=ScenarioDefaults.from_dict(data["defaultParams"]),
        )


SCENARIOS: List[Scenario] = [
    Scenario(
        id="jumping",
        title="Jumping on Counter",
        description=(
            "Reduce the cat jumping on the kitchen counter "
            "by reinforcing sitting on the floor."
        ),
        target_behavior="Jumping on counter",
        alternative_behavior="Sitting on floor",
        goal=BehaviorGoal.REDUCE,
        recommended_intervention=Intervention.DRA,
        difficulty=Difficulty.EASY,
        defaults=ScenarioDefaults(
            intervention=Intervention.DRA,
            schedule_target=ScheduleConfig("EXT"),
            schedule_alt=ScheduleConfig("VI", 8),
            reinforcer=ReinforcerConfig("treat", 2),
            session_duration=120,
        ),
    ),
    Scenario(
        id="meowing",
        title="Constant Meowing",
        description="Reduce excessive meowing by reinforcing quiet periods.",
        target_behavior="Meowing loudly",
        alternative_behavior="Quiet behavior",
        goal=BehaviorGoal.REDUCE,
        recommended_intervention=Intervention.DRO,
        difficulty=Difficulty.MEDIUM,
        defaults=ScenarioDefaults(
            intervention=Intervention.DRO,
            schedule_target=ScheduleConfig("EXT"),
            schedule_alt=ScheduleConfig("FI", 10),
            reinforcer=ReinforcerConfig("praise", 1),
            session_duration=120,
        ),
    ),
    Scenario(
        id="sitting",
        title="Sitting Calmly",
        description="Increase calm sitting behavior for grooming or vet visits.",
        target_behavior="Running around",
        alternative_behavior="Sitting calmly",
        goal=BehaviorGoal.INCREASE,
        recommended_intervention=Intervention.DRA,
        difficulty=Difficulty.EASY,
        defaults=ScenarioDefaults(
            intervention=Intervention.DRA,
            schedule_target=ScheduleConfig("EXT"),
            schedule_alt=ScheduleConfig("VR", 3),
            reinforcer=ReinforcerConfig("treat", 3),
            session_duration=90,
        ),
    ),
    Scenario(
        id="scratching",
        title="Scratching Couch",
        description="Reduce couch scratching by reinforcing scratching post use.",
        target_behavior="Scratching couch",
        alternative_behavior="Using scratching post",
        goal=BehaviorGoal.REDUCE,
        recommended_intervention=Intervention.DRI,
        difficulty=Difficulty.HARD,
        defaults=ScenarioDefaults(
            intervention=Intervention.DRI,
            schedule_target=ScheduleConfig("EXT"),
            schedule_alt=ScheduleConfig("FR", 2),
            reinforcer=ReinforcerConfig("clicker", 2),
            session_duration=150,
        ),
    ),
]


def get_scenario(
    scenario_id: str,
    catalog: Optional[List[Scenario]] = None
) -> Scenario:
    """Look up a scenario by id. Raises KeyError when absent."""
    for scenario in catalog if catalog is not None else SCENARIOS:
        if scenario.id == scenario_id:
            return scenario
    raise KeyError(f"Unknown scenario: {scenario_id}")


def load_catalog(path: Union[str, Path]) -> List[Scenario]:
    """
    Load scenarios from a YAML file.

    The file holds either a list of scenarios or a mapping with a
    top-level ``scenarios`` list, using the same keys as the
    built-in catalog's serialized form (camelCase).
    """
    with open(path) as f:
        data = yaml.safe_load(f)

    if isinstance(data, dict):
        data = data.get("scenarios", [])

    scenarios = [Scenario.from_dict(entry) for entry in data or []]
    logger.info(f"Loaded {len(scenarios)} scenarios from {path}")
    return scenarios
