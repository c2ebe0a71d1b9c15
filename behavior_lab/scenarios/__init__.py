"""
Scenario catalog: the training problems a session can start from.
"""

from .catalog import (
    SCENARIOS,
    BehaviorGoal,
    Difficulty,
    Scenario,
    ScenarioDefaults,
    get_scenario,
    load_catalog,
)

__all__ = [
    "SCENARIOS",
    "BehaviorGoal",
    "Difficulty",
    "Scenario",
    "ScenarioDefaults",
    "get_scenario",
    "load_catalog",
]
