"""
Shared fixtures: scenario builders and scripted behavior.
"""

import numpy as np
import pytest

from behavior_lab.core.emission import NO_EMISSION
from behavior_lab.core.state import (
    Intervention,
    ReinforcerConfig,
    ScheduleConfig,
)
from behavior_lab.scenarios.catalog import (
    BehaviorGoal,
    Difficulty,
    Scenario,
    ScenarioDefaults,
)
from behavior_lab.session import engine


def build_scenario(
    intervention="DRA",
    schedule_target=("EXT", None),
    schedule_alt=("CRF", None),
    reinforcer=("treat", 2),
    duration=60.0
) -> Scenario:
    return Scenario(
        id="test",
        title="Test Scenario",
        description="Scenario used by the test suite.",
        target_behavior="Target",
        alternative_behavior="Alternative",
        goal=BehaviorGoal.REDUCE,
        recommended_intervention=Intervention(intervention),
        difficulty=Difficulty.EASY,
        defaults=ScenarioDefaults(
            intervention=Intervention(intervention),
            schedule_target=ScheduleConfig(*schedule_target),
            schedule_alt=ScheduleConfig(*schedule_alt),
            reinforcer=ReinforcerConfig(*reinforcer),
            session_duration=duration,
        ),
    )


@pytest.fixture
def make_scenario():
    return build_scenario


@pytest.fixture
def make_state():
    """Initialized session with a seeded random source."""
    def _make(seed=0, session_number=1, **scenario_kwargs):
        scenario = build_scenario(**scenario_kwargs)
        return engine.initialize(
            scenario, session_number, rng=np.random.default_rng(seed)
        )
    return _make


@pytest.fixture
def script_emissions(monkeypatch):
    """
    Replace emission sampling with a fixed script.

    Once the script runs out, every tick is quiet.
    """
    def _script(emissions):
        queue = list(emissions)

        def fake_sample(state, config, rng):
            return queue.pop(0) if queue else NO_EMISSION

        monkeypatch.setattr(engine, "sample_emission", fake_sample)
        return queue

    return _script


class StubRng:
    """
    Deterministic stand-in for numpy's Generator.

    uniform() returns the midpoint; random() and normal() pop from
    their scripts.
    """

    def __init__(self, randoms=None, normals=None):
        self.randoms = list(randoms or [])
        self.normals = list(normals or [])

    def uniform(self, low, high):
        return (low + high) / 2

    def random(self):
        return self.randoms.pop(0)

    def normal(self, mean, sd):
        return self.normals.pop(0)


@pytest.fixture
def stub_rng():
    return StubRng
