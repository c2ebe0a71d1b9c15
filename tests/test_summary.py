"""
Tests for session/summary.py

Rate change, inter-response times, burst flag, serialization,
and grading against the scenario goal.
"""

import json
from dataclasses import replace

import numpy as np
import pytest

from behavior_lab.core.state import (
    BehaviorClass,
    Event,
    EventKind,
    Intervention,
    ReinforcerConfig,
    ScheduleConfig,
)
from behavior_lab.scenarios.catalog import BehaviorGoal, get_scenario
from behavior_lab.session.engine import initialize, tick
from behavior_lab.session.pacing import run_to_completion
from behavior_lab.session.summary import (
    SessionKPIs,
    SessionSummary,
    edge_means,
    generate_summary,
    insights,
    mean_irt,
    performance_rating,
    rate_change_pct,
)


class TestEdgeMeans:
    """Baseline and final means of a rate series."""

    def test_twenty_percent_edges(self):
        rates = [10, 10, 8, 8, 8, 8, 8, 8, 5, 5]
        assert edge_means(rates) == (pytest.approx(10.0), pytest.approx(5.0))

    def test_window_rounds_down(self):
        rates = [4, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 2]    # 14 samples -> 2
        initial, final = edge_means(rates)
        assert initial == pytest.approx(2.0)
        assert final == pytest.approx(1.0)

    def test_too_short(self):
        assert edge_means([5, 5, 5, 5]) == (0.0, 0.0)
        assert edge_means([]) == (0.0, 0.0)


class TestRateChangePct:
    """Percentage change with a zero-baseline rule."""

    def test_decrease(self):
        assert rate_change_pct(10.0, 5.0) == pytest.approx(-50.0)

    def test_increase(self):
        assert rate_change_pct(4.0, 6.0) == pytest.approx(50.0)

    def test_zero_baseline(self):
        assert rate_change_pct(0.0, 5.0) == 0.0
        assert rate_change_pct(0.0, 5.0, 100.0) == 100.0
        assert rate_change_pct(0.0, 0.0, 100.0) == 0.0


class TestMeanIRT:
    """Inter-response times from behavior events."""

    def test_consecutive_gaps(self):
        events = [
            Event(1.0, EventKind.BEHAVIOR, "", BehaviorClass.TARGET),
            Event(2.0, EventKind.BEHAVIOR, "", BehaviorClass.ALT),
            Event(3.0, EventKind.BEHAVIOR, "", BehaviorClass.TARGET),
            Event(3.0, EventKind.REINFORCEMENT, "", BehaviorClass.TARGET),
            Event(4.0, EventKind.BEHAVIOR, "", BehaviorClass.TARGET),
        ]
        assert mean_irt(events, BehaviorClass.TARGET) == pytest.approx(1.5)

    def test_fewer_than_two(self):
        events = [Event(1.0, EventKind.BEHAVIOR, "", BehaviorClass.ALT)]
        assert mean_irt(events, BehaviorClass.ALT) == 0.0
        assert mean_irt([], BehaviorClass.TARGET) == 0.0


class TestGenerateSummary:
    """Post-session statistics."""

    def test_fixed_rate_history(self, make_state, make_scenario):
        state = make_state()
        state.target_rates = [10, 10, 8, 8, 8, 8, 8, 8, 5, 5]
        state.alt_rates = [0, 0, 1, 2, 3, 4, 5, 6, 6, 6]

        summary = generate_summary(state, make_scenario())

        assert summary.kpis.target_rate_change_pct == pytest.approx(-50.0)
        assert summary.kpis.alt_rate_change_pct == 100.0

    def test_burst_flag(self, make_state, make_scenario):
        state = make_state()
        assert not generate_summary(state, make_scenario()).kpis.burst_detected

        state.events.append(Event(2.0, EventKind.BURST_DETECTED, "burst"))
        assert generate_summary(state, make_scenario()).kpis.burst_detected

    def test_full_session(self):
        scenario = get_scenario("meowing")
        state = initialize(scenario, 2, rng=np.random.default_rng(4))
        run_to_completion(state)

        summary = generate_summary(state, scenario)

        assert summary.scenario == "Constant Meowing"
        assert summary.session_number == 2
        assert summary.duration == pytest.approx(scenario.defaults.session_duration)
        assert summary.kpis.reinforcers_delivered == state.reinforcers_delivered
        assert summary.kpis.final_mo == state.mo
        assert summary.kpis.final_sat == state.sat
        assert summary.kpis.avg_irt_target >= 0.0
        assert summary.events[-1].kind is EventKind.SESSION_END

    def test_read_only(self, make_state, make_scenario):
        state = make_state()
        for _ in range(50):
            tick(state)
        before = (len(state.events), state.t, state.sat)
        summary = generate_summary(state, make_scenario())
        summary.events.clear()
        assert (len(state.events), state.t, state.sat) == before

    def test_to_json(self, make_state, make_scenario):
        state = make_state(intervention="Extinction")
        for _ in range(30):
            tick(state)

        data = json.loads(generate_summary(state, make_scenario()).to_json())

        assert data["intervention"] == "Extinction"
        assert data["scheduleAlt"] == {"type": "CRF", "param": None}
        assert data["reinforcer"] == {"type": "treat", "magnitude": 2}
        assert set(data["kpis"]) == {
            "targetRateChangePct", "altRateChangePct", "reinforcersDelivered",
            "avgIRTTarget", "avgIRTAlt", "burstDetected", "finalMO", "finalSAT",
        }
        assert len(data["events"]) == len(state.events)


def summary_with(
    target=-20.0,
    alt=20.0,
    reinforcers=10,
    mo=0.6,
    sat=0.3,
    burst=False,
    intervention=Intervention.DRA
) -> SessionSummary:
    return SessionSummary(
        scenario="Test Scenario",
        session_number=1,
        intervention=intervention,
        schedule_alt=ScheduleConfig("CRF"),
        schedule_target=ScheduleConfig("EXT"),
        reinforcer=ReinforcerConfig("treat", 2),
        duration=60.0,
        kpis=SessionKPIs(
            target_rate_change_pct=target,
            alt_rate_change_pct=alt,
            reinforcers_delivered=reinforcers,
            avg_irt_target=1.0,
            avg_irt_alt=1.0,
            burst_detected=burst,
            final_mo=mo,
            final_sat=sat,
        ),
    )


@pytest.fixture
def increase_scenario(make_scenario):
    return replace(make_scenario(), goal=BehaviorGoal.INCREASE)


class TestPerformanceRating:
    """Grades for reduce and increase goals."""

    @pytest.mark.parametrize("target,alt,expected", [
        (-40.0, 40.0, "Excellent"),
        (-40.0, 30.0, "Good"),
        (-30.0, 40.0, "Good"),
        (-20.0, 0.0, "Good"),
        (-15.0, 50.0, "Fair"),
        (-1.0, 0.0, "Fair"),
        (0.0, 80.0, "Needs Improvement"),
        (25.0, 0.0, "Needs Improvement"),
    ])
    def test_reduce_goal(self, make_scenario, target, alt, expected):
        rating = performance_rating(summary_with(target, alt), make_scenario())
        assert rating.rating == expected
        assert rating.message

    @pytest.mark.parametrize("alt,expected", [
        (60.0, "Excellent"),
        (50.0, "Good"),
        (30.0, "Good"),
        (25.0, "Fair"),
        (1.0, "Fair"),
        (0.0, "Needs Improvement"),
        (-10.0, "Needs Improvement"),
    ])
    def test_increase_goal(self, increase_scenario, alt, expected):
        # Target change is ignored for increase goals
        rating = performance_rating(summary_with(target=90.0, alt=alt), increase_scenario)
        assert rating.rating == expected

    def test_session_record(self, make_scenario):
        state = initialize(make_scenario(), rng=np.random.default_rng(5))
        state.target_rates = [10, 10, 8, 8, 8, 8, 8, 8, 5, 5]
        state.alt_rates = [0, 0, 1, 2, 3, 4, 5, 6, 6, 6]
        summary = generate_summary(state, make_scenario())
        assert performance_rating(summary, make_scenario()).rating == "Excellent"


class TestInsights:
    """Each recommendation fires on its own threshold."""

    def test_quiet_session(self, make_scenario):
        assert insights(summary_with(), make_scenario()) == []

    def test_few_reinforcers(self, make_scenario):
        notes = insights(summary_with(reinforcers=4), make_scenario())
        assert len(notes) == 1
        assert "reinforcement frequency" in notes[0]
        assert insights(summary_with(reinforcers=5), make_scenario()) == []

    def test_high_satiation(self, make_scenario):
        notes = insights(summary_with(sat=0.75), make_scenario())
        assert len(notes) == 1
        assert "satiation" in notes[0]
        assert insights(summary_with(sat=0.7), make_scenario()) == []

    def test_low_motivation(self, make_scenario):
        notes = insights(summary_with(mo=0.25), make_scenario())
        assert len(notes) == 1
        assert "motivation" in notes[0]
        assert insights(summary_with(mo=0.3), make_scenario()) == []

    def test_target_rose_on_reduce_goal(self, make_scenario, increase_scenario):
        notes = insights(summary_with(target=5.0), make_scenario())
        assert len(notes) == 1
        assert "Target behavior increased" in notes[0]
        assert insights(summary_with(target=5.0), increase_scenario) == []

    def test_small_alt_gain(self, make_scenario):
        notes = insights(summary_with(alt=9.0), make_scenario())
        assert len(notes) == 1
        assert "Alternative behavior" in notes[0]
        assert insights(summary_with(alt=10.0), make_scenario()) == []

    def test_extinction_without_burst(self, make_scenario):
        notes = insights(summary_with(intervention=Intervention.EXTINCTION), make_scenario())
        assert notes == ["Good consistency. No extinction burst observed."]

        with_burst = summary_with(intervention=Intervention.EXTINCTION, burst=True)
        assert insights(with_burst, make_scenario()) == []

    def test_order(self, make_scenario):
        notes = insights(
            summary_with(
                target=5.0, alt=0.0, reinforcers=0, mo=0.1, sat=0.9,
                intervention=Intervention.EXTINCTION
            ),
            make_scenario()
        )
        assert len(notes) == 6
        assert "reinforcement frequency" in notes[0]
        assert notes[-1].startswith("Good consistency")
