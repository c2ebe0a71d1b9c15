"""
session/summary.py

What changed over the session?

Read-only. Compares the start of the rate history with its end,
measures the spacing of responses, and notes whether an
extinction burst showed up. Then grades the result against the
scenario's goal.
"""

from __future__ import annotations
import json
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Tuple
import numpy as np

from behavior_lab.core.events import events_of
from behavior_lab.core.state import (
    BehaviorClass,
    Event,
    EventKind,
    Intervention,
    ReinforcerConfig,
    ScheduleConfig,
)
from behavior_lab.scenarios.catalog import BehaviorGoal

if TYPE_CHECKING:
    from behavior_lab.core.state import SessionState
    from behavior_lab.scenarios.catalog import Scenario


@dataclass
class SessionKPIs:
    target_rate_change_pct: float
    alt_rate_change_pct: float
    reinforcers_delivered: int
    avg_irt_target: float          # Mean inter-response time (seconds)
    avg_irt_alt: float
    burst_detected: bool
    final_mo: float
    final_sat: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "targetRateChangePct": self.target_rate_change_pct,
            "altRateChangePct": self.alt_rate_change_pct,
            "reinforcersDelivered": self.reinforcers_delivered,
            "avgIRTTarget": self.avg_irt_target,
            "avgIRTAlt": self.avg_irt_alt,
            "burstDetected": self.burst_detected,
            "finalMO": self.final_mo,
            "finalSAT": self.final_sat,
        }


@dataclass
class SessionSummary:
    scenario: str
    session_number: int
    intervention: Intervention
    schedule_alt: ScheduleConfig
    schedule_target: ScheduleConfig
    reinforcer: ReinforcerConfig
    duration: float
    kpis: SessionKPIs
    events: List[Event] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scenario": self.scenario,
            "sessionNumber": self.session_number,
            "intervention": self.intervention.value,
            "scheduleAlt": self.schedule_alt.to_dict(),
            "scheduleTarget": self.schedule_target.to_dict(),
            "reinforcer": self.reinforcer.to_dict(),
            "duration": self.duration,
            "kpis": self.kpis.to_dict(),
            "events": [e.to_dict() for e in self.events],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


def edge_means(rates: List[float], fraction: float = 0.2) -> Tuple[float, float]:
    """
    Mean of the first and last ``fraction`` of a rate series.

    Series too short to hold one sample per edge give (0, 0).
    """
    window = int(math.floor(len(rates) * fraction + 1e-9))
    if window < 1:
        return 0.0, 0.0

    return float(np.mean(rates[:window])), float(np.mean(rates[-window:]))


def rate_change_pct(
    initial: float,
    final: float,
    zero_baseline_growth: float = 0.0
) -> float:
    """
    Percentage change from initial to final.

    With a zero baseline the change is undefined: ``zero_baseline_growth``
    is returned if the final rate is positive, otherwise 0.
    """
    if initial > 0:
        return (final - initial) / initial * 100.0
    return zero_baseline_growth if final > 0 else 0.0


def mean_irt(events: List[Event], behavior: BehaviorClass) -> float:
    """Mean gap between consecutive occurrences; 0 with fewer than two."""
    times = [e.t for e in events_of(events, EventKind.BEHAVIOR, behavior)]
    if len(times) < 2:
        return 0.0
    return float(np.mean(np.diff(times)))


def generate_summary(state: SessionState, scenario: Scenario) -> SessionSummary:
    """
    Post-session statistics.

    The caller is expected to have observed completion; this is
    not checked.
    """
    fraction = state.config.summary_window_fraction

    initial_target, final_target = edge_means(state.target_rates, fraction)
    initial_alt, final_alt = edge_means(state.alt_rates, fraction)

    kpis = SessionKPIs(
        target_rate_change_pct=rate_change_pct(initial_target, final_target),
        alt_rate_change_pct=rate_change_pct(initial_alt, final_alt, 100.0),
        reinforcers_delivered=state.reinforcers_delivered,
        avg_irt_target=mean_irt(state.events, BehaviorClass.TARGET),
        avg_irt_alt=mean_irt(state.events, BehaviorClass.ALT),
        burst_detected=any(e.kind is EventKind.BURST_DETECTED for e in state.events),
        final_mo=state.mo,
        final_sat=state.sat,
    )

    return SessionSummary(
        scenario=scenario.title,
        session_number=state.session_number,
        intervention=state.intervention,
        schedule_alt=state.schedule_alt,
        schedule_target=state.schedule_target,
        reinforcer=state.reinforcer,
        duration=state.t,
        kpis=kpis,
        events=list(state.events),
    )


# ==================== Evaluation ====================

@dataclass
class PerformanceRating:
    rating: str           # Excellent, Good, Fair, Needs Improvement
    message: str


def performance_rating(summary: SessionSummary, scenario: Scenario) -> PerformanceRating:
    """
    Grade the session against the scenario's goal.

    Reduce goals are judged on the target rate (and, for the top
    grade, the alternative rate too). Increase goals are judged on
    the alternative rate alone.
    """
    target = summary.kpis.target_rate_change_pct
    alt = summary.kpis.alt_rate_change_pct

    if scenario.goal is BehaviorGoal.REDUCE:
        if target < -30 and alt > 30:
            return PerformanceRating(
                "Excellent",
                "Target behavior reduced significantly and alternative behavior increased."
            )
        if target < -15:
            return PerformanceRating("Good", "Target behavior is decreasing.")
        if target < 0:
            return PerformanceRating(
                "Fair", "Some progress. Consider adjusting the strategy."
            )
        return PerformanceRating(
            "Needs Improvement",
            "Target behavior increased. Review the intervention strategy."
        )

    if alt > 50:
        return PerformanceRating(
            "Excellent", "Alternative behavior increased significantly."
        )
    if alt > 25:
        return PerformanceRating("Good", "Alternative behavior is increasing.")
    if alt > 0:
        return PerformanceRating(
            "Fair", "Slight improvement. Consider strengthening reinforcement."
        )
    return PerformanceRating(
        "Needs Improvement", "Behavior did not increase. Review the approach."
    )


def insights(summary: SessionSummary, scenario: Scenario) -> List[str]:
    """Rule-based recommendations, in a fixed order. May be empty."""
    kpis = summary.kpis
    notes = []

    if kpis.reinforcers_delivered < 5:
        notes.append(
            "Consider increasing reinforcement frequency to strengthen "
            "the alternative behavior."
        )
    if kpis.final_sat > 0.7:
        notes.append(
            "High satiation at the end: consider shorter sessions or varied reinforcers."
        )
    if kpis.final_mo < 0.3:
        notes.append(
            "Low motivation at the end: make sure establishing operations are in place."
        )
    if kpis.target_rate_change_pct > 0 and scenario.goal is BehaviorGoal.REDUCE:
        notes.append(
            "Target behavior increased: check whether reinforcement is "
            "maintaining the problem behavior."
        )
    if kpis.alt_rate_change_pct < 10:
        notes.append(
            "Alternative behavior barely increased: consider richer "
            "reinforcement or teaching the skill."
        )
    if summary.intervention is Intervention.EXTINCTION and not kpis.burst_detected:
        notes.append("Good consistency. No extinction burst observed.")

    return notes
