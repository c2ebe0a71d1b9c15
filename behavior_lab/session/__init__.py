"""
Session lifecycle: initialize, tick, mutate, summarize.
"""

from .engine import (
    deliver_manual_reinforcement,
    initialize,
    next_session,
    restart,
    set_intervention,
    set_reinforcer,
    set_schedule,
    tick,
    toggle_pause,
)
from .pacing import Pacer, run_to_completion
from .summary import (
    PerformanceRating,
    SessionKPIs,
    SessionSummary,
    generate_summary,
    insights,
    performance_rating,
)

__all__ = [
    "deliver_manual_reinforcement",
    "initialize",
    "next_session",
    "restart",
    "set_intervention",
    "set_reinforcer",
    "set_schedule",
    "tick",
    "toggle_pause",
    "Pacer",
    "run_to_completion",
    "SessionKPIs",
    "SessionSummary",
    "generate_summary",
    "PerformanceRating",
    "insights",
    "performance_rating",
]
