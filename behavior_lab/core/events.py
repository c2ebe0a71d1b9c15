"""
core/events.py

Append-only, time-ordered record of what happened.
We log everything; storage is cheap; insight is precious.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, List, Optional

from .state import BehaviorClass, Event, EventKind

if TYPE_CHECKING:
    from .state import SessionState


def log_event(
    state: SessionState,
    kind: EventKind,
    details: str,
    behavior: Optional[BehaviorClass] = None
) -> Event:
    """Append an event stamped with the current simulated time."""
    event = Event(t=state.t, kind=kind, details=details, behavior=behavior)
    state.events.append(event)
    return event


def events_of(
    events: List[Event],
    kind: EventKind,
    behavior: Optional[BehaviorClass] = None
) -> List[Event]:
    """Filter events by kind, and optionally by behavior class."""
    return [
        e for e in events
        if e.kind is kind and (behavior is None or e.behavior is behavior)
    ]


def describe_behavior(behavior: BehaviorClass) -> str:
    return "Target" if behavior is BehaviorClass.TARGET else "Alternative"
