"""
observations/visualize.py

Watch. Learn. Adjust.

Response rates over time, one line per behavior class,
with reinforcers and bursts marked where they happened.
"""

from __future__ import annotations
from typing import Optional, TYPE_CHECKING

from behavior_lab.core.state import EventKind

if TYPE_CHECKING:
    from behavior_lab.core.state import SessionState


class SessionVisualizer:
    """
    Rate chart for a running or finished session.

    matplotlib is imported lazily, on first render.
    """

    def __init__(
        self,
        state: SessionState,
        figsize: tuple = (10, 5),
        target_label: str = "Target behavior",
        alt_label: str = "Alternative behavior"
    ):
        self.state = state
        self.figsize = figsize
        self.target_label = target_label
        self.alt_label = alt_label

        self._plt = None
        self._fig = None
        self._ax = None

    def _setup_plot(self):
        """Initialize matplotlib figure."""
        import matplotlib.pyplot as plt
        self._plt = plt

        self._fig, self._ax = plt.subplots(figsize=self.figsize)
        self._ax.set_facecolor('#1a1a2e')
        self._fig.patch.set_facecolor('#16213e')

    def render(self, show_events: bool = True, live: bool = False) -> None:
        """
        Draw the rate series.

        Options:
        - show_events: Mark reinforcers (ticks) and bursts (dashed lines)
        - live: Pause briefly so an interactive window refreshes
        """
        if self._plt is None:
            self._setup_plot()

        state = self.state
        ax = self._ax
        ax.clear()
        ax.set_facecolor('#1a1a2e')
        ax.set_xlim(0, max(state.session_duration, 1.0))
        ax.set_xlabel("Time (s)", color='white')
        ax.set_ylabel("Responses / min", color='white')
        ax.tick_params(colors='white')

        ax.plot(state.time_points, state.target_rates,
                color='#f72585', linewidth=2, label=self.target_label)
        ax.plot(state.time_points, state.alt_rates,
                color='#4cc9f0', linewidth=2, label=self.alt_label)

        if show_events:
            self._render_events()

        ax.legend(loc='upper right')
        ax.set_title(
            f"Session {state.session_number} | {state.intervention.value} | "
            f"t={state.t:.1f}s | Reinforcers: {state.reinforcers_delivered}",
            color='white', fontsize=12
        )

        if live:
            self._plt.pause(0.01)

    def _render_events(self) -> None:
        reinforcement_times = [
            e.t for e in self.state.events if e.kind is EventKind.REINFORCEMENT
        ]
        burst_times = [
            e.t for e in self.state.events if e.kind is EventKind.BURST_DETECTED
        ]

        if reinforcement_times:
            self._ax.scatter(
                reinforcement_times, [0.0] * len(reinforcement_times),
                marker='|', s=200, color='#ffd166', label="Reinforcer"
            )
        for t in burst_times:
            self._ax.axvline(t, color='#ef476f', linestyle='--', alpha=0.6)

    def save_frame(self, path: str) -> None:
        """Save current frame to file."""
        if self._fig is not None:
            self._fig.savefig(path, dpi=150, facecolor=self._fig.get_facecolor())

    def close(self) -> None:
        """Close the visualization."""
        if self._plt is not None:
            self._plt.close(self._fig)


def plot_session(state: SessionState, save_path: Optional[str] = None) -> None:
    """Render a finished session once, optionally saving it."""
    viz = SessionVisualizer(state)

    try:
        viz.render()
        if save_path:
            viz.save_frame(save_path)
    finally:
        viz.close()
