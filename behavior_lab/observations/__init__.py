"""
Observation tools: charting the rate history of a session.
"""

from .visualize import SessionVisualizer, plot_session

__all__ = ["SessionVisualizer", "plot_session"]
