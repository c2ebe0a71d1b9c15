"""
Behavior Lab: a behavioral simulation engine for teaching behavior analysis

A single trainer, a single simulated animal, one session at a time.
Reinforcement schedules, differential reinforcement, extinction and
motivation/satiation dynamics, stepped on a fixed clock.
"""

__version__ = "0.1.0"
