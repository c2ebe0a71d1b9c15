"""
Studies: runnable sessions for observation.

Each study is a question asked of the simulation.
Run, watch, then hypothesize.
"""
