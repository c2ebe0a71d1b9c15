"""
Tests for core/emission.py

Propensities, floors, and the sampling order that keeps the two
behaviors mutually exclusive.
"""

import numpy as np
import pytest

from behavior_lab.core.emission import (
    Emission,
    EmissionConfig,
    propensities,
    sample_emission,
    sigmoid,
)


class TestEmissionConfig:
    """Tests for emission constants."""

    def test_default_config(self):
        config = EmissionConfig()
        assert config.target_floor == 0.35
        assert config.alt_floor == 0.25
        assert config.rate_multiplier == 1.8
        assert config.noise_amplitude == 0.1
        assert config.competition_penalty == 0.3

    def test_custom_config(self):
        config = EmissionConfig(rate_multiplier=3.0, target_floor=0.1)
        assert config.rate_multiplier == 3.0
        assert config.target_floor == 0.1


class TestSigmoid:
    """Tests for the logistic squashing function."""

    def test_midpoint(self):
        assert sigmoid(0.0) == pytest.approx(0.5)

    def test_symmetry(self):
        assert sigmoid(2.0) + sigmoid(-2.0) == pytest.approx(1.0)


class TestPropensities:
    """Propensity formulas for both behavior classes."""

    def test_formula_without_noise(self, make_state, stub_rng):
        state = make_state()
        state.mo, state.sat, state.burst = 0.8, 0.1, 0.2
        state.recent_reinf_target, state.recent_reinf_alt = 0.0, 0.5

        p_target, p_alt = propensities(state, EmissionConfig(), stub_rng())

        expected_target = sigmoid(-0.5 + 1.5 * 0.8 + 0.0 - 1.5 * 0.1 + 3.0 * 0.2)
        expected_alt = sigmoid(-1.0 + 2.5 * 0.5 - 0.0 + 0.8 * 0.8)
        assert p_target == pytest.approx(expected_target)
        assert p_alt == pytest.approx(expected_alt)

    def test_competition_penalty(self, make_state, stub_rng):
        state = make_state()
        state.mo = 0.8
        state.recent_reinf_alt = 1.0

        _, without = propensities(state, EmissionConfig(), stub_rng())
        state.recent_reinf_target = 0.001
        _, with_penalty = propensities(state, EmissionConfig(), stub_rng())

        assert with_penalty < without

    def test_floors(self, make_state):
        state = make_state()
        state.mo, state.sat, state.burst = 0.0, 1.0, 0.0
        state.recent_reinf_target = 0.01    # Switches on the competition penalty
        state.recent_reinf_alt = 0.0

        rng = np.random.default_rng(3)
        for _ in range(50):
            p_target, p_alt = propensities(state, EmissionConfig(), rng)
            assert p_target == pytest.approx(0.35)
            assert p_alt == pytest.approx(0.25)

    def test_burst_raises_target_propensity(self, make_state, stub_rng):
        state = make_state()
        calm, _ = propensities(state, EmissionConfig(), stub_rng())
        state.burst = 1.0
        bursting, _ = propensities(state, EmissionConfig(), stub_rng())
        assert bursting > calm


class TestSampleEmission:
    """At most one behavior per tick."""

    def test_alt_sampled_first(self, make_state, stub_rng):
        state = make_state()
        # First draw decides alt; target is never drawn
        emission = sample_emission(state, EmissionConfig(), stub_rng(randoms=[0.0]))
        assert emission == Emission(target=False, alt=True)

    def test_target_only_when_alt_absent(self, make_state, stub_rng):
        state = make_state()
        emission = sample_emission(state, EmissionConfig(), stub_rng(randoms=[0.99, 0.0]))
        assert emission == Emission(target=True, alt=False)

    def test_nothing(self, make_state, stub_rng):
        state = make_state()
        emission = sample_emission(state, EmissionConfig(), stub_rng(randoms=[0.99, 0.99]))
        assert not emission.any

    def test_probability_capped_at_one(self, make_state):
        state = make_state()
        state.dt = 10.0
        rng = np.random.default_rng(0)
        for _ in range(100):
            emission = sample_emission(state, EmissionConfig(), rng)
            assert emission.alt and not emission.target

    def test_never_both(self, make_state):
        state = make_state()
        state.recent_reinf_alt = 2.0
        state.burst = 1.0
        rng = np.random.default_rng(11)
        for _ in range(2000):
            emission = sample_emission(state, EmissionConfig(), rng)
            assert not (emission.target and emission.alt)

    def test_per_tick_rate_is_plausible(self, make_state):
        """At dt=0.1 behaviors happen every few seconds, not every tick."""
        state = make_state()
        rng = np.random.default_rng(5)
        n = 5000
        occurrences = sum(
            sample_emission(state, EmissionConfig(), rng).any for _ in range(n)
        )
        assert 0.05 * n < occurrences < 0.4 * n
