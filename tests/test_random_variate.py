"""Tests for the Box–Muller normal sampler."""

import math

import numpy as np
import pytest

from withdrawal_planner.calculators import random_variate


class _ScriptedUniforms:
    """Yields a fixed sequence of uniforms, standing in for a generator."""

    def __init__(self, values):
        self._values = list(values)
        self.calls = 0

    def random(self):
        self.calls += 1
        return self._values.pop(0)


def test_box_muller_formula():
    rng = _ScriptedUniforms([0.5, 0.25])
    x = random_variate.normal_sample(0.05, 0.1, rng)
    z = math.sqrt(-2.0 * math.log(0.5)) * math.cos(2.0 * math.pi * 0.25)
    assert x == pytest.approx(0.05 + 0.1 * z)


def test_zero_draws_are_resampled():
    """A zero uniform would make log(u1) infinite; it must be skipped."""
    rng = _ScriptedUniforms([0.0, 0.0, 0.5, 0.0, 0.5])
    x = random_variate.normal_sample(0.0, 1.0, rng)
    assert rng.calls == 5
    assert math.isfinite(x)
    assert x == pytest.approx(math.sqrt(-2.0 * math.log(0.5)) * math.cos(math.pi))


def test_zero_stdev_returns_mean():
    rng = random_variate.uniform_source(3)
    assert random_variate.normal_sample(0.07, 0.0, rng) == 0.07


def test_sample_moments():
    rng = random_variate.uniform_source(2024)
    draws = np.array([random_variate.normal_sample(0.05, 0.10, rng) for _ in range(20000)])
    assert not np.isnan(draws).any()
    assert draws.mean() == pytest.approx(0.05, abs=0.005)
    assert draws.std() == pytest.approx(0.10, abs=0.005)


def test_seeded_sources_repeat():
    a = random_variate.uniform_source(11)
    b = random_variate.uniform_source(11)
    xs = [random_variate.normal_sample(0.0, 1.0, a) for _ in range(5)]
    ys = [random_variate.normal_sample(0.0, 1.0, b) for _ in range(5)]
    assert xs == ys
