"""Normally distributed draws built from a uniform source.

Returns are sampled with the Box–Muller transform rather than
``Generator.normal`` so that any object exposing ``random()`` can drive the
simulation.  Tests use this to feed scripted uniforms, and the Monte Carlo
runner hands each worker its own ``numpy.random.Generator``.

Example
-------

>>> rng = uniform_source(7)
>>> x = normal_sample(0.05, 0.0, rng)
>>> x
0.05
"""

from __future__ import annotations

import math
from typing import Optional, Protocol

import numpy as np


class UniformSource(Protocol):
    def random(self) -> float: ...


def uniform_source(seed: Optional[int] = None) -> np.random.Generator:
    """Return a fresh generator; ``seed=None`` draws entropy from the OS."""
    return np.random.default_rng(seed)


def _nonzero_uniform(rng: UniformSource) -> float:
    u = 0.0
    while u == 0.0:
        u = float(rng.random())
    return u


def normal_sample(mean: float, std_dev: float, rng: UniformSource) -> float:
    """Draw one sample from Normal(``mean``, ``std_dev``).

    Parameters
    ----------
    mean : float
        Distribution mean (e.g. an expected annual return as a decimal).
    std_dev : float
        Standard deviation.  Zero yields ``mean`` exactly.
    rng : UniformSource
        Source of uniform(0, 1) floats.  Zero draws are discarded so the
        logarithm is always finite.

    Returns
    -------
    float
        ``mean + std_dev * z`` where ``z`` is a standard normal variate.
    """
    u1 = _nonzero_uniform(rng)
    u2 = _nonzero_uniform(rng)
    z = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
    return mean + std_dev * z


__all__ = ["UniformSource", "uniform_source", "normal_sample"]
