"""Simulation and search engine for safe withdrawal planning.

The `calculators` package contains small, focused modules that each implement
one piece of the engine:

* ``random_variate`` – Box–Muller normal draws from an injected uniform source.
* ``monte_carlo`` – single-trial path simulation and the batch runner.
* ``withdrawal`` – binary search for the largest sustainable withdrawal.
* ``percentiles`` – nearest-rank 10/50/90 percentile bands per year.

Each module exposes a few public functions with clear parameters and returns.  See
individual docstrings for details.
"""

from . import random_variate, monte_carlo, percentiles, withdrawal  # noqa: F401

__all__ = ["random_variate", "monte_carlo", "percentiles", "withdrawal"]
