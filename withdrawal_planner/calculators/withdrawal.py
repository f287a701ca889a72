"""Safe withdrawal search.

The solver binary-searches the initial annual withdrawal (indexed to
inflation afterwards) using the Monte Carlo runner as its oracle.  Success
rate is assumed non-increasing in the withdrawal amount, which is what makes
bisection valid; it is not re-checked at run time.

The search interval is ``[0, 2 * total_principal / years]``.  The upper bound
is deliberately generous and assumed to be unsustainable.  Fifteen
iterations narrow it to about 0.003% of its width.

Example
-------

>>> from withdrawal_planner.constants import RiskTier
>>> assets = [Asset("Bonds", 100000, 0.0, RiskTier.LOW)]
>>> params = SimulationParameters(start_age=65, years=0, inflation=0.02)
>>> find_safe_withdrawal(assets, params).safe_withdrawal
0.0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from ..constants import RISK_STD_DEV, SEARCH_ITERATIONS, RiskTier
from .monte_carlo import Asset, SimulationParameters, run_monte_carlo, total_principal
from .percentiles import PercentileBand, summarize
from .random_variate import uniform_source

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]


@dataclass(frozen=True)
class SolverResult:
    safe_withdrawal: float
    success_rate: float
    percentile_bands: Tuple[PercentileBand, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls) -> "SolverResult":
        """Zeroed result for inputs with nothing to solve."""
        return cls(safe_withdrawal=0.0, success_rate=0.0, percentile_bands=())

    def to_dict(self) -> Dict:
        return {
            "safe_withdrawal": self.safe_withdrawal,
            "success_rate": self.success_rate,
            "simulation_paths": [
                {"age": b.age, "p10": b.p10, "p50": b.p50, "p90": b.p90}
                for b in self.percentile_bands
            ],
        }


def search_upper_bound(assets: Sequence[Asset], years: int) -> float:
    return 2.0 * total_principal(assets) / years


def find_safe_withdrawal(
    assets: Sequence[Asset],
    params: SimulationParameters,
    on_progress: Optional[ProgressCallback] = None,
    *,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
    iterations: int = SEARCH_ITERATIONS,
    risk_table: Mapping[RiskTier, float] = RISK_STD_DEV,
    workers: int = 1,
) -> SolverResult:
    """Find the largest annual withdrawal meeting ``params.success_threshold``.

    Parameters
    ----------
    assets : sequence of Asset
        Portfolio holdings.  Not modified.
    params : SimulationParameters
        Horizon, inflation, runs per iteration and success threshold.
    on_progress : callable, optional
        Called with the percent complete (0–100] after every search
        iteration, in order.  The final call reports 100.
    rng : numpy.random.Generator, optional
        Uniform source for all trials.  Takes precedence over ``seed``.
    seed : int, optional
        Seed for a new generator when ``rng`` is not supplied.
    iterations : int
        Number of bisection steps.
    risk_table : mapping
        Standard deviation for each risk tier.
    workers : int
        Threads used for the trials inside one iteration.

    Returns
    -------
    SolverResult
        ``SolverResult.empty()`` when the portfolio holds nothing or the
        horizon is not positive.
    """
    principal = total_principal(assets)
    if not assets or principal <= 0 or params.years <= 0:
        logger.info(
            "nothing to solve: principal=%.2f years=%d", principal, params.years
        )
        return SolverResult.empty()

    if rng is None:
        rng = uniform_source(seed)

    low = 0.0
    high = search_upper_bound(assets, params.years)
    optimal = 0.0
    best_paths: Optional[List[np.ndarray]] = None

    for i in range(iterations):
        mid = low + (high - low) / 2
        outcome = run_monte_carlo(assets, params, mid, rng, risk_table, workers)
        accepted = outcome.success_rate >= params.success_threshold
        if accepted:
            optimal = mid
            best_paths = outcome.paths
            low = mid
        else:
            high = mid
        logger.debug(
            "iteration %d/%d: withdrawal=%.2f success=%.3f %s",
            i + 1, iterations, mid, outcome.success_rate,
            "accepted" if accepted else "rejected",
        )
        if on_progress is not None:
            on_progress((i + 1) / iterations * 100)

    # Fresh estimate, independent of the draws that steered the search.
    final = run_monte_carlo(assets, params, optimal, rng, risk_table, workers)
    if best_paths is None:
        best_paths = final.paths

    bands = summarize(best_paths, params.start_age, params.years)
    logger.info(
        "safe withdrawal %.2f (success %.1f%%) over %d years",
        optimal, final.success_rate * 100, params.years,
    )
    return SolverResult(
        safe_withdrawal=optimal,
        success_rate=final.success_rate,
        percentile_bands=tuple(bands),
    )


solve = find_safe_withdrawal

__all__ = ["SolverResult", "ProgressCallback", "search_upper_bound", "find_safe_withdrawal", "solve"]
