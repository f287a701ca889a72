from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, List, Mapping, Sequence, Tuple

import numpy as np

from ..constants import RISK_STD_DEV, SIMULATION_RUNS, SUCCESS_THRESHOLD, RiskTier
from .random_variate import UniformSource, normal_sample

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Asset:
    """One holding: starting principal, expected return (percent) and risk tier."""
    name: str
    principal: float
    expected_return_pct: float
    risk: RiskTier = RiskTier.MEDIUM

    @classmethod
    def from_dict(cls, data: Mapping) -> "Asset":
        return cls(
            name=str(data.get("name", "")),
            principal=float(data["principal"]),
            expected_return_pct=float(data.get("rate", 0.0)),
            risk=RiskTier(data.get("risk", RiskTier.MEDIUM.value)),
        )

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "principal": self.principal,
            "rate": self.expected_return_pct,
            "risk": self.risk.value,
        }


@dataclass(frozen=True)
class SimulationParameters:
    start_age: int
    years: int
    inflation: float  # decimal, e.g. 0.02
    runs: int = SIMULATION_RUNS
    success_threshold: float = SUCCESS_THRESHOLD


@dataclass(frozen=True)
class RunOutcome:
    success_rate: float
    paths: List[np.ndarray]


def total_principal(assets: Sequence[Asset]) -> float:
    return float(sum(a.principal for a in assets))


def simulate_path(
    assets: Sequence[Asset],
    params: SimulationParameters,
    annual_withdrawal: float,
    rng: UniformSource,
    risk_table: Mapping[RiskTier, float] = RISK_STD_DEV,
) -> Tuple[bool, np.ndarray]:
    """Simulate one trial and return ``(succeeded, path)``.

    Each year records the portfolio total, withdraws the inflation-indexed
    amount pro rata across assets, then applies an independent normal return
    to every asset.  A total of zero is absorbing: the rest of the path is
    zero and the trial fails.
    """
    years = int(params.years)
    values = np.array([float(a.principal) for a in assets])
    means = [a.expected_return_pct / 100.0 for a in assets]
    stdevs = [float(risk_table[a.risk]) for a in assets]
    path = np.zeros(years)

    for year in range(years):
        total = float(values.sum())
        path[year] = total
        if total <= 0:
            # remaining entries are already zero
            return False, path

        withdrawal = annual_withdrawal * (1 + params.inflation) ** year
        fraction = min(1.0, withdrawal / total)
        values = values * (1 - fraction)

        for i in range(len(values)):
            r = normal_sample(means[i], stdevs[i], rng)
            values[i] = max(0.0, values[i] * (1 + r))

    # Never false after the floor at zero; only early ruin counts as failure.
    return bool(values.sum() >= 0), path


def _run_chunk(
    assets: Sequence[Asset],
    params: SimulationParameters,
    annual_withdrawal: float,
    n_runs: int,
    rng: UniformSource,
    risk_table: Mapping[RiskTier, float],
) -> Tuple[int, List[np.ndarray]]:
    successes = 0
    paths: List[np.ndarray] = []
    for _ in range(n_runs):
        ok, path = simulate_path(assets, params, annual_withdrawal, rng, risk_table)
        if ok:
            successes += 1
        paths.append(path)
    return successes, paths


def _chunk_sizes(total: int, workers: int) -> List[int]:
    base, extra = divmod(total, workers)
    return [base + (1 if i < extra else 0) for i in range(workers)]


def run_monte_carlo(
    assets: Sequence[Asset],
    params: SimulationParameters,
    annual_withdrawal: float,
    rng: np.random.Generator,
    risk_table: Mapping[RiskTier, float] = RISK_STD_DEV,
    workers: int = 1,
) -> RunOutcome:
    """Run ``params.runs`` independent trials at one withdrawal amount.

    With ``workers > 1`` the runs are split into contiguous chunks, each with
    its own child generator spawned from ``rng``, and the chunk results are
    concatenated in chunk order.  Output is reproducible for a given seed and
    worker count.
    """
    n_runs = int(params.runs)
    if n_runs <= 0:
        return RunOutcome(success_rate=0.0, paths=[])

    workers = max(1, min(int(workers), n_runs))
    if workers == 1:
        successes, paths = _run_chunk(assets, params, annual_withdrawal, n_runs, rng, risk_table)
    else:
        children = rng.spawn(workers)
        sizes = _chunk_sizes(n_runs, workers)
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [
                pool.submit(_run_chunk, assets, params, annual_withdrawal, size, child, risk_table)
                for size, child in zip(sizes, children)
            ]
            chunks = [f.result() for f in futures]
        successes = sum(s for s, _ in chunks)
        paths = [p for _, chunk_paths in chunks for p in chunk_paths]

    logger.debug(
        "monte carlo: withdrawal=%.2f runs=%d successes=%d", annual_withdrawal, n_runs, successes
    )
    return RunOutcome(success_rate=successes / n_runs, paths=paths)


__all__ = [
    "Asset",
    "SimulationParameters",
    "RunOutcome",
    "total_principal",
    "simulate_path",
    "run_monte_carlo",
]
