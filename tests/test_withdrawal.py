"""Tests for the safe withdrawal binary search."""

import math

import numpy as np
import pytest

from withdrawal_planner.calculators import withdrawal
from withdrawal_planner.calculators.monte_carlo import Asset, SimulationParameters
from withdrawal_planner.calculators.withdrawal import SolverResult
from withdrawal_planner.constants import RiskTier

ZERO_RISK = {RiskTier.LOW: 0.0, RiskTier.MEDIUM: 0.0, RiskTier.HIGH: 0.0}


def _base_params(years=30, runs=200, threshold=0.9, inflation=0.02):
    return SimulationParameters(
        start_age=65, years=years, inflation=inflation, runs=runs, success_threshold=threshold
    )


def _portfolio():
    return [
        Asset("S&P 500", 500000.0, 8.0, RiskTier.MEDIUM),
        Asset("Bonds", 500000.0, 4.0, RiskTier.LOW),
    ]


def test_zero_principal_returns_empty_result():
    calls = []
    assets = [Asset("Nothing", 0.0, 5.0, RiskTier.LOW)]
    res = withdrawal.find_safe_withdrawal(assets, _base_params(), calls.append, seed=1)
    assert res == SolverResult(safe_withdrawal=0.0, success_rate=0.0, percentile_bands=())
    assert calls == []


def test_zero_horizon_returns_empty_result():
    res = withdrawal.find_safe_withdrawal(_portfolio(), _base_params(years=0), seed=1)
    assert res == SolverResult.empty()


def test_no_assets_returns_empty_result():
    assert withdrawal.find_safe_withdrawal([], _base_params(), seed=1) == SolverResult.empty()


def test_result_bounds_and_shape():
    params = _base_params(runs=150)
    res = withdrawal.find_safe_withdrawal(_portfolio(), params, seed=2024)
    upper = withdrawal.search_upper_bound(_portfolio(), params.years)
    assert 0.0 <= res.safe_withdrawal <= upper
    assert 0.0 <= res.success_rate <= 1.0
    assert len(res.percentile_bands) == params.years
    assert res.percentile_bands[0].age == 65
    for b in res.percentile_bands:
        assert b.p10 <= b.p50 <= b.p90
    # first year is the untouched principal on every path
    assert res.percentile_bands[0].p50 == pytest.approx(1_000_000.0)


def test_deterministic_portfolio_matches_closed_form():
    """No growth, no inflation, no risk: ruin is observed at the start of a
    year, so anything below principal / (years - 1) survives."""
    assets = [Asset("Cash", 120000.0, 0.0, RiskTier.LOW)]
    params = _base_params(years=12, runs=3, threshold=1.0, inflation=0.0)
    res = withdrawal.find_safe_withdrawal(assets, params, seed=0, risk_table=ZERO_RISK)
    assert res.safe_withdrawal == pytest.approx(120000.0 / 11, rel=1e-3)
    assert res.success_rate == 1.0


def test_progress_reported_every_iteration():
    calls = []
    withdrawal.find_safe_withdrawal(_portfolio(), _base_params(runs=20), calls.append, seed=3)
    assert len(calls) == 15
    assert calls == sorted(calls)
    assert calls[0] == pytest.approx(100 / 15)
    assert calls[-1] == 100


def test_custom_iteration_count():
    calls = []
    withdrawal.find_safe_withdrawal(_portfolio(), _base_params(runs=20), calls.append, seed=3, iterations=4)
    assert calls == [25.0, 50.0, 75.0, 100.0]


def test_reproducible_with_seed():
    params = _base_params(runs=60)
    a = withdrawal.find_safe_withdrawal(_portfolio(), params, seed=99)
    b = withdrawal.find_safe_withdrawal(_portfolio(), params, seed=99)
    assert a == b


def test_injected_generator_matches_seed():
    params = _base_params(runs=40)
    a = withdrawal.find_safe_withdrawal(_portfolio(), params, seed=5)
    b = withdrawal.find_safe_withdrawal(_portfolio(), params, rng=np.random.default_rng(5))
    assert a == b


def test_unreachable_threshold_keeps_zero_withdrawal():
    """When even tiny withdrawals fail, the result is 0 and bands still exist."""
    assets = [Asset("Cash", 1000.0, -100.0, RiskTier.LOW)]
    params = _base_params(years=5, runs=10, threshold=1.0, inflation=0.0)
    res = withdrawal.find_safe_withdrawal(assets, params, seed=0, risk_table=ZERO_RISK)
    assert res.safe_withdrawal == 0.0
    assert len(res.percentile_bands) == 5


def test_to_dict_shape():
    res = withdrawal.find_safe_withdrawal(_portfolio(), _base_params(years=3, runs=10), seed=4)
    d = res.to_dict()
    assert set(d) == {"safe_withdrawal", "success_rate", "simulation_paths"}
    assert [p["age"] for p in d["simulation_paths"]] == [65, 66, 67]
    assert math.isclose(d["safe_withdrawal"], res.safe_withdrawal)


def test_solve_alias():
    assert withdrawal.solve is withdrawal.find_safe_withdrawal
