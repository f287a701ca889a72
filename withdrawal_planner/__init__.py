"""Monte Carlo safe withdrawal planner.

``find_safe_withdrawal`` (alias ``solve``) is the single entry point used by
the Streamlit host; everything else is exposed for tests and scripting.
"""

from .calculators.monte_carlo import Asset, SimulationParameters
from .calculators.percentiles import PercentileBand
from .calculators.withdrawal import SolverResult, find_safe_withdrawal, solve
from .constants import RiskTier

__all__ = [
    "Asset",
    "SimulationParameters",
    "PercentileBand",
    "SolverResult",
    "RiskTier",
    "find_safe_withdrawal",
    "solve",
]
