"""Default assumptions shared by the calculators and the Streamlit host."""

from __future__ import annotations

from enum import Enum
from typing import Dict


class RiskTier(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


# Annual return standard deviation for each risk tier
RISK_STD_DEV: Dict[RiskTier, float] = {
    RiskTier.LOW: 0.02,
    RiskTier.MEDIUM: 0.05,
    RiskTier.HIGH: 0.10,
}

SIMULATION_RUNS = 1000
SUCCESS_THRESHOLD = 0.9  # 90% of trials must avoid ruin
SEARCH_ITERATIONS = 15

DEFAULT_START_AGE = 40
DEFAULT_LIFE_EXPECTANCY = 120
DEFAULT_INFLATION = 2.0  # percent

__all__ = [
    "RiskTier",
    "RISK_STD_DEV",
    "SIMULATION_RUNS",
    "SUCCESS_THRESHOLD",
    "SEARCH_ITERATIONS",
    "DEFAULT_START_AGE",
    "DEFAULT_LIFE_EXPECTANCY",
    "DEFAULT_INFLATION",
]
