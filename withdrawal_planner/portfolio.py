"""Portfolio configuration and JSON file storage.

A portfolio is what the host edits: the asset list plus retirement age, life
expectancy and inflation (entered in percent).  It is converted to
:class:`SimulationParameters` right before a run.  Stored documents look like::

    {
      "assets": [{"name": "Bonds", "principal": 500000, "rate": 4, "risk": "Low"}],
      "start_age": 40,
      "life_expectancy": 120,
      "inflation": 2.0
    }
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, List, Optional

from .calculators.monte_carlo import Asset, SimulationParameters
from .constants import (
    DEFAULT_INFLATION,
    DEFAULT_LIFE_EXPECTANCY,
    DEFAULT_START_AGE,
    SIMULATION_RUNS,
    SUCCESS_THRESHOLD,
    RiskTier,
)

logger = logging.getLogger(__name__)

DEFAULT_PORTFOLIO_PATH = Path(__file__).resolve().parent / "data" / "portfolio.json"


class PortfolioError(ValueError):
    """Raised when a stored portfolio document cannot be parsed."""


@dataclass(frozen=True)
class Portfolio:
    assets: List[Asset] = field(default_factory=list)
    start_age: int = DEFAULT_START_AGE
    life_expectancy: int = DEFAULT_LIFE_EXPECTANCY
    inflation: float = DEFAULT_INFLATION  # percent

    @classmethod
    def default(cls) -> "Portfolio":
        return cls(
            assets=[
                Asset("S&P 500", 500000.0, 8.0, RiskTier.MEDIUM),
                Asset("Bonds", 500000.0, 4.0, RiskTier.LOW),
            ]
        )

    @classmethod
    def empty(cls) -> "Portfolio":
        return cls(assets=[])

    @property
    def years(self) -> int:
        return self.life_expectancy - self.start_age

    def total_principal(self) -> float:
        return float(sum(a.principal for a in self.assets))

    def add_asset(self, asset: Asset) -> "Portfolio":
        return replace(self, assets=[*self.assets, asset])

    def update_asset(self, index: int, asset: Asset) -> "Portfolio":
        assets = list(self.assets)
        assets[index] = asset
        return replace(self, assets=assets)

    def remove_asset(self, index: int) -> "Portfolio":
        return replace(self, assets=[a for i, a in enumerate(self.assets) if i != index])

    def simulation_parameters(
        self,
        runs: int = SIMULATION_RUNS,
        success_threshold: float = SUCCESS_THRESHOLD,
    ) -> SimulationParameters:
        return SimulationParameters(
            start_age=int(self.start_age),
            years=int(self.years),
            inflation=float(self.inflation) / 100.0,
            runs=int(runs),
            success_threshold=float(success_threshold),
        )

    def to_dict(self) -> Dict:
        return {
            "assets": [a.to_dict() for a in self.assets],
            "start_age": self.start_age,
            "life_expectancy": self.life_expectancy,
            "inflation": self.inflation,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Portfolio":
        if not isinstance(data, dict):
            raise PortfolioError("portfolio document must be a JSON object")
        entries = data.get("assets")
        if not isinstance(entries, list) or not all(isinstance(a, dict) for a in entries):
            raise PortfolioError("'assets' must be a list of objects")
        try:
            assets = [Asset.from_dict(a) for a in entries]
            start_age = int(data["start_age"])
            inflation = float(data["inflation"])
            # Older documents predate the life expectancy setting.
            life_expectancy = int(data.get("life_expectancy", DEFAULT_LIFE_EXPECTANCY))
        except (KeyError, TypeError, AttributeError) as exc:
            raise PortfolioError(f"missing or malformed field: {exc}") from exc
        except ValueError as exc:
            raise PortfolioError(str(exc)) from exc
        return cls(
            assets=assets,
            start_age=start_age,
            life_expectancy=life_expectancy,
            inflation=inflation,
        )


def validate_portfolio(portfolio: Portfolio) -> List[str]:
    """Return the problems that must be fixed before a run; empty if none."""
    problems = []
    if not portfolio.assets:
        problems.append("Please add at least one asset to your portfolio.")
    if portfolio.start_age >= portfolio.life_expectancy:
        problems.append("Retirement age must be less than life expectancy.")
    for a in portfolio.assets:
        if a.principal < 0:
            problems.append(f"Principal for '{a.name}' cannot be negative.")
    return problems


def parse_seed(text: str) -> Optional[int]:
    """Seed typed by the user, or None for blank or non-numeric input."""
    text = (text or "").strip()
    if not text.isdecimal():
        return None
    try:
        return int(text)
    except ValueError:
        return None


def load_portfolio(path: Optional[Path] = None) -> Portfolio:
    """Load a portfolio from JSON.  A missing file yields the default portfolio."""
    p = Path(path or DEFAULT_PORTFOLIO_PATH)
    if not p.exists():
        return Portfolio.default()
    try:
        with open(p, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise PortfolioError(f"invalid JSON in {p}: {exc}") from exc
    return Portfolio.from_dict(data)


def save_portfolio(portfolio: Portfolio, path: Optional[Path] = None) -> Path:
    p = Path(path or DEFAULT_PORTFOLIO_PATH)
    p.parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w", encoding="utf-8") as f:
        json.dump(portfolio.to_dict(), f, indent=2)
    logger.info("saved portfolio with %d assets to %s", len(portfolio.assets), p)
    return p


def reset_portfolio(path: Optional[Path] = None) -> Portfolio:
    """Delete the stored document and return an empty portfolio."""
    p = Path(path or DEFAULT_PORTFOLIO_PATH)
    p.unlink(missing_ok=True)
    return Portfolio.empty()


__all__ = [
    "DEFAULT_PORTFOLIO_PATH",
    "Portfolio",
    "PortfolioError",
    "validate_portfolio",
    "parse_seed",
    "load_portfolio",
    "save_portfolio",
    "reset_portfolio",
]
