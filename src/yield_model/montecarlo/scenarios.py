# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Price scenario profiles for the price-path simulator.

A scenario is a (drift, volatility) pair expressed per year. The profiles
reflect the typical range of a yield-bearing pool token: a stable token with
~2% volatility and no drift, directional bull/bear markets, and a high
volatility regime.
"""

from dataclasses import dataclass
from typing import Dict, List

from ..exceptions import UnknownScenarioError


@dataclass(frozen=True)
class PriceScenario:
    """Annual drift and volatility for a simulated price path.

    Attributes:
        name: Scenario identifier (e.g., "stable")
        drift: Annual drift as decimal (e.g., 0.15 for +15%/year)
        volatility: Annual volatility as decimal (e.g., 0.02 for 2%)
    """
    name: str
    drift: float
    volatility: float

    @classmethod
    def get(cls, name: str) -> 'PriceScenario':
        """Look up a built-in scenario by name.

        Raises:
            UnknownScenarioError: If no scenario has that name
        """
        try:
            return PRICE_SCENARIOS[name]
        except KeyError:
            available = ", ".join(sorted(PRICE_SCENARIOS))
            raise UnknownScenarioError(
                f"Unknown price scenario '{name}'. Available: {available}"
            ) from None

    @classmethod
    def names(cls) -> List[str]:
        return list(PRICE_SCENARIOS.keys())


PRICE_SCENARIOS: Dict[str, PriceScenario] = {
    "stable": PriceScenario("stable", 0.0, 0.02),
    "bullish": PriceScenario("bullish", 0.15, 0.10),
    "bearish": PriceScenario("bearish", -0.15, 0.10),
    "volatile": PriceScenario("volatile", 0.0, 0.15),
}

STABLE = PRICE_SCENARIOS["stable"]
