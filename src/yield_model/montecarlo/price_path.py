# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Stochastic price-path generator.

Each daily step multiplies the price by ``1 + daily_drift + shock`` where the
shock is drawn uniformly from ``[-daily_vol, daily_vol]``. This is a
simple random walk, not a lognormal process.

Randomness comes from an injected uniform sampler so that tests and
reproducible runs can supply their own draws.
"""

import math
from typing import List, Optional, Protocol, Sequence, Union, runtime_checkable

import numpy as np

from ..compounding import DAYS_PER_YEAR
from .scenarios import PriceScenario


@runtime_checkable
class UniformSampler(Protocol):
    """Source of uniform random draws.

    ``numpy.random.Generator`` satisfies this protocol.
    """

    def uniform(self, low: float, high: float, size: int) -> Sequence[float]:
        """Return ``size`` independent draws from [low, high)."""
        ...


def default_sampler(seed: Optional[int] = None) -> np.random.Generator:
    """Create a numpy generator, seeded when ``seed`` is given."""
    return np.random.default_rng(seed)


def simulate_path(start_price: float,
                  days: int,
                  drift_per_year: float,
                  volatility_per_year: float,
                  sampler: Optional[UniformSampler] = None) -> List[float]:
    """Simulate a daily price path.

    Args:
        start_price: Price at day 0
        days: Number of daily steps
        drift_per_year: Annual drift as decimal
        volatility_per_year: Annual volatility as decimal
        sampler: Uniform sampler; a fresh unseeded generator when None

    Returns:
        List of ``days + 1`` prices starting with ``start_price``. A
        non-positive ``days`` returns ``[start_price]``.
    """
    prices = [start_price]
    steps = int(days)
    if steps <= 0:
        return prices

    daily_drift = drift_per_year / DAYS_PER_YEAR
    # The shock interval is symmetric, so a negative volatility describes
    # the same interval as its absolute value.
    daily_vol = abs(volatility_per_year) / math.sqrt(DAYS_PER_YEAR)

    if sampler is None:
        sampler = default_sampler()
    shocks = sampler.uniform(-daily_vol, daily_vol, steps)

    price = start_price
    for shock in shocks:
        price = price * (1 + daily_drift + float(shock))
        prices.append(price)
    return prices


class PricePathGenerator:
    """Generates price paths for a fixed drift/volatility profile.

    Example:
        >>> gen = PricePathGenerator.from_scenario("bullish", np.random.default_rng(7))
        >>> path = gen.generate(1.0, 365)
        >>> len(path)
        366
    """

    def __init__(self,
                 drift: float,
                 volatility: float,
                 sampler: Optional[UniformSampler] = None):
        """Initialize the generator.

        Args:
            drift: Annual drift as decimal
            volatility: Annual volatility as decimal
            sampler: Uniform sampler shared by every generated path. If None,
                     an unseeded numpy generator is created.
        """
        self.drift = drift
        self.volatility = volatility
        self.sampler = sampler if sampler is not None else default_sampler()

    @classmethod
    def from_scenario(cls,
                      scenario: Union[str, PriceScenario],
                      sampler: Optional[UniformSampler] = None) -> 'PricePathGenerator':
        if isinstance(scenario, str):
            scenario = PriceScenario.get(scenario)
        return cls(scenario.drift, scenario.volatility, sampler)

    def generate(self, start_price: float, days: int) -> List[float]:
        """Generate one path of ``days + 1`` prices."""
        return simulate_path(start_price, days, self.drift, self.volatility, self.sampler)

    def generate_terminal_price(self, start_price: float, days: int) -> float:
        """Generate one path and return only its last price."""
        return self.generate(start_price, days)[-1]

    def __repr__(self) -> str:
        return f"PricePathGenerator(drift={self.drift}, volatility={self.volatility})"
