# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Monte Carlo simulation orchestrator.

Each trial combines the deterministic compounded yield of a position with a
simulated move of the underlying token price, then the trials are reduced to
percentile statistics.
"""

import logging
from typing import Optional, Union

from ..compounding import project
from .config import MonteCarloConfig, RECOMMENDED_MIN_TRIALS
from .price_path import PricePathGenerator, UniformSampler, default_sampler
from .results import SimulationSummary, SimulationTrial
from .scenarios import STABLE, PriceScenario

logger = logging.getLogger(__name__)


class MonteCarloSimulator:
    """Runs repeated yield-plus-price trials for a position.

    The workflow per trial:
    1. Generate a price path starting at the normalised price 1.0
    2. Compound the principal at the given APY over the period
    3. Add the price return on the principal to the yield
    4. Record total value and ROI

    Example:
        >>> simulator = MonteCarloSimulator(
        ...     config=MonteCarloConfig(num_simulations=1000, random_seed=42)
        ... )
        >>> summary = simulator.run(10000, 14.5, 365)
        >>> print(f"Median: {summary.median.total_value:.2f}")
    """

    def __init__(self,
                 config: Optional[MonteCarloConfig] = None,
                 scenario: Union[str, PriceScenario] = STABLE,
                 sampler: Optional[UniformSampler] = None):
        """Initialize the simulator.

        Args:
            config: Simulation configuration. If None, uses defaults.
            scenario: Price scenario or its name. Defaults to "stable".
            sampler: Uniform sampler for price shocks. If None, a numpy
                     generator seeded from ``config.random_seed`` is used.
        """
        self.config = config or MonteCarloConfig()
        if isinstance(scenario, str):
            scenario = PriceScenario.get(scenario)
        self.scenario = scenario
        if sampler is None:
            sampler = default_sampler(self.config.random_seed)
        self.path_generator = PricePathGenerator.from_scenario(scenario, sampler)

    def run(self, principal: float, apy_percent: float, days: int) -> SimulationSummary:
        """Run all configured trials and reduce them to percentiles.

        Args:
            principal: Amount deposited in the position
            apy_percent: Annual percentage yield of the position
            days: Holding period in days

        Returns:
            SimulationSummary with the worst/p25/median/p75/best trials
        """
        num_trials = self.config.num_simulations
        if num_trials < RECOMMENDED_MIN_TRIALS:
            logger.warning("Running %d trials; at least %d are recommended for stable percentiles",
                           num_trials, RECOMMENDED_MIN_TRIALS)

        # The yield leg is deterministic, so it is shared by every trial
        yield_component = project(principal, apy_percent, days) - principal

        trials = [self._run_trial(principal, yield_component, days)
                  for _ in range(num_trials)]
        summary = SimulationSummary.from_trials(trials, principal)

        logger.debug("Monte Carlo %s scenario: %d trials, median total %.4f",
                     self.scenario.name, num_trials, summary.median.total_value)
        return summary

    def run_single(self, principal: float, apy_percent: float, days: int) -> SimulationTrial:
        """Run one trial and return it.

        Useful for debugging or inspecting an individual outcome.
        """
        yield_component = project(principal, apy_percent, days) - principal
        return self._run_trial(principal, yield_component, days)

    def _run_trial(self, principal: float, yield_component: float, days: int) -> SimulationTrial:
        terminal_price = self.path_generator.generate_terminal_price(1.0, days)
        price_return = principal * (terminal_price - 1)
        total_value = principal + yield_component + price_return
        if principal != 0:
            roi = (total_value - principal) / principal * 100
        else:
            roi = 0.0
        return SimulationTrial(
            yield_component=yield_component,
            price_return_component=price_return,
            total_value=total_value,
            roi=roi,
            terminal_price=terminal_price,
        )


def run_trials(principal: float,
               apy_percent: float,
               days: int,
               trial_count: int,
               sampler: Optional[UniformSampler] = None) -> SimulationSummary:
    """Monte Carlo percentiles for a position under the stable price profile.

    Args:
        principal: Amount deposited in the position
        apy_percent: Annual percentage yield
        days: Holding period in days
        trial_count: Number of trials (>= 1; 1000+ recommended)
        sampler: Uniform sampler for price shocks; unseeded numpy if None

    Returns:
        SimulationSummary. A zero principal reports roi as 0 rather than NaN.
    """
    simulator = MonteCarloSimulator(
        config=MonteCarloConfig(num_simulations=trial_count),
        scenario=STABLE,
        sampler=sampler,
    )
    return simulator.run(principal, apy_percent, days)
