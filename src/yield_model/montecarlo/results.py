# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Monte Carlo simulation results aggregation.

This module reduces a set of simulation trials to nearest-rank percentiles
(no interpolation) of the total position value, and derives simple risk
metrics from the tails.
"""

from dataclasses import asdict, dataclass
from typing import Dict, List, Sequence

import pandas as pd

# Standard percentile levels for analysis, lowest first
PERCENTILE_RANKS = {
    "worst": 0.05,
    "p25": 0.25,
    "median": 0.50,
    "p75": 0.75,
    "best": 0.95,
}


@dataclass(frozen=True)
class SimulationTrial:
    """Outcome of one Monte Carlo trial.

    Attributes:
        yield_component: Compounded yield earned over the period
        price_return_component: Gain or loss from the token price move
        total_value: principal + yield_component + price_return_component
        roi: Return on principal in percent
        terminal_price: Normalised price at the end of the path (start = 1.0)
    """
    yield_component: float
    price_return_component: float
    total_value: float
    roi: float
    terminal_price: float = 1.0


@dataclass(frozen=True)
class RiskMetrics:
    """Tail-based risk measures of a simulation summary, in percent of principal."""
    downside_risk: float
    upside_potential: float
    reward_to_risk: float


@dataclass(frozen=True)
class SimulationSummary:
    """Five trials picked at fixed ranks of the sorted total values.

    Invariant: worst.total_value <= p25 <= median <= p75 <= best.
    """
    worst: SimulationTrial
    p25: SimulationTrial
    median: SimulationTrial
    p75: SimulationTrial
    best: SimulationTrial
    principal: float
    num_trials: int

    @classmethod
    def from_trials(cls, trials: Sequence[SimulationTrial],
                    principal: float) -> 'SimulationSummary':
        """Sort trials by total value and select the percentile records.

        The trial at index ``floor(n * rank)`` is selected for each rank.

        Raises:
            ValueError: If no trials are given
        """
        n = len(trials)
        if n == 0:
            raise ValueError("Cannot summarise an empty set of trials")

        ordered = sorted(trials, key=lambda t: t.total_value)
        picked = {}
        for name, rank in PERCENTILE_RANKS.items():
            idx = int(n * rank)
            idx = min(idx, n - 1)
            picked[name] = ordered[idx]
        return cls(principal=principal, num_trials=n, **picked)

    def percentiles(self) -> Dict[str, SimulationTrial]:
        """Map of percentile name to trial, lowest rank first."""
        return {name: getattr(self, name) for name in PERCENTILE_RANKS}

    def total_values(self) -> List[float]:
        return [trial.total_value for trial in self.percentiles().values()]

    def risk_metrics(self) -> RiskMetrics:
        """Downside risk, upside potential and their ratio.

        Downside risk is the loss at the 5th percentile and upside potential
        the gain at the 95th, both in percent of principal. The ratio is 0
        when there is no downside.
        """
        if self.principal == 0:
            return RiskMetrics(0.0, 0.0, 0.0)

        downside = (self.principal - self.worst.total_value) / self.principal * 100
        upside = (self.best.total_value - self.principal) / self.principal * 100
        ratio = upside / downside if downside != 0 else 0.0
        return RiskMetrics(downside, upside, ratio)

    def to_dataframe(self) -> pd.DataFrame:
        """Percentile trials as a DataFrame indexed by percentile name."""
        df = pd.DataFrame(
            [dict(asdict(trial), rank=PERCENTILE_RANKS[name])
             for name, trial in self.percentiles().items()],
            index=list(PERCENTILE_RANKS),
        )
        df.index.name = 'percentile'
        return df

    def as_dict(self) -> Dict[str, Dict[str, float]]:
        return {name: asdict(trial) for name, trial in self.percentiles().items()}

    def __repr__(self) -> str:
        return (f"SimulationSummary(num_trials={self.num_trials}, "
                f"median_total_value={self.median.total_value:.2f})")
