# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Compound-interest projection for yield positions.

The projector is a pure, total function: it never validates its inputs.
Degenerate arguments (zero or negative compounding frequency, negative
durations) produce inf/nan instead of raising, so callers that need
meaningful numbers must validate before calling.
"""

from dataclasses import dataclass
from typing import Iterable, Mapping

import numpy as np
import pandas as pd

DAYS_PER_YEAR = 365
DEFAULT_COMPOUNDING_FREQUENCY = 365


def project(principal: float, apy_percent: float, days: float,
            compounding_frequency: float = DEFAULT_COMPOUNDING_FREQUENCY) -> float:
    """Project the value of ``principal`` after ``days`` of compounding.

    final = principal * (1 + apy/100/frequency) ** (days / (365/frequency))

    Args:
        principal: Starting amount
        apy_percent: Annual percentage yield (e.g. 14.5 for 14.5%), may be negative
        days: Holding period in days
        compounding_frequency: Compounding periods per year (365 = daily)

    Returns:
        Final value as a float. May be inf or nan for degenerate inputs.
    """
    with np.errstate(all='ignore'):
        rate = np.float64(apy_percent) / 100
        frequency = np.float64(compounding_frequency)
        periods = np.float64(days) / (DAYS_PER_YEAR / frequency)
        growth = np.power(1 + rate / frequency, periods)
        return float(np.float64(principal) * growth)


@dataclass
class YieldScenario:
    """Inputs for a single compound-interest projection.

    Attributes:
        principal: Starting amount (expected >= 0)
        annual_percentage_yield: APY in percent, any sign
        duration_days: Holding period in days (expected >= 0)
        compounding_frequency: Compounding periods per year (expected >= 1)
    """
    principal: float
    annual_percentage_yield: float
    duration_days: float
    compounding_frequency: float = DEFAULT_COMPOUNDING_FREQUENCY

    def project(self) -> float:
        """Final value of this scenario."""
        return project(self.principal, self.annual_percentage_yield,
                       self.duration_days, self.compounding_frequency)

    def profit(self) -> float:
        return self.project() - self.principal


def projection_schedule(principal: float, apy_percent: float, days: int,
                        step_days: int = 30, max_periods: int = 12,
                        compounding_frequency: float = DEFAULT_COMPOUNDING_FREQUENCY
                        ) -> pd.DataFrame:
    """Project the value at regular checkpoints (monthly by default).

    One row is produced per whole step that fits inside ``days``, capped at
    ``max_periods`` rows.

    Returns:
        DataFrame with columns Period, Days, Value and Profit
    """
    rows = []
    for period in range(1, max_periods + 1):
        period_days = period * step_days
        if period_days > days:
            break
        value = project(principal, apy_percent, period_days, compounding_frequency)
        rows.append({
            'Period': period,
            'Days': period_days,
            'Value': value,
            'Profit': value - principal,
        })
    return pd.DataFrame(rows, columns=['Period', 'Days', 'Value', 'Profit'])


def apy_sensitivity(principal: float, apy_values: Iterable[float], days: float,
                    compounding_frequency: float = DEFAULT_COMPOUNDING_FREQUENCY
                    ) -> pd.DataFrame:
    """Final value and ROI of the same principal across a range of APYs.

    Returns:
        DataFrame with columns APY, Final Value, Profit and ROI (percent)
    """
    rows = []
    for apy in apy_values:
        value = project(principal, apy, days, compounding_frequency)
        roi = (value / principal - 1) * 100 if principal else 0.0
        rows.append({
            'APY': apy,
            'Final Value': value,
            'Profit': value - principal,
            'ROI': roi,
        })
    return pd.DataFrame(rows, columns=['APY', 'Final Value', 'Profit', 'ROI'])


def compare_yields(principal: float, days: float,
                   alternatives: Mapping[str, float],
                   compounding_frequency: float = DEFAULT_COMPOUNDING_FREQUENCY
                   ) -> pd.DataFrame:
    """Compare named yield alternatives (e.g. savings vs. staking) side by side.

    Args:
        principal: Amount invested in each alternative
        days: Holding period in days
        alternatives: Mapping of alternative name to APY in percent

    Returns:
        DataFrame indexed by alternative name with APY and Final Value columns
    """
    df = pd.DataFrame(
        [{'Name': name,
          'APY': apy,
          'Final Value': project(principal, apy, days, compounding_frequency)}
         for name, apy in alternatives.items()],
        columns=['Name', 'APY', 'Final Value'],
    )
    return df.set_index('Name')
