# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Monte Carlo simulation module for yield positions.

This module combines compounded yield with a simulated token price path and
reduces many such trials to percentile outcomes.
"""

from .config import MonteCarloConfig, RECOMMENDED_MIN_TRIALS
from .scenarios import PriceScenario, PRICE_SCENARIOS
from .price_path import PricePathGenerator, UniformSampler, simulate_path
from .results import PERCENTILE_RANKS, RiskMetrics, SimulationSummary, SimulationTrial
from .simulator import MonteCarloSimulator, run_trials

__all__ = [
    'MonteCarloConfig',
    'RECOMMENDED_MIN_TRIALS',
    'PriceScenario',
    'PRICE_SCENARIOS',
    'PricePathGenerator',
    'UniformSampler',
    'simulate_path',
    'PERCENTILE_RANKS',
    'RiskMetrics',
    'SimulationSummary',
    'SimulationTrial',
    'MonteCarloSimulator',
    'run_trials',
]
