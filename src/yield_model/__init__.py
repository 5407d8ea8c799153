# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Yield Model

Yield projection and trade-performance analytics for on-chain positions:
compound-interest projection, Monte Carlo simulation of yield plus token
price moves, an append-only trade journal with performance analytics, and a
registry of yield positions with portfolio-level blended APY.

Example usage:
    from yield_model import project, run_trials, TradeLedger, TradeInput, compute_analytics

    final_value = project(10000, 14.5, 365)
    summary = run_trials(10000, 14.5, 365, trial_count=1000)
    print(summary.median.total_value)

    ledger = TradeLedger()
    ledger.append(TradeInput("SOL-PERP", "long", 235.5, 10,
                             status="closed", exit_price=240.0, fees=2.35))
    analytics = compute_analytics(ledger.trades)
    print(analytics.summary.win_rate)
"""

import logging

# Projection
from .compounding import (
    project,
    projection_schedule,
    apy_sensitivity,
    compare_yields,
    YieldScenario,
    DAYS_PER_YEAR,
    DEFAULT_COMPOUNDING_FREQUENCY,
)

# Monte Carlo Simulation
from .montecarlo import (
    MonteCarloConfig,
    MonteCarloSimulator,
    PriceScenario,
    PricePathGenerator,
    RiskMetrics,
    SimulationSummary,
    SimulationTrial,
    UniformSampler,
    simulate_path,
    run_trials,
)

# Trade Journal
from .journal import (
    Side,
    TradeStatus,
    TradeInput,
    Trade,
    TradeFilter,
    TradeLedger,
    SequentialIdGenerator,
    UuidIdGenerator,
    Analytics,
    EquityPoint,
    append_trade,
    compute_analytics,
)

# Positions
from .positions import (
    Position,
    PositionType,
    PositionRegistry,
    PortfolioSummary,
    upsert_position,
    remove_position,
    compute_portfolio,
)

# Errors
from .exceptions import (
    YieldModelError,
    InvalidTradeError,
    TradeStateError,
    DuplicateTradeIdError,
    UnknownScenarioError,
)

# Version
from .__meta__ import __version__

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Projection
    'project', 'projection_schedule', 'apy_sensitivity', 'compare_yields',
    'YieldScenario', 'DAYS_PER_YEAR', 'DEFAULT_COMPOUNDING_FREQUENCY',
    # Monte Carlo
    'MonteCarloConfig', 'MonteCarloSimulator', 'PriceScenario', 'PricePathGenerator',
    'RiskMetrics', 'SimulationSummary', 'SimulationTrial', 'UniformSampler',
    'simulate_path', 'run_trials',
    # Trade Journal
    'Side', 'TradeStatus', 'TradeInput', 'Trade', 'TradeFilter', 'TradeLedger',
    'SequentialIdGenerator', 'UuidIdGenerator', 'Analytics', 'EquityPoint',
    'append_trade', 'compute_analytics',
    # Positions
    'Position', 'PositionType', 'PositionRegistry', 'PortfolioSummary',
    'upsert_position', 'remove_position', 'compute_portfolio',
    # Errors
    'YieldModelError', 'InvalidTradeError', 'TradeStateError',
    'DuplicateTradeIdError', 'UnknownScenarioError',
    # Version
    '__version__',
]
