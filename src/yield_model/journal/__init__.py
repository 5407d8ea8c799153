# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Trade journal: an append-only trade ledger and its performance analytics.
"""

from .trade import Side, TradeStatus, TradeInput, Trade, compute_pnl
from .ids import SequentialIdGenerator, UuidIdGenerator
from .filters import TradeFilter
from .ledger import TradeLedger, append_trade
from .analytics import (
    Analytics,
    BiasBreakdown,
    EquityPoint,
    FeeBreakdown,
    PerformanceSummary,
    build_equity_curve,
    compute_analytics,
)

__all__ = [
    'Side', 'TradeStatus', 'TradeInput', 'Trade', 'compute_pnl',
    'SequentialIdGenerator', 'UuidIdGenerator',
    'TradeFilter',
    'TradeLedger', 'append_trade',
    'Analytics', 'BiasBreakdown', 'EquityPoint', 'FeeBreakdown',
    'PerformanceSummary', 'build_equity_curve', 'compute_analytics',
]
