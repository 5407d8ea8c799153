# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Trade performance analytics.

Everything here is computed over closed trades only (those with a realised
pnl), after filtering. The equity curve replays closed trades in timestamp
order starting from zero equity; the running peak also starts at zero, so a
losing first trade shows an absolute drawdown but a 0% drawdown percentage.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import pandas as pd

from .filters import TradeFilter
from .trade import Side, Trade, TradeStatus


@dataclass(frozen=True)
class EquityPoint:
    timestamp: datetime
    equity: float
    drawdown: float
    drawdown_percent: float


@dataclass(frozen=True)
class PerformanceSummary:
    total_trades: int = 0
    closed_trades: int = 0
    open_trades: int = 0
    win_rate: float = 0.0
    total_pnl: float = 0.0
    avg_win: float = 0.0
    avg_loss: float = 0.0
    profit_factor: float = 0.0
    max_drawdown: float = 0.0
    max_drawdown_percent: float = 0.0
    current_equity: float = 0.0
    peak_equity: float = 0.0


@dataclass(frozen=True)
class BiasBreakdown:
    """Long/short split of closed trades."""
    long_count: int = 0
    short_count: int = 0
    long_percent: float = 0.0
    short_percent: float = 0.0
    long_pnl: float = 0.0
    short_pnl: float = 0.0

    @property
    def dominant_side(self) -> Optional[Side]:
        """The side with more trades, None when balanced or empty."""
        if self.long_count > self.short_count:
            return Side.LONG
        if self.short_count > self.long_count:
            return Side.SHORT
        return None


@dataclass(frozen=True)
class FeeBreakdown:
    total_fees: float = 0.0
    avg_fee_per_trade: float = 0.0
    fee_percent_of_pnl: float = 0.0


@dataclass(frozen=True)
class Analytics:
    """Result of :func:`compute_analytics`.

    Attributes:
        summary: Win rate, pnl, profit factor and drawdown figures
        bias: Long/short breakdown
        fees: Fee totals and ratios
        equity_curve: One point per closed trade, in timestamp order
        trades: The filtered trades (open and closed) in ledger order
    """
    summary: PerformanceSummary = field(default_factory=PerformanceSummary)
    bias: BiasBreakdown = field(default_factory=BiasBreakdown)
    fees: FeeBreakdown = field(default_factory=FeeBreakdown)
    equity_curve: List[EquityPoint] = field(default_factory=list)
    trades: List[Trade] = field(default_factory=list)

    def recent_trades(self, limit: int = 10) -> List[Trade]:
        """Most recent filtered trades, newest first."""
        ordered = sorted(self.trades, key=lambda t: t.timestamp, reverse=True)
        return ordered[:limit]

    def equity_curve_frame(self) -> pd.DataFrame:
        """Equity curve as a DataFrame indexed by timestamp."""
        columns = ['timestamp', 'equity', 'drawdown', 'drawdown_percent']
        df = pd.DataFrame([asdict(point) for point in self.equity_curve], columns=columns)
        return df.set_index('timestamp')

    def as_dict(self) -> Dict[str, Any]:
        return {
            'summary': asdict(self.summary),
            'bias': asdict(self.bias),
            'fees': asdict(self.fees),
            'equity_curve': [
                dict(asdict(point), timestamp=point.timestamp.isoformat())
                for point in self.equity_curve
            ],
            'trades': [trade.to_dict() for trade in self.trades],
        }


def _mean(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _percent(part: float, whole: float) -> float:
    return part / whole * 100 if whole else 0.0


def build_equity_curve(closed_trades: Iterable[Trade]) -> List[EquityPoint]:
    """Replay closed trades chronologically into an equity curve.

    Trades with equal timestamps keep their input order.
    """
    equity = 0.0
    peak = 0.0
    curve = []
    for trade in sorted(closed_trades, key=lambda t: t.timestamp):
        equity += trade.pnl
        peak = max(peak, equity)
        drawdown = peak - equity
        curve.append(EquityPoint(
            timestamp=trade.timestamp,
            equity=equity,
            drawdown=drawdown,
            drawdown_percent=drawdown / peak * 100 if peak > 0 else 0.0,
        ))
    return curve


def compute_analytics(trades: Union[Iterable[Trade], Mapping[str, Trade]],
                      filters: Optional[TradeFilter] = None) -> Analytics:
    """Compute performance analytics over a set of trades.

    Args:
        trades: Trades, or a mapping of trade id to trade
        filters: Optional filter applied before any computation

    Returns:
        Analytics; all figures are zero for an empty selection
    """
    if isinstance(trades, Mapping):
        trades = trades.values()
    selected = list(trades)
    if filters is not None:
        selected = filters.apply(selected)

    closed = [t for t in selected if t.status is TradeStatus.CLOSED and t.pnl is not None]
    winners = [t.pnl for t in closed if t.pnl > 0]
    losers = [t.pnl for t in closed if t.pnl < 0]

    gross_profit = sum(winners)
    gross_loss = abs(sum(losers))
    profit_factor = gross_profit / gross_loss if gross_loss > 0 else 0.0

    curve = build_equity_curve(closed)
    current_equity = curve[-1].equity if curve else 0.0
    peak_equity = max([0.0] + [point.equity for point in curve])

    summary = PerformanceSummary(
        total_trades=len(selected),
        closed_trades=len(closed),
        open_trades=sum(1 for t in selected if t.status is TradeStatus.OPEN),
        win_rate=_percent(len(winners), len(closed)),
        total_pnl=sum(t.pnl for t in closed),
        avg_win=_mean(winners),
        avg_loss=_mean(losers),
        profit_factor=profit_factor,
        max_drawdown=max([0.0] + [point.drawdown for point in curve]),
        max_drawdown_percent=max([0.0] + [point.drawdown_percent for point in curve]),
        current_equity=current_equity,
        peak_equity=peak_equity,
    )

    longs = [t for t in closed if t.side is Side.LONG]
    shorts = [t for t in closed if t.side is Side.SHORT]
    sided = len(longs) + len(shorts)
    bias = BiasBreakdown(
        long_count=len(longs),
        short_count=len(shorts),
        long_percent=_percent(len(longs), sided),
        short_percent=_percent(len(shorts), sided),
        long_pnl=sum(t.pnl for t in longs),
        short_pnl=sum(t.pnl for t in shorts),
    )

    total_fees = sum(t.fees or 0.0 for t in closed)
    fees = FeeBreakdown(
        total_fees=total_fees,
        avg_fee_per_trade=total_fees / len(closed) if closed else 0.0,
        fee_percent_of_pnl=_percent(total_fees, abs(current_equity)),
    )

    return Analytics(summary=summary, bias=bias, fees=fees,
                     equity_curve=curve, trades=selected)
