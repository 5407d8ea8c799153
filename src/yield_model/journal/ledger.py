# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Append-only trade ledger.

The ledger owns the trade collection, keyed by trade id in insertion order.
There is no edit or delete: a correction, or the close of an open trade, is
recorded as a new trade.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from ..exceptions import DuplicateTradeIdError
from .ids import TradeIdGenerator, default_id_generator
from .trade import Trade, TradeInput

logger = logging.getLogger(__name__)

# Attempts at drawing a free id before giving up
MAX_ID_ATTEMPTS = 16


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _free_id(trades: Mapping[str, Trade], id_generator: TradeIdGenerator) -> str:
    for _ in range(MAX_ID_ATTEMPTS):
        trade_id = id_generator()
        if trade_id not in trades:
            return trade_id
        logger.warning("Trade id %s already in ledger, drawing another", trade_id)
    raise DuplicateTradeIdError(
        f"No free trade id after {MAX_ID_ATTEMPTS} attempts"
    )


def append_trade(trades: Mapping[str, Trade],
                 trade: TradeInput,
                 id_generator: Optional[TradeIdGenerator] = None,
                 clock: Optional[Callable[[], datetime]] = None
                 ) -> Tuple[Dict[str, Trade], Trade]:
    """Record a trade.

    Args:
        trades: Current collection of trade id to Trade. Not modified.
        trade: The trade to record
        id_generator: Source of fresh ids; the shared sequential generator if None
        clock: Source of "now" for trades without a timestamp

    Returns:
        Tuple of (next collection, stored trade)

    Raises:
        DuplicateTradeIdError: If the generator keeps returning taken ids
    """
    id_generator = id_generator or default_id_generator
    clock = clock or _utc_now

    trade_id = _free_id(trades, id_generator)
    timestamp = trade.timestamp if trade.timestamp is not None else clock()
    stored = Trade.from_input(trade_id, trade, timestamp)

    next_trades = dict(trades)
    next_trades[trade_id] = stored
    logger.debug("Recorded %s %s %s (%s), pnl=%s",
                 stored.id, stored.side.value, stored.symbol, stored.status.value, stored.pnl)
    return next_trades, stored


class TradeLedger:
    """Object wrapper around a trade collection.

    Example:
        >>> ledger = TradeLedger()
        >>> trade = ledger.append(TradeInput("SOL-PERP", "long", 235.5, 10,
        ...                                  status="closed", exit_price=240.0))
        >>> trade.pnl
        45.0
    """

    def __init__(self,
                 trades: Optional[Mapping[str, Trade]] = None,
                 id_generator: Optional[TradeIdGenerator] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        """Initialize the ledger.

        Args:
            trades: Existing trade collection (e.g., loaded from a snapshot)
            id_generator: Source of fresh trade ids
            clock: Source of "now" for trades without a timestamp
        """
        self._trades: Dict[str, Trade] = dict(trades or {})
        self._id_generator = id_generator
        self._clock = clock

    def append(self, trade: TradeInput) -> Trade:
        """Record a trade and return the stored record."""
        self._trades, stored = append_trade(self._trades, trade,
                                            self._id_generator, self._clock)
        return stored

    @property
    def trades(self) -> List[Trade]:
        """All trades in insertion order."""
        return list(self._trades.values())

    def get(self, trade_id: str) -> Optional[Trade]:
        return self._trades.get(trade_id)

    def snapshot(self) -> Dict[str, Trade]:
        """Copy of the trade collection keyed by id."""
        return dict(self._trades)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        """Serialisable mapping of trade id to trade record."""
        return {trade_id: trade.to_dict() for trade_id, trade in self._trades.items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping[str, Any]],
                  id_generator: Optional[TradeIdGenerator] = None,
                  clock: Optional[Callable[[], datetime]] = None) -> 'TradeLedger':
        """Rebuild a ledger from :meth:`to_dict` output."""
        trades = {}
        for trade_id, record in data.items():
            trade = Trade.from_dict({**record, 'id': record.get('id', trade_id)})
            trades[trade.id] = trade
        return cls(trades, id_generator, clock)

    def __len__(self) -> int:
        return len(self._trades)

    def __contains__(self, trade_id: str) -> bool:
        return trade_id in self._trades

    def __iter__(self):
        return iter(self._trades.values())

    def __repr__(self) -> str:
        return f"TradeLedger(num_trades={len(self._trades)})"
