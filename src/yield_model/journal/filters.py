# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""Trade filters for analytics."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import FrozenSet, Iterable, List, Optional

from .trade import Side, Trade, as_tag_set, as_utc, coerce_enum


@dataclass(frozen=True)
class TradeFilter:
    """AND-composed trade filter. Unset criteria match everything.

    Attributes:
        symbol: Exact symbol match
        side: Exact side match ("long" or "short")
        tags: Matches trades carrying at least one of these tags
        start: Earliest timestamp, inclusive
        end: Latest timestamp, inclusive
    """
    symbol: Optional[str] = None
    side: Optional[Side] = None
    tags: FrozenSet[str] = field(default_factory=frozenset)
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def __post_init__(self):
        if self.side is not None:
            object.__setattr__(self, 'side', coerce_enum(Side, self.side, "side"))
        object.__setattr__(self, 'tags', as_tag_set(self.tags))
        if self.start is not None:
            object.__setattr__(self, 'start', as_utc(self.start))
        if self.end is not None:
            object.__setattr__(self, 'end', as_utc(self.end))

    def matches(self, trade: Trade) -> bool:
        if self.symbol is not None and trade.symbol != self.symbol:
            return False
        if self.side is not None and trade.side is not self.side:
            return False
        if self.tags and not trade.has_any_tag(self.tags):
            return False
        if self.start is not None and trade.timestamp < self.start:
            return False
        if self.end is not None and trade.timestamp > self.end:
            return False
        return True

    def apply(self, trades: Iterable[Trade]) -> List[Trade]:
        return [trade for trade in trades if self.matches(trade)]
