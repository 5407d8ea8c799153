# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Position registry and portfolio-level yield.

The registry owns the collection of positions keyed by name. Writes are
last-write-wins upserts and idempotent removals; nothing expires on its own.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

import pandas as pd

from ..compounding import DAYS_PER_YEAR
from .position import Position, PositionType

logger = logging.getLogger(__name__)

# Days used for the monthly yield estimate
DAYS_PER_MONTH = 30


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class PortfolioSummary:
    """Aggregate value and yield of a set of positions.

    Attributes:
        total_value: Sum of position values
        total_daily_yield: Sum of per-position daily yields
        blended_apy: Value-weighted APY in percent, None when total value is 0
        allocations: Percent of total value held in each position, by name
        position_count: Number of positions
    """
    total_value: float = 0.0
    total_daily_yield: float = 0.0
    blended_apy: Optional[float] = None
    allocations: Dict[str, float] = field(default_factory=dict)
    position_count: int = 0

    @property
    def estimated_monthly_yield(self) -> float:
        return self.total_daily_yield * DAYS_PER_MONTH

    @property
    def estimated_yearly_yield(self) -> float:
        return self.total_daily_yield * DAYS_PER_YEAR


def upsert_position(positions: Mapping[str, Position],
                    name: str,
                    token: str,
                    balance: float,
                    price: float,
                    apy: float = 0.0,
                    type: Union[str, PositionType] = PositionType.HOLD,
                    notes: str = "",
                    clock: Optional[Callable[[], datetime]] = None
                    ) -> Tuple[Dict[str, Position], Position]:
    """Create or overwrite the position called ``name``.

    Args:
        positions: Current collection of name to Position. Not modified.
        name: Position name; an existing position with this name is replaced
        token: Token symbol
        balance: Token balance
        price: Token price
        apy: Annual percentage yield in percent
        type: hold, stake, lp or lend
        notes: Free-form notes
        clock: Source of "now" for ``last_updated``

    Returns:
        Tuple of (next collection, stored position)

    Raises:
        ValueError: If ``type`` is not a known position type
    """
    clock = clock or _utc_now
    position = Position(
        name=name,
        token=token,
        balance=balance,
        price=price,
        apy=apy,
        type=type,
        notes=notes,
        last_updated=clock(),
    )
    next_positions = dict(positions)
    if name in next_positions:
        logger.debug("Overwriting position %s", name)
    next_positions[name] = position
    return next_positions, position


def remove_position(positions: Mapping[str, Position], name: str) -> Dict[str, Position]:
    """Return the collection without ``name``. Removing a missing name is a no-op."""
    next_positions = dict(positions)
    if next_positions.pop(name, None) is None:
        logger.debug("Position %s not found, nothing to remove", name)
    return next_positions


def compute_portfolio(positions: Union[Iterable[Position], Mapping[str, Position]]
                      ) -> PortfolioSummary:
    """Total value, daily yield and value-weighted APY of a set of positions.

    blended_apy = total_daily_yield * 365 / total_value * 100, which weights
    each position's APY by its value rather than averaging the APYs.
    """
    if isinstance(positions, Mapping):
        positions = positions.values()
    positions = list(positions)

    total_value = sum(p.value for p in positions)
    total_daily_yield = sum(p.daily_yield for p in positions)

    blended_apy = None
    if total_value > 0:
        blended_apy = total_daily_yield * DAYS_PER_YEAR / total_value * 100

    allocations = {
        p.name: (p.value / total_value * 100 if total_value > 0 else 0.0)
        for p in positions
    }
    return PortfolioSummary(
        total_value=total_value,
        total_daily_yield=total_daily_yield,
        blended_apy=blended_apy,
        allocations=allocations,
        position_count=len(positions),
    )


class PositionRegistry:
    """Collects named yield positions.

    Example:
        >>> registry = PositionRegistry()
        >>> registry.upsert("jlp-main", "JLP", 1000, 4.2, apy=14.5, type="lp")
        >>> registry.upsert("sol-stake", "jitoSOL", 10, 240.0, apy=7.5, type="stake")
        >>> print(f"{registry.portfolio().blended_apy:.2f}%")
    """

    def __init__(self,
                 positions: Optional[Mapping[str, Position]] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        """Initialize the registry.

        Args:
            positions: Existing positions keyed by name (e.g., from a snapshot)
            clock: Source of "now" for ``last_updated``
        """
        self._positions: Dict[str, Position] = dict(positions or {})
        self._clock = clock

    def upsert(self, name: str, token: str, balance: float, price: float,
               apy: float = 0.0, type: Union[str, PositionType] = PositionType.HOLD,
               notes: str = "") -> Position:
        """Create or overwrite a position and return it."""
        self._positions, position = upsert_position(
            self._positions, name, token, balance, price, apy, type, notes, self._clock
        )
        return position

    def remove(self, name: str) -> bool:
        """Remove a position.

        Returns:
            True if the position existed, False if there was nothing to remove
        """
        existed = name in self._positions
        self._positions = remove_position(self._positions, name)
        return existed

    def get(self, name: str) -> Optional[Position]:
        return self._positions.get(name)

    @property
    def positions(self) -> List[Position]:
        return list(self._positions.values())

    def portfolio(self) -> PortfolioSummary:
        return compute_portfolio(self._positions)

    def to_dataframe(self) -> pd.DataFrame:
        """Positions as a DataFrame indexed by name, with value and daily yield."""
        columns = ['token', 'type', 'balance', 'price', 'value', 'apy', 'daily_yield']
        rows = [{
            'name': p.name,
            'token': p.token,
            'type': p.type.value,
            'balance': p.balance,
            'price': p.price,
            'value': p.value,
            'apy': p.apy,
            'daily_yield': p.daily_yield,
        } for p in self._positions.values()]
        return pd.DataFrame(rows, columns=['name'] + columns).set_index('name')

    def snapshot(self) -> Dict[str, Position]:
        return dict(self._positions)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        """Serialisable mapping of position name to position record."""
        return {name: p.to_dict() for name, p in self._positions.items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping[str, Any]],
                  clock: Optional[Callable[[], datetime]] = None) -> 'PositionRegistry':
        positions = {}
        for name, record in data.items():
            position = Position.from_dict({**record, 'name': record.get('name', name)})
            positions[position.name] = position
        return cls(positions, clock)

    def __len__(self) -> int:
        return len(self._positions)

    def __contains__(self, name: str) -> bool:
        return name in self._positions

    def __repr__(self) -> str:
        return f"PositionRegistry(num_positions={len(self._positions)})"
