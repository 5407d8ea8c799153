# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Trade records.

``TradeInput`` is the shape accepted at the ingestion boundary and is
validated there. ``Trade`` is the stored, immutable record: it carries an id
and, when closed, its realised pnl.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Optional

from ..exceptions import InvalidTradeError, TradeStateError


class Side(str, Enum):
    LONG = "long"
    SHORT = "short"

    @property
    def direction(self) -> int:
        """+1 for long, -1 for short."""
        return 1 if self is Side.LONG else -1


class TradeStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


def coerce_enum(enum_cls, value, label: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise InvalidTradeError(f"{label} must be one of: {allowed}, got {value!r}") from None


def as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return as_utc(datetime.fromisoformat(text))
        except ValueError:
            raise InvalidTradeError(f"Invalid timestamp: {value!r}") from None
    raise InvalidTradeError(f"timestamp must be a datetime or ISO string, got {type(value).__name__}")


def as_tag_set(tags) -> FrozenSet[str]:
    """Normalise tags to a frozenset; a bare string is a single tag."""
    if not tags:
        return frozenset()
    if isinstance(tags, str):
        return frozenset((tags,))
    return frozenset(tags)


def compute_pnl(side: Side, entry_price: float, exit_price: float, size: float) -> float:
    """Realised pnl of a closed trade, before fees."""
    return side.direction * (exit_price - entry_price) * size


@dataclass(frozen=True)
class TradeInput:
    """A trade as submitted for recording.

    Attributes:
        symbol: Market symbol (e.g., "SOL-PERP")
        side: "long" or "short"
        entry_price: Entry price
        size: Position size in units of the base asset
        status: "open" or "closed"
        exit_price: Exit price, required iff status is closed
        fees: Fees paid, if known
        tags: Free-form labels (e.g., {"breakout", "momentum"})
        notes: Free-form notes
        timestamp: When the trade happened; the ledger stamps "now" if None

    Raises:
        InvalidTradeError: If the side/status is unknown or the exit price
                           does not match the status
    """
    symbol: str
    side: Side
    entry_price: float
    size: float
    status: TradeStatus = TradeStatus.OPEN
    exit_price: Optional[float] = None
    fees: Optional[float] = None
    tags: FrozenSet[str] = field(default_factory=frozenset)
    notes: str = ""
    timestamp: Optional[datetime] = None

    def __post_init__(self):
        # Frozen dataclass: normalise fields through object.__setattr__
        object.__setattr__(self, 'side', coerce_enum(Side, self.side, "side"))
        object.__setattr__(self, 'status', coerce_enum(TradeStatus, self.status, "status"))
        object.__setattr__(self, 'tags', as_tag_set(self.tags))
        if self.timestamp is not None:
            object.__setattr__(self, 'timestamp', _parse_timestamp(self.timestamp))

        if self.status is TradeStatus.CLOSED and self.exit_price is None:
            raise InvalidTradeError("A closed trade requires an exit_price")
        if self.status is TradeStatus.OPEN and self.exit_price is not None:
            raise InvalidTradeError("An open trade cannot have an exit_price")


@dataclass(frozen=True)
class Trade:
    """An immutable trade stored in the ledger.

    ``pnl`` and ``exit_price`` are set iff the trade is closed.
    """
    id: str
    timestamp: datetime
    symbol: str
    side: Side
    entry_price: float
    size: float
    status: TradeStatus
    exit_price: Optional[float] = None
    pnl: Optional[float] = None
    fees: Optional[float] = None
    tags: FrozenSet[str] = field(default_factory=frozenset)
    notes: str = ""

    def __post_init__(self):
        object.__setattr__(self, 'side', coerce_enum(Side, self.side, "side"))
        object.__setattr__(self, 'status', coerce_enum(TradeStatus, self.status, "status"))
        object.__setattr__(self, 'tags', as_tag_set(self.tags))
        object.__setattr__(self, 'timestamp', _parse_timestamp(self.timestamp))

    @classmethod
    def from_input(cls, trade_id: str, trade: TradeInput, timestamp: datetime) -> 'Trade':
        """Build the stored record for ``trade``, computing pnl if closed."""
        pnl = None
        if trade.status is TradeStatus.CLOSED:
            pnl = compute_pnl(trade.side, trade.entry_price, trade.exit_price, trade.size)
        return cls(
            id=trade_id,
            timestamp=as_utc(timestamp),
            symbol=trade.symbol,
            side=trade.side,
            entry_price=trade.entry_price,
            size=trade.size,
            status=trade.status,
            exit_price=trade.exit_price,
            pnl=pnl,
            fees=trade.fees,
            tags=trade.tags,
            notes=trade.notes,
        )

    @property
    def is_closed(self) -> bool:
        return self.status is TradeStatus.CLOSED

    def has_any_tag(self, tags: Iterable[str]) -> bool:
        return not self.tags.isdisjoint(tags)

    def close(self, exit_price: float, fees: Optional[float] = None,
              timestamp: Optional[datetime] = None) -> TradeInput:
        """Build the closing record of this open trade.

        The ledger is append-only, so closing produces a new input to be
        appended rather than modifying this record.

        Raises:
            TradeStateError: If the trade is already closed
        """
        if self.is_closed:
            raise TradeStateError(f"Trade {self.id} is already closed")
        return TradeInput(
            symbol=self.symbol,
            side=self.side,
            entry_price=self.entry_price,
            size=self.size,
            status=TradeStatus.CLOSED,
            exit_price=exit_price,
            fees=self.fees if fees is None else fees,
            tags=self.tags,
            notes=self.notes,
            timestamp=timestamp,
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation for persistence by an adapter."""
        return {
            'id': self.id,
            'timestamp': self.timestamp.isoformat(),
            'symbol': self.symbol,
            'side': self.side.value,
            'entryPrice': self.entry_price,
            'exitPrice': self.exit_price,
            'size': self.size,
            'fees': self.fees,
            'status': self.status.value,
            'pnl': self.pnl,
            'tags': sorted(self.tags),
            'notes': self.notes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Trade':
        """Rebuild a trade from :meth:`to_dict` output.

        The record is revalidated and pnl is recomputed from the prices,
        so a stale stored pnl cannot leak in.
        """
        try:
            trade_input = TradeInput(
                symbol=data['symbol'],
                side=data['side'],
                entry_price=data['entryPrice'],
                size=data['size'],
                status=data.get('status', TradeStatus.OPEN),
                exit_price=data.get('exitPrice'),
                fees=data.get('fees'),
                tags=data.get('tags'),
                notes=data.get('notes', ""),
                timestamp=data['timestamp'],
            )
            trade_id = data['id']
        except KeyError as e:
            raise InvalidTradeError(f"Trade record missing field {e.args[0]!r}") from None
        return cls.from_input(trade_id, trade_input, trade_input.timestamp)
