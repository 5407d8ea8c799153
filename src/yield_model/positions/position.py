# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""Named yield positions."""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from ..compounding import DAYS_PER_YEAR


class PositionType(str, Enum):
    HOLD = "hold"
    STAKE = "stake"
    LP = "lp"
    LEND = "lend"

    @classmethod
    def coerce(cls, value) -> 'PositionType':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            allowed = ", ".join(member.value for member in cls)
            raise ValueError(f"Position type must be one of: {allowed}, got {value!r}") from None


@dataclass(frozen=True)
class Position:
    """A yield position, keyed by name in the registry.

    Attributes:
        name: Unique position name (e.g., "jlp-main")
        token: Token symbol (e.g., "JLP")
        balance: Token balance in whole units
        price: Token price in USD
        apy: Annual percentage yield in percent
        type: hold, stake, lp or lend
        notes: Free-form notes
        last_updated: When the position was last written
    """
    name: str
    token: str
    balance: float
    price: float
    apy: float = 0.0
    type: PositionType = PositionType.HOLD
    notes: str = ""
    last_updated: Optional[datetime] = None

    def __post_init__(self):
        object.__setattr__(self, 'type', PositionType.coerce(self.type))

    @property
    def value(self) -> float:
        return self.balance * self.price

    @property
    def daily_yield(self) -> float:
        """Simple (non-compounded) yield earned per day at the current value."""
        return self.value * (self.apy / 100) / DAYS_PER_YEAR

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'token': self.token,
            'type': self.type.value,
            'balance': self.balance,
            'price': self.price,
            'value': self.value,
            'apy': self.apy,
            'notes': self.notes,
            'lastUpdated': self.last_updated.isoformat() if self.last_updated else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Position':
        """Rebuild a position from :meth:`to_dict` output.

        The stored value is ignored and recomputed from balance and price.
        """
        last_updated = data.get('lastUpdated')
        if isinstance(last_updated, str):
            last_updated = datetime.fromisoformat(last_updated.replace("Z", "+00:00"))
        if last_updated is not None and last_updated.tzinfo is None:
            last_updated = last_updated.replace(tzinfo=timezone.utc)
        return cls(
            name=data['name'],
            token=data['token'],
            balance=data['balance'],
            price=data['price'],
            apy=data.get('apy', 0.0),
            type=data.get('type', PositionType.HOLD),
            notes=data.get('notes', ""),
            last_updated=last_updated,
        )
