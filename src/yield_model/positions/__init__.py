# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Yield position tracking and portfolio-level blended yield.
"""

from .position import Position, PositionType
from .registry import (
    PortfolioSummary,
    PositionRegistry,
    compute_portfolio,
    remove_position,
    upsert_position,
)

__all__ = [
    'Position', 'PositionType',
    'PortfolioSummary', 'PositionRegistry',
    'compute_portfolio', 'remove_position', 'upsert_position',
]
