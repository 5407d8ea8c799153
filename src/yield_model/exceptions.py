# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""Exceptions raised at the ingestion boundaries of the yield model."""


class YieldModelError(Exception):
    """Base class for all yield model errors."""


class InvalidTradeError(YieldModelError, ValueError):
    """A trade record is malformed (bad side/status, missing exit price, ...)."""


class TradeStateError(YieldModelError):
    """A trade was asked to make a transition its status does not allow."""


class DuplicateTradeIdError(YieldModelError):
    """The id generator could not produce an id that is free in the ledger."""


class UnknownScenarioError(YieldModelError, KeyError):
    """No price scenario is registered under the requested name."""
