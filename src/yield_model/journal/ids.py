# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""Trade id generators.

A millisecond timestamp alone collides when two trades are recorded in the
same millisecond, so the default generator appends a monotonic counter.
"""

import itertools
import threading
import time
import uuid
from typing import Callable, Protocol


class TradeIdGenerator(Protocol):
    def __call__(self) -> str:
        ...


class SequentialIdGenerator:
    """Ids of the form ``trade-<epoch ms>-<sequence>``.

    The sequence never repeats within one generator, so ids stay unique even
    when the clock does not advance between calls.
    """

    def __init__(self, prefix: str = "trade",
                 clock_ms: Callable[[], int] = lambda: time.time_ns() // 1_000_000,
                 start: int = 0):
        self.prefix = prefix
        self._clock_ms = clock_ms
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            seq = next(self._counter)
        return f"{self.prefix}-{self._clock_ms()}-{seq}"


class UuidIdGenerator:
    """Ids of the form ``trade-<uuid4 hex>``."""

    def __init__(self, prefix: str = "trade"):
        self.prefix = prefix

    def __call__(self) -> str:
        return f"{self.prefix}-{uuid.uuid4().hex}"


default_id_generator = SequentialIdGenerator()
