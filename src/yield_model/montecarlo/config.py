# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""Configuration for Monte Carlo simulations."""

from dataclasses import dataclass
from typing import Optional

# Accuracy improves with the number of trials; below this the percentiles
# are noisy but still computed.
RECOMMENDED_MIN_TRIALS = 1000


@dataclass
class MonteCarloConfig:
    """Configuration for Monte Carlo simulation parameters.

    Attributes:
        num_simulations: Number of Monte Carlo trials to run. Default 1000.
        random_seed: Optional seed for reproducible results. Only used when
                     no sampler is injected into the simulator. Default None.
    """
    num_simulations: int = RECOMMENDED_MIN_TRIALS
    random_seed: Optional[int] = None

    def __post_init__(self):
        if self.num_simulations < 1:
            raise ValueError("num_simulations must be at least 1")
