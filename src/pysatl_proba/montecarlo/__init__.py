"""
Monte Carlo subpackage

Repeated-trial estimation of probabilities and statistics:

- run configuration (:mod:`.config`);
- estimates with standard errors (:mod:`.estimate`);
- simulation drivers (:mod:`.simulation`).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .config import DEFAULT_N_REPLICATES, MonteCarloConfig
from .estimate import MonteCarloEstimate
from .simulation import (
    estimate_probability,
    estimate_statistic,
    replicate,
    simulate_statistic_distribution,
    tail_probability_of_maximum,
)

__all__ = [
    "DEFAULT_N_REPLICATES",
    "MonteCarloConfig",
    "MonteCarloEstimate",
    "estimate_probability",
    "estimate_statistic",
    "replicate",
    "simulate_statistic_distribution",
    "tail_probability_of_maximum",
]
