"""
Monte Carlo run configuration.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass

import numpy as np

DEFAULT_N_REPLICATES = 10_000


@dataclass(frozen=True, slots=True)
class MonteCarloConfig:
    """
    Number of replicates and random seed of a simulation.

    Parameters
    ----------
    n_replicates : int, default 10_000
        How many independent times the experiment is repeated.
    seed : int, optional
        Seed of the ``numpy.random.Generator`` shared by all replicates.
        ``None`` draws fresh entropy from the operating system.

    Raises
    ------
    ValueError
        If ``n_replicates`` is smaller than one.
    """

    n_replicates: int = DEFAULT_N_REPLICATES
    seed: int | None = None

    def __post_init__(self) -> None:
        if isinstance(self.n_replicates, bool) or int(self.n_replicates) != self.n_replicates:
            raise ValueError(f"n_replicates must be an integer, got {self.n_replicates!r}.")
        if self.n_replicates < 1:
            raise ValueError(f"n_replicates must be at least 1, got {self.n_replicates}.")

    def make_rng(self) -> np.random.Generator:
        """Fresh generator seeded with :attr:`seed`."""
        return np.random.default_rng(self.seed)
