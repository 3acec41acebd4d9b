"""
Monte Carlo estimates with their standard errors.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass

from pysatl_proba.distributions.characteristics import ppf
from pysatl_proba.families.configuration import normal


@dataclass(frozen=True, slots=True)
class MonteCarloEstimate:
    """
    Point estimate produced by repeating an experiment.

    Parameters
    ----------
    estimate : float
        Mean outcome over the replicates (a frequency for events).
    std_error : float
        Estimated standard deviation of ``estimate``; shrinks like
        ``1 / sqrt(n_replicates)``.
    n_replicates : int
        Number of replicates the estimate is based on.
    """

    estimate: float
    std_error: float
    n_replicates: int

    def __float__(self) -> float:
        return self.estimate

    def confidence_interval(self, level: float = 0.95) -> tuple[float, float]:
        """
        Normal-approximation confidence interval ``estimate +- z * std_error``.

        Parameters
        ----------
        level : float, default 0.95
            Coverage probability in ``(0, 1)``.

        Returns
        -------
        (lower, upper) : tuple[float, float]

        Raises
        ------
        ValueError
            If ``level`` is not in ``(0, 1)``.
        """
        if not 0.0 < level < 1.0:
            raise ValueError(f"Confidence level must be in (0, 1), got {level}.")

        z = float(ppf(normal(), (1.0 + level) / 2.0))
        half_width = z * self.std_error
        return self.estimate - half_width, self.estimate + half_width
