"""
Empirical vs Theoretical
========================

Side-by-side comparison of a sample with a theoretical approximation:
CDF tables at chosen thresholds, the largest vertical gap between the two
CDFs, and quantile-quantile pairs.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from pysatl_proba.distributions.characteristics import cdf, ppf
from pysatl_proba.empirical.distribution import EmpiricalDistribution
from pysatl_proba.types import CharacteristicName

if TYPE_CHECKING:
    import numpy.typing as npt

    from pysatl_proba.distributions.distribution import Distribution
    from pysatl_proba.distributions.sampling import Sample


@dataclass(frozen=True, slots=True)
class CDFComparison:
    """
    Empirical and theoretical ``P(X <= threshold)``.

    ``difference`` is ``empirical - theoretical``.
    """

    threshold: float
    empirical: float
    theoretical: float
    difference: float


def compare_cdfs(
    sample: Sample | npt.ArrayLike,
    distribution: Distribution,
    thresholds: npt.ArrayLike,
) -> list[CDFComparison]:
    """
    Tabulate empirical and theoretical CDFs at the given thresholds.

    Parameters
    ----------
    sample : Sample or array_like
        Observations.
    distribution : Distribution
        Theoretical approximation.
    thresholds : array_like
        Points ``a`` at which ``P(X <= a)`` is compared.

    Returns
    -------
    list[CDFComparison]
        One row per threshold, in input order.
    """
    points = np.atleast_1d(np.asarray(thresholds, dtype=np.float64))
    empirical_cdf = EmpiricalDistribution(sample).query_method(CharacteristicName.CDF)
    empirical = np.atleast_1d(np.asarray(empirical_cdf(points), dtype=np.float64))
    theoretical = np.atleast_1d(np.asarray(cdf(distribution, points), dtype=np.float64))

    return [
        CDFComparison(
            threshold=float(a),
            empirical=float(e),
            theoretical=float(t),
            difference=float(e - t),
        )
        for a, e, t in zip(points, empirical, theoretical, strict=True)
    ]


def max_cdf_discrepancy(sample: Sample | npt.ArrayLike, distribution: Distribution) -> float:
    """
    Kolmogorov distance ``sup_a |F_n(a) - F(a)|``.

    For a continuous ``F`` the supremum is attained at an observation, either
    at the jump of ``F_n`` or just before it, so both one-sided limits of the
    empirical CDF are checked at every distinct observed value.

    Raises
    ------
    ValueError
        If the sample is empty.
    """
    empirical = EmpiricalDistribution(sample)
    xs = empirical.support.points
    n = empirical.size

    right = np.searchsorted(empirical.values, xs, side="right") / n
    left = np.searchsorted(empirical.values, xs, side="left") / n
    theoretical = np.asarray(cdf(distribution, xs), dtype=np.float64)

    return float(max(np.max(np.abs(right - theoretical)), np.max(np.abs(left - theoretical))))


def quantile_pairs(
    sample: Sample | npt.ArrayLike,
    distribution: Distribution,
    probabilities: npt.ArrayLike | None = None,
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """
    Theoretical and observed quantiles for a QQ plot.

    Parameters
    ----------
    sample : Sample or array_like
        Observations.
    distribution : Distribution
        Theoretical approximation.
    probabilities : array_like, optional
        Probability levels in ``(0, 1)``. Defaults to ``(i - 0.5) / n`` for
        ``i = 1..n``, which pairs every sorted observation with a theoretical
        quantile.

    Returns
    -------
    (theoretical, observed) : tuple of numpy.ndarray
        Quantiles of ``distribution`` and of the sample.

    Raises
    ------
    ValueError
        If a probability lies outside ``[0, 1]``.
    """
    empirical = EmpiricalDistribution(sample)
    if probabilities is None:
        n = empirical.size
        probs = (np.arange(1, n + 1, dtype=np.float64) - 0.5) / n
    else:
        probs = np.atleast_1d(np.asarray(probabilities, dtype=np.float64))
        if np.any((probs < 0) | (probs > 1)):
            raise ValueError("Probability must be in [0, 1]")

    theoretical = np.atleast_1d(np.asarray(ppf(distribution, probs), dtype=np.float64))
    observed = np.atleast_1d(
        np.asarray(empirical.query_method(CharacteristicName.PPF)(probs), dtype=np.float64)
    )
    return theoretical, observed
