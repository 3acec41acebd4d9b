"""
Discretization Diagnostics
==========================

Measurements of a continuous quantity are recorded with finite resolution:
heights reported in whole inches cluster on integers, so ``P_n(X = 70)`` is
large while every continuous model assigns probability zero to a single
point. The helpers below quantify that effect and compare the observed point
proportions with the probability a continuous approximation gives to the
rounding interval ``(x - r/2, x + r/2]``.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import warnings
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from pysatl_proba.distributions.characteristics import cdf
from pysatl_proba.distributions.sampling import as_values
from pysatl_proba.empirical.distribution import EmpiricalDistribution
from pysatl_proba.types import CharacteristicName

if TYPE_CHECKING:
    import numpy.typing as npt

    from pysatl_proba.distributions.distribution import Distribution
    from pysatl_proba.distributions.sampling import Sample


class DiscretizationWarning(UserWarning):
    """Emitted when most observations sit on a rounding grid."""


def _check_resolution(resolution: float) -> float:
    resolution = float(resolution)
    if not np.isfinite(resolution) or resolution <= 0:
        raise ValueError(f"Resolution must be a positive number, got {resolution}.")
    return resolution


def round_to_resolution(values: npt.ArrayLike, resolution: float = 1.0) -> npt.NDArray[np.float64]:
    """
    Quantize values to the nearest multiple of ``resolution``.

    Parameters
    ----------
    values : array_like
        Real numbers to quantize.
    resolution : float, default 1.0
        Grid step, e.g. ``1.0`` for whole inches or ``0.5`` for half inches.

    Returns
    -------
    numpy.ndarray
        Values rounded to the grid, same shape as the input.

    Raises
    ------
    ValueError
        If ``resolution`` is not positive.
    """
    resolution = _check_resolution(resolution)
    return np.round(np.asarray(values, dtype=np.float64) / resolution) * resolution


def grid_share(
    values: Sample | npt.ArrayLike,
    resolution: float = 1.0,
    atol: float = 1e-8,
) -> float:
    """
    Fraction of observations lying on the grid of step ``resolution``.

    Raises
    ------
    ValueError
        If the sample is empty or ``resolution`` is not positive.
    """
    xs = as_values(values)
    if xs.size == 0:
        raise ValueError("Cannot compute the grid share of an empty sample.")
    on_grid = np.isclose(xs, round_to_resolution(xs, resolution), rtol=0.0, atol=atol)
    return float(np.mean(on_grid))


def check_discretization(
    sample: Sample | npt.ArrayLike,
    resolution: float = 1.0,
    threshold: float = 0.5,
) -> float:
    """
    Warn when a sample looks rounded to ``resolution``.

    Parameters
    ----------
    sample : Sample or array_like
        Observations.
    resolution : float, default 1.0
        Grid step to test.
    threshold : float, default 0.5
        Share of on-grid values from which a warning is emitted.

    Returns
    -------
    float
        The grid share of the sample.

    Warns
    -----
    DiscretizationWarning
        If at least ``threshold`` of the values lies on the grid.
    """
    if not 0.0 < threshold <= 1.0:
        raise ValueError(f"Threshold must be in (0, 1], got {threshold}.")

    share = grid_share(sample, resolution)
    if share >= threshold:
        warnings.warn(
            f"{share:.0%} of the observations lie on a grid of step {resolution}; "
            "point probabilities of a continuous approximation are not comparable "
            "with the observed proportions at this resolution.",
            DiscretizationWarning,
            stacklevel=2,
        )
    return share


@dataclass(frozen=True, slots=True)
class DiscretizationRow:
    """
    One line of :func:`discretization_table`.

    Parameters
    ----------
    point : float
        Grid point ``x``.
    empirical : float
        Observed proportion ``P_n(X = x)``.
    interval : float
        Model probability of the rounding interval ``F(x + r/2) - F(x - r/2)``.
    fine : float
        Model probability of a narrow interval around ``x`` (width ``r / 10``),
        which vanishes as the interval shrinks.
    """

    point: float
    empirical: float
    interval: float
    fine: float


def discretization_table(
    sample: Sample | npt.ArrayLike,
    distribution: Distribution,
    points: npt.ArrayLike,
    resolution: float = 1.0,
) -> list[DiscretizationRow]:
    """
    Compare observed point proportions with a continuous approximation.

    Parameters
    ----------
    sample : Sample or array_like
        Observations, typically rounded to ``resolution``.
    distribution : Distribution
        Continuous approximation, e.g. the fitted normal distribution.
    points : array_like
        Grid points at which to compare.
    resolution : float, default 1.0
        Rounding step of the data.

    Returns
    -------
    list[DiscretizationRow]
        One row per point, in input order.

    Examples
    --------
    >>> rows = discretization_table(heights, normal(69.3, 3.6), [70.0])  # doctest: +SKIP
    >>> rows[0].empirical, rows[0].interval  # doctest: +SKIP
    (0.112, 0.108)
    """
    resolution = _check_resolution(resolution)
    xs = np.atleast_1d(np.asarray(points, dtype=np.float64))

    empirical = EmpiricalDistribution(sample)
    observed = np.atleast_1d(empirical.query_method(CharacteristicName.PMF)(xs))

    half = resolution / 2
    interval = np.asarray(cdf(distribution, xs + half)) - np.asarray(cdf(distribution, xs - half))

    fine_half = resolution / 20
    fine = np.asarray(cdf(distribution, xs + fine_half)) - np.asarray(
        cdf(distribution, xs - fine_half)
    )

    return [
        DiscretizationRow(point=float(x), empirical=float(e), interval=float(i), fine=float(f))
        for x, e, i, f in zip(
            xs, observed, np.atleast_1d(interval), np.atleast_1d(fine), strict=True
        )
    ]
