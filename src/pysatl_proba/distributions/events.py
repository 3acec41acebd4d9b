"""
Event Probabilities
===================

Probabilities of the elementary events used throughout the course of
continuous probability, expressed through the CDF of any
:class:`~pysatl_proba.distributions.distribution.Distribution`:

- ``P(X <= a)`` : :func:`probability_at_most`
- ``P(X > a)`` : :func:`probability_greater`
- ``P(a < X <= b)`` : :func:`probability_between`
- ``P(X = x)`` : :func:`probability_at`

The same call answers the question for an empirical distribution (proportion
of observations) and for a theoretical one (e.g. the normal approximation).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Any

import numpy as np

from pysatl_proba.distributions.characteristics import cdf, pmf, sf
from pysatl_proba.distributions.registry import distribution_type_register
from pysatl_proba.types import CharacteristicName, Kind

if TYPE_CHECKING:
    import numpy.typing as npt

    from pysatl_proba.distributions.distribution import Distribution


def _as_result(value: Any) -> Any:
    arr = np.asarray(value, dtype=np.float64)
    return float(arr) if arr.ndim == 0 else arr


def _has_survival_function(distr: Distribution) -> bool:
    """Whether ``sf`` is analytical or reachable in the characteristic graph."""
    analytical = distr.analytical_computations
    if CharacteristicName.SF in analytical:
        return True
    graph = distribution_type_register().get(distr.distribution_type)
    return any(graph.find_path(src, CharacteristicName.SF) for src in analytical)


def probability_at_most(distr: Distribution, a: npt.ArrayLike) -> Any:
    """``P(X <= a)``, the CDF evaluated at ``a``."""
    return _as_result(cdf(distr, a))


def probability_greater(distr: Distribution, a: npt.ArrayLike) -> Any:
    """
    ``P(X > a)``.

    Uses the survival function when the distribution provides (or can derive)
    one, which keeps precision far in the upper tail.
    """
    if _has_survival_function(distr):
        return _as_result(sf(distr, a))
    return _as_result(1.0 - np.asarray(cdf(distr, a)))


def probability_between(distr: Distribution, a: npt.ArrayLike, b: npt.ArrayLike) -> Any:
    """
    ``P(a < X <= b) = F(b) - F(a)``.

    Raises
    ------
    ValueError
        If ``a > b`` for any pair of bounds.
    """
    lo = np.asarray(a, dtype=np.float64)
    hi = np.asarray(b, dtype=np.float64)
    if np.any(lo > hi):
        raise ValueError("Lower bound must not exceed upper bound.")
    diff = np.asarray(cdf(distr, hi)) - np.asarray(cdf(distr, lo))
    return _as_result(np.clip(diff, 0.0, 1.0))


def probability_at(distr: Distribution, x: npt.ArrayLike) -> Any:
    """
    ``P(X = x)``.

    Zero for continuous distributions; the point mass ``pmf(x)`` otherwise.
    """
    kind = getattr(distr.distribution_type, "kind", None)
    if kind == Kind.CONTINUOUS:
        return _as_result(np.zeros_like(np.asarray(x, dtype=np.float64)))
    return _as_result(pmf(distr, x))
