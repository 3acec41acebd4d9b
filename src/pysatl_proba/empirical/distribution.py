"""
Empirical Distribution
======================

The distribution that puts mass ``1/n`` on each of ``n`` observations. Its CDF
is the empirical cumulative proportion

    F_n(a) = (number of observations <= a) / n,

the direct, assumption-free estimate of ``P(X <= a)`` from a sample of
measurements.

Notes
-----
- All characteristics are analytical and vectorized over sorted observations,
  so no conversion graph is involved.
- Sampling from an empirical distribution is bootstrap resampling.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Any, cast

import numpy as np

from pysatl_proba.distributions.computation import AnalyticalComputation
from pysatl_proba.distributions.distribution import Distribution
from pysatl_proba.distributions.sampling import ArraySample, SampleSummary, as_values, summarize
from pysatl_proba.distributions.strategies import (
    DefaultComputationStrategy,
    SamplingStrategy,
    make_rng,
)
from pysatl_proba.distributions.support import ExplicitTableDiscreteSupport
from pysatl_proba.types import CharacteristicName, UnivariateDiscrete

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    import numpy.typing as npt

    from pysatl_proba.distributions.sampling import Sample
    from pysatl_proba.distributions.strategies import ComputationStrategy
    from pysatl_proba.types import (
        EuclideanDistributionType,
        GenericCharacteristicName,
        NumericArray,
    )


def _scalar_or_array(result: NumericArray, x: Any) -> Any:
    return float(result) if np.ndim(x) == 0 else result


class BootstrapSamplingStrategy(SamplingStrategy):
    """
    Resample observations uniformly with replacement.

    Accepts ``seed=`` or ``rng=`` like the default univariate sampler.
    """

    def sample(self, n: int, distr: Distribution, **options: Any) -> ArraySample:
        if n < 0:
            raise ValueError(f"Sample size must be non-negative, got {n}.")
        if not isinstance(distr, EmpiricalDistribution):
            raise TypeError("Bootstrap sampling requires an EmpiricalDistribution.")
        rng = make_rng(options)
        return ArraySample(rng.choice(distr.values, size=n, replace=True))


class EmpiricalDistribution(Distribution):
    """
    Empirical distribution of a univariate sample.

    Parameters
    ----------
    sample : Sample or array_like
        Observed values, e.g. reported heights in inches.
    computation_strategy : ComputationStrategy, optional
        Defaults to :class:`DefaultComputationStrategy`.

    Raises
    ------
    ValueError
        If the sample is empty or contains non-finite values.

    Examples
    --------
    >>> F = EmpiricalDistribution([60.0, 64.0, 70.0, 70.0, 75.0])
    >>> F.calculate_characteristic("cdf", 70.0)
    0.8
    """

    __slots__ = ("_values", "_support", "_analytical", "_computation_strategy", "_sampling_strategy")

    def __init__(
        self,
        sample: Sample | npt.ArrayLike,
        computation_strategy: ComputationStrategy[Any, Any] | None = None,
    ) -> None:
        values = np.sort(np.array(as_values(sample), dtype=np.float64))
        if values.size == 0:
            raise ValueError("Empirical distribution requires a non-empty sample.")
        if not np.all(np.isfinite(values)):
            raise ValueError("Empirical distribution requires finite observations.")

        values.setflags(write=False)
        self._values = values
        self._support = ExplicitTableDiscreteSupport(values, assume_sorted=True)
        self._computation_strategy = computation_strategy or DefaultComputationStrategy()
        self._sampling_strategy = BootstrapSamplingStrategy()
        self._analytical = self._build_analytical_computations()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n={self.size})"

    @property
    def values(self) -> npt.NDArray[np.float64]:
        """Sorted, read-only observations."""
        return self._values

    @property
    def size(self) -> int:
        return int(self._values.size)

    @property
    def distribution_type(self) -> EuclideanDistributionType:
        return UnivariateDiscrete

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
        return self._analytical

    @property
    def sampling_strategy(self) -> SamplingStrategy:
        return self._sampling_strategy

    @property
    def computation_strategy(self) -> ComputationStrategy[Any, Any]:
        return self._computation_strategy

    @property
    def support(self) -> ExplicitTableDiscreteSupport:
        """Distinct observed values."""
        return self._support

    def summary(self, ddof: int = 1) -> SampleSummary:
        """Sample mean, standard deviation and range."""
        return summarize(self._values, ddof=ddof)

    def _count_leq(self, x: npt.ArrayLike) -> NumericArray:
        points = np.asarray(x, dtype=np.float64)
        return cast("NumericArray", np.searchsorted(self._values, points, side="right"))

    def _count_lt(self, x: npt.ArrayLike) -> NumericArray:
        points = np.asarray(x, dtype=np.float64)
        return cast("NumericArray", np.searchsorted(self._values, points, side="left"))

    def _build_analytical_computations(
        self,
    ) -> dict[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
        n = self.size
        xs = self._values
        cumulative = np.arange(1, n + 1, dtype=np.float64) / n

        def cdf(x: npt.ArrayLike, **_: Any) -> Any:
            return _scalar_or_array(self._count_leq(x) / n, x)

        def sf(x: npt.ArrayLike, **_: Any) -> Any:
            return _scalar_or_array((n - self._count_leq(x)) / n, x)

        def pmf(x: npt.ArrayLike, **_: Any) -> Any:
            return _scalar_or_array((self._count_leq(x) - self._count_lt(x)) / n, x)

        def ppf(q: npt.ArrayLike, **_: Any) -> Any:
            # Smallest observation x with F_n(x) >= q.
            p = np.asarray(q, dtype=np.float64)
            if np.any((p < 0) | (p > 1)):
                raise ValueError("Probability must be in [0, 1]")
            idx = np.clip(np.searchsorted(cumulative, p, side="left"), 0, n - 1)
            return _scalar_or_array(xs[idx], q)

        mean = float(np.mean(xs))
        var = float(np.var(xs, ddof=1)) if n > 1 else float("nan")

        funcs: dict[GenericCharacteristicName, Callable[..., Any]] = {
            CharacteristicName.CDF: cdf,
            CharacteristicName.SF: sf,
            CharacteristicName.PMF: pmf,
            CharacteristicName.PPF: ppf,
            CharacteristicName.MEAN: lambda _=None, **__: mean,
            CharacteristicName.VAR: lambda _=None, **__: var,
        }
        return {name: AnalyticalComputation(target=name, func=f) for name, f in funcs.items()}


def empirical_cdf(sample: Sample | npt.ArrayLike) -> Callable[[npt.ArrayLike], Any]:
    """
    Build the empirical CDF ``a -> F_n(a)`` of a sample.

    Returns
    -------
    Callable
        Function returning a float for a scalar threshold and an array for an
        array of thresholds.

    Raises
    ------
    ValueError
        If the sample is empty.
    """
    return EmpiricalDistribution(sample).analytical_computations[CharacteristicName.CDF]
