"""
Continuous uniform distribution family implementation.

Uniform variates on ``[0, 1)`` are the raw material of every simulation in
the library: inverse transform sampling maps them through a quantile function.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_proba.distributions.sampling import summarize
from pysatl_proba.distributions.support import ContinuousSupport
from pysatl_proba.families.parametric_family import ParametricFamily
from pysatl_proba.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_proba.families.registry import ParametricFamilyRegister
from pysatl_proba.types import (
    CharacteristicName,
    FamilyName,
    NumericArray,
    UnivariateContinuous,
)

if TYPE_CHECKING:
    from typing import Any

    import numpy.typing as npt

    from pysatl_proba.distributions.sampling import Sample


def configure_uniform_family() -> None:
    """
    Configure and register the continuous Uniform family.
    """

    if ParametricFamilyRegister.contains(FamilyName.CONTINUOUS_UNIFORM):
        return

    UNIFORM_DOC = """
    Uniform (continuous) distribution on [lower_bound, upper_bound].

    All sub-intervals of the same length are equally probable.

    Probability density function:
        f(x) = 1/(upper_bound - lower_bound) inside the bounds, 0 otherwise
    """

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Density: constant inside the bounds, zero outside."""
        parameters = cast(_Standard, parameters)
        lo, hi = parameters.lower_bound, parameters.upper_bound

        x = np.asarray(x, dtype=np.float64)
        return cast(NumericArray, np.where((x >= lo) & (x <= hi), 1.0 / (hi - lo), 0.0))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Cumulative distribution function.

        ``0`` left of the lower bound, ``1`` right of the upper bound, linear
        in between.
        """
        parameters = cast(_Standard, parameters)
        lo, hi = parameters.lower_bound, parameters.upper_bound

        x = np.asarray(x, dtype=np.float64)
        return cast(NumericArray, np.clip((x - lo) / (hi - lo), 0.0, 1.0))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Percent point function (inverse CDF).

        Raises
        ------
        ValueError
            If a probability is outside ``[0, 1]``.
        """
        p = np.asarray(p, dtype=np.float64)
        if np.any((p < 0) | (p > 1)):
            raise ValueError("Probability must be in [0, 1]")

        parameters = cast(_Standard, parameters)
        lo, hi = parameters.lower_bound, parameters.upper_bound
        return cast(NumericArray, lo + p * (hi - lo))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return (parameters.lower_bound + parameters.upper_bound) / 2

    def var_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_Standard, parameters)
        return (parameters.upper_bound - parameters.lower_bound) ** 2 / 12

    def _support(parameters: Parametrization) -> ContinuousSupport:
        parameters = cast(_Standard, parameters)
        return ContinuousSupport(left=parameters.lower_bound, right=parameters.upper_bound)

    def _estimate(sample: Sample | npt.ArrayLike) -> dict[str, float]:
        """Smallest interval covering the sample."""
        summary = summarize(sample, ddof=0)
        if summary.minimum == summary.maximum:
            raise ValueError("Cannot fit a uniform distribution to a sample with zero spread.")
        return {"lower_bound": summary.minimum, "upper_bound": summary.maximum}

    Uniform = ParametricFamily(
        name=FamilyName.CONTINUOUS_UNIFORM,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["standard", "meanWidth"],
        distr_characteristics={
            CharacteristicName.PDF: pdf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.PPF: ppf,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.VAR: var_func,
        },
        support_by_parametrization=_support,
        estimator=_estimate,
    )
    Uniform.__doc__ = UNIFORM_DOC

    @parametrization(family=Uniform, name="standard")
    class _Standard(Parametrization):
        """
        Standard parametrization of uniform distribution.

        Parameters
        ----------
        lower_bound : float
            Lower bound of the distribution
        upper_bound : float
            Upper bound of the distribution
        """

        lower_bound: float
        upper_bound: float

        @constraint(description="lower_bound < upper_bound")
        def check_lower_less_than_upper(self) -> bool:
            return self.lower_bound < self.upper_bound

    @parametrization(family=Uniform, name="meanWidth")
    class _MeanWidth(Parametrization):
        """
        Center-width parametrization of uniform distribution.

        Parameters
        ----------
        mean : float
            Center of the interval
        width : float
            Length of the interval
        """

        mean: float
        width: float

        @constraint(description="width > 0")
        def check_width_positive(self) -> bool:
            return self.width > 0

        def transform_to_base_parametrization(self) -> Parametrization:
            half_width = self.width / 2
            return _Standard(lower_bound=self.mean - half_width, upper_bound=self.mean + half_width)

    ParametricFamilyRegister.register(Uniform)
