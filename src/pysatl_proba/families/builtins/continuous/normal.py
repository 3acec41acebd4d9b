"""
Normal distribution family implementation.

The normal family is the theoretical model used to approximate measurement
data such as adult heights: its two parameters are the average and the
standard deviation of the data.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import erf, erfc, ndtri

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


def configure_normal_family() -> None:
    """
    Configure and register the Normal distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.NORMAL):
        return

    NORMAL_DOC = """
    Normal (Gaussian) distribution.

    Continuous, symmetric and bell-shaped; defined by the mean (μ) and the
    standard deviation (σ).

    Probability density function:
        f(x) = 1/(σ√(2π)) * exp(-(x-μ)²/(2σ²))

    Cumulative distribution function:
        F(a) = 1/2 * (1 + erf((a-μ)/(σ√2)))

    About 95% of the probability lies within two standard deviations of the
    mean, which is why a sample whose proportions follow this rule is well
    summarized by its average and standard deviation alone.
    """

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability density function for normal distribution.

        Parameters
        ----------
        parameters : Parametrization
            Base parameters with fields ``mu`` and ``sigma``.
        x : NumericArray
            Points at which to evaluate the density.

        Returns
        -------
        NumericArray
            Density values at ``x``.
        """
        parameters = cast(_MeanStd, parameters)

        sigma = parameters.sigma
        z = (np.asarray(x, dtype=np.float64) - parameters.mu) / sigma

        return cast(NumericArray, np.exp(-0.5 * z**2) / (sigma * math.sqrt(2 * math.pi)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Cumulative distribution function, ``P(X <= x)``.
        """
        parameters = cast(_MeanStd, parameters)

        z = (np.asarray(x, dtype=np.float64) - parameters.mu) / (parameters.sigma * math.sqrt(2))
        return cast(NumericArray, 0.5 * (1 + erf(z)))

    def sf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Survival function, ``P(X > x)``.

        Uses ``erfc`` so that far upper-tail probabilities (e.g. a seven-footer
        among adult men) keep their relative precision instead of cancelling
        to zero in ``1 - cdf``.
        """
        parameters = cast(_MeanStd, parameters)

        z = (np.asarray(x, dtype=np.float64) - parameters.mu) / (parameters.sigma * math.sqrt(2))
        return cast(NumericArray, 0.5 * erfc(z))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Percent point function (inverse CDF).

        Parameters
        ----------
        parameters : Parametrization
            Base parameters with fields ``mu`` and ``sigma``.
        p : NumericArray
            Probabilities from ``[0, 1]``. ``0`` maps to ``-inf`` and ``1``
            to ``inf``; every ``p`` strictly inside gives a finite quantile.

        Raises
        ------
        ValueError
            If a probability is outside ``[0, 1]``.
        """
        p = np.asarray(p, dtype=np.float64)
        if np.any((p < 0) | (p > 1)):
            raise ValueError("Probability must be in [0, 1]")

        parameters = cast(_MeanStd, parameters)

        return cast(
            NumericArray,
            parameters.mu + parameters.sigma * ndtri(p),
        )

    def mean_func(parameters: Parametrization, _: Any) -> float:
        return cast(_MeanStd, parameters).mu

    def var_func(parameters: Parametrization, _: Any) -> float:
        return cast(_MeanStd, parameters).sigma ** 2

    def var_func_mean_var(parameters: Parametrization, _: Any) -> float:
        return cast(_MeanVar, parameters).var

    def _support(_: Parametrization) -> ContinuousSupport:
        return ContinuousSupport()

    def _estimate(sample: Sample | npt.ArrayLike) -> dict[str, float]:
        """Normal approximation of a sample: sample mean and standard deviation."""
        summary = summarize(sample)
        if summary.std == 0.0:
            raise ValueError("Cannot fit a normal distribution to a sample with zero spread.")
        return {"mu": summary.mean, "sigma": summary.std}

    Normal = ParametricFamily(
        name=FamilyName.NORMAL,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["meanStd", "meanVar"],
        distr_characteristics={
            CharacteristicName.PDF: pdf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.SF: sf,
            CharacteristicName.PPF: ppf,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.VAR: {"meanStd": var_func, "meanVar": var_func_mean_var},
        },
        support_by_parametrization=_support,
        estimator=_estimate,
    )
    Normal.__doc__ = NORMAL_DOC

    @parametrization(family=Normal, name="meanStd")
    class _MeanStd(Parametrization):
        """
        Standard parametrization of normal distribution.

        Parameters
        ----------
        mu : float
            Mean of the distribution
        sigma : float
            Standard deviation of the distribution
        """

        mu: float
        sigma: float

        @constraint(description="sigma > 0")
        def check_sigma_positive(self) -> bool:
            return self.sigma > 0

    @parametrization(family=Normal, name="meanVar")
    class _MeanVar(Parametrization):
        """
        Mean-variance parametrization of normal distribution.

        Parameters
        ----------
        mu : float
            Mean of the distribution
        var : float
            Variance of the distribution
        """

        mu: float
        var: float

        @constraint(description="var > 0")
        def check_var_positive(self) -> bool:
            return self.var > 0

        def transform_to_base_parametrization(self) -> Parametrization:
            return _MeanStd(mu=self.mu, sigma=math.sqrt(self.var))

    ParametricFamilyRegister.register(Normal)
