from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from collections.abc import Callable
from typing import Any, cast

import numpy as np
import pytest
from mypy_extensions import KwArg

from pysatl_proba.distributions.computation import AnalyticalComputation
from pysatl_proba.distributions.events import (
    probability_at,
    probability_at_most,
    probability_between,
    probability_greater,
)
from pysatl_proba.empirical import EmpiricalDistribution
from pysatl_proba.families import normal
from pysatl_proba.types import Kind
from tests.unit.distributions.test_basic import DistributionTestBase
from tests.utils.mocks import StandaloneEuclideanUnivariateDistribution


class TestEventProbabilities(DistributionTestBase):
    def test_at_most_is_cdf(self) -> None:
        distr = normal(69.0, 3.0)

        assert probability_at_most(distr, 69.0) == pytest.approx(0.5)
        assert isinstance(probability_at_most(distr, 69.0), float)

    def test_greater_uses_precise_upper_tail(self) -> None:
        distr = normal(69.0, 3.0)

        # seven feet is 5 standard deviations above the mean
        expected = 0.5 * math.erfc(5.0 / math.sqrt(2.0))
        assert probability_greater(distr, 84.0) == pytest.approx(expected, rel=1e-10)

    def test_greater_uses_derived_survival_function(self) -> None:
        distr = self.make_logistic_cdf_distribution()

        assert probability_greater(distr, 0.0) == pytest.approx(0.5)

    def test_greater_falls_back_to_complement_without_survival_function(self) -> None:
        # discrete graph has no conversions, so sf cannot be derived from cdf
        cdf_func = cast(
            Callable[[float, KwArg(Any)], float],
            lambda x, **_: min(max(math.floor(x) / 4.0, 0.0), 1.0),
        )
        distr = StandaloneEuclideanUnivariateDistribution(
            kind=Kind.DISCRETE,
            analytical_computations=[
                AnalyticalComputation[float, float](target=self.CDF, func=cdf_func)
            ],
        )

        assert probability_greater(distr, 1.0) == pytest.approx(0.75)

    def test_survival_function_errors_propagate(self) -> None:
        def broken_sf(x: float, **_: Any) -> float:
            raise RuntimeError("sf table is not loaded")

        distr = StandaloneEuclideanUnivariateDistribution(
            kind=Kind.CONTINUOUS,
            analytical_computations=[
                *self.make_logistic_cdf_distribution().analytical_computations.values(),
                AnalyticalComputation[float, float](
                    target=self.SF, func=cast(Callable[[float, KwArg(Any)], float], broken_sf)
                ),
            ],
        )

        with pytest.raises(RuntimeError, match="not loaded"):
            probability_greater(distr, 0.0)

    def test_between(self) -> None:
        distr = normal()

        assert probability_between(distr, -1.96, 1.96) == pytest.approx(0.95, abs=1e-3)
        np.testing.assert_allclose(
            probability_between(distr, [-1.0, 0.0], [1.0, 0.0]), [0.6826894921, 0.0]
        )

    def test_between_with_reversed_bounds_raises(self) -> None:
        with pytest.raises(ValueError, match="must not exceed"):
            probability_between(normal(), 1.0, 0.0)

    def test_point_probability_of_continuous_distribution_is_zero(self) -> None:
        assert probability_at(normal(69.0, 3.0), 70.0) == 0.0
        np.testing.assert_array_equal(probability_at(normal(), [0.0, 1.0]), [0.0, 0.0])

    def test_point_probability_of_empirical_distribution(self) -> None:
        distr = EmpiricalDistribution([68.0, 70.0, 70.0, 71.0])

        assert probability_at(distr, 70.0) == pytest.approx(0.5)
        assert probability_at(distr, 69.0) == 0.0

    def test_empirical_and_normal_answer_the_same_question(self, heights: list[float]) -> None:
        empirical = EmpiricalDistribution(heights)
        approx = normal(float(np.mean(heights)), float(np.std(heights, ddof=1)))

        assert probability_at_most(empirical, 70.0) == pytest.approx(24 / 30)
        assert probability_at_most(approx, 70.0) == pytest.approx(
            probability_at_most(empirical, 70.0), abs=0.1
        )
