from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import numpy as np
import pytest

from pysatl_proba.distributions.sampling import ArraySample
from pysatl_proba.empirical import EmpiricalDistribution, empirical_cdf
from pysatl_proba.types import CharacteristicName, UnivariateDiscrete


class TestEmpiricalDistribution:
    def test_cdf_counts_observations_at_most_threshold(self, heights: list[float]) -> None:
        distr = EmpiricalDistribution(heights)

        assert distr.calculate_characteristic(CharacteristicName.CDF, 70.0) == pytest.approx(0.8)
        assert distr.calculate_characteristic(CharacteristicName.CDF, 59.0) == 0.0
        assert distr.calculate_characteristic(CharacteristicName.CDF, 75.0) == 1.0

    def test_cdf_is_right_continuous_step(self) -> None:
        distr = EmpiricalDistribution([1.0, 2.0, 2.0, 3.0])
        F = distr.query_method(CharacteristicName.CDF)

        np.testing.assert_allclose(
            F(np.array([0.5, 1.0, 1.5, 2.0, 2.999, 3.0])),
            [0.0, 0.25, 0.25, 0.75, 0.75, 1.0],
        )

    def test_scalar_in_scalar_out(self) -> None:
        F = empirical_cdf([1.0, 2.0])

        assert isinstance(F(1.5), float)
        assert isinstance(F(np.array([1.5])), np.ndarray)

    def test_sf_and_pmf(self, heights: list[float]) -> None:
        distr = EmpiricalDistribution(heights)

        assert distr.calculate_characteristic(CharacteristicName.SF, 70.0) == pytest.approx(0.2)
        assert distr.calculate_characteristic(CharacteristicName.PMF, 70.0) == pytest.approx(4 / 30)
        assert distr.calculate_characteristic(CharacteristicName.PMF, 70.5) == 0.0

    def test_ppf_is_left_continuous_inverse(self, heights: list[float]) -> None:
        distr = EmpiricalDistribution(heights)
        Q = distr.query_method(CharacteristicName.PPF)

        assert Q(0.5) == 68.0
        assert Q(0.0) == 60.0
        assert Q(1.0) == 75.0
        with pytest.raises(ValueError, match="Probability must be in"):
            Q(1.2)

    def test_moments(self, heights: list[float]) -> None:
        distr = EmpiricalDistribution(heights)

        assert distr.query_method(CharacteristicName.MEAN)(None) == pytest.approx(np.mean(heights))
        assert distr.query_method(CharacteristicName.VAR)(None) == pytest.approx(
            np.var(heights, ddof=1)
        )

    def test_summary(self, heights: list[float]) -> None:
        summary = EmpiricalDistribution(heights).summary()

        assert summary.size == 30
        assert summary.minimum == 60.0
        assert summary.maximum == 75.0
        assert summary.std == pytest.approx(np.std(heights, ddof=1))

    def test_support_holds_distinct_values(self) -> None:
        distr = EmpiricalDistribution([3.0, 1.0, 3.0, 2.0])

        np.testing.assert_array_equal(distr.support.points, [1.0, 2.0, 3.0])
        np.testing.assert_array_equal(distr.values, [1.0, 2.0, 3.0, 3.0])
        assert distr.distribution_type == UnivariateDiscrete

    def test_values_are_read_only(self) -> None:
        distr = EmpiricalDistribution([1.0, 2.0])

        with pytest.raises(ValueError):
            distr.values[0] = 5.0

    def test_accepts_array_sample(self) -> None:
        distr = EmpiricalDistribution(ArraySample(np.array([[2.0], [1.0]])))

        assert distr.size == 2
        assert distr.calculate_characteristic(CharacteristicName.CDF, 1.0) == 0.5

    @pytest.mark.parametrize("bad", [[], [1.0, float("nan")], [float("inf")]])
    def test_rejects_empty_or_non_finite(self, bad: list[float]) -> None:
        with pytest.raises(ValueError, match="Empirical distribution requires"):
            EmpiricalDistribution(bad)

    def test_no_density_for_discrete_distribution(self) -> None:
        distr = EmpiricalDistribution([1.0, 2.0])

        with pytest.raises(RuntimeError, match="No conversion path"):
            distr.query_method(CharacteristicName.PDF)


class TestBootstrapSampling:
    def test_draws_only_observed_values(self, heights: list[float]) -> None:
        sample = EmpiricalDistribution(heights).sample(500, seed=3)

        assert sample.shape == (500, 1)
        assert set(sample.array[:, 0]).issubset(set(heights))

    def test_seed_reproduces_draws(self, heights: list[float]) -> None:
        distr = EmpiricalDistribution(heights)

        first = distr.sample(50, seed=11).array
        second = distr.sample(50, seed=11).array

        np.testing.assert_array_equal(first, second)

    def test_rng_option_is_used(self) -> None:
        distr = EmpiricalDistribution([1.0, 2.0, 3.0])

        a = distr.sample(10, rng=np.random.default_rng(5)).array
        b = distr.sample(10, rng=np.random.default_rng(5)).array

        np.testing.assert_array_equal(a, b)

    def test_invalid_rng_raises(self) -> None:
        with pytest.raises(TypeError, match="numpy.random.Generator"):
            EmpiricalDistribution([1.0]).sample(3, rng=42)

    def test_negative_size_raises(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            EmpiricalDistribution([1.0]).sample(-1)
