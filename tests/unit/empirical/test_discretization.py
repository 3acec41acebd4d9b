from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import warnings

import numpy as np
import pytest
from scipy import stats

from pysatl_proba.empirical import (
    DiscretizationWarning,
    check_discretization,
    discretization_table,
    grid_share,
    round_to_resolution,
)
from pysatl_proba.families import normal


class TestRounding:
    def test_round_to_half_units(self) -> None:
        np.testing.assert_allclose(round_to_resolution([1.26, 2.74, 3.0], 0.5), [1.5, 2.5, 3.0])

    def test_default_resolution_is_whole_units(self) -> None:
        np.testing.assert_allclose(round_to_resolution([68.4, 68.6]), [68.0, 69.0])

    @pytest.mark.parametrize("resolution", [0.0, -1.0, float("nan")])
    def test_invalid_resolution(self, resolution: float) -> None:
        with pytest.raises(ValueError, match="Resolution must be a positive number"):
            round_to_resolution([1.0], resolution)

    def test_grid_share(self) -> None:
        assert grid_share([1.0, 2.0, 2.5, 3.3]) == pytest.approx(0.5)
        assert grid_share([1.0, 2.0, 2.5, 3.3], resolution=0.5) == pytest.approx(0.75)

    def test_grid_share_of_empty_sample(self) -> None:
        with pytest.raises(ValueError, match="empty sample"):
            grid_share([])


class TestCheckDiscretization:
    def test_warns_for_rounded_sample(self, heights: list[float]) -> None:
        with pytest.warns(DiscretizationWarning, match="grid of step 1.0"):
            share = check_discretization(heights)

        assert share == 1.0

    def test_silent_for_continuous_sample(self) -> None:
        values = np.random.default_rng(0).normal(69.0, 3.0, size=200)

        with warnings.catch_warnings():
            warnings.simplefilter("error")
            share = check_discretization(values)

        assert share < 0.5

    def test_invalid_threshold(self) -> None:
        with pytest.raises(ValueError, match="Threshold must be in"):
            check_discretization([1.0], threshold=0.0)


class TestDiscretizationTable:
    def test_interval_probability_matches_observed_proportion_scale(
        self, heights: list[float]
    ) -> None:
        (row,) = discretization_table(heights, normal(68.0, 3.0), [70.0])

        expected = stats.norm.cdf(70.5, 68.0, 3.0) - stats.norm.cdf(69.5, 68.0, 3.0)
        assert row.point == 70.0
        assert row.empirical == pytest.approx(4 / 30)
        assert row.interval == pytest.approx(expected)

    def test_fine_interval_vanishes(self, heights: list[float]) -> None:
        rows = discretization_table(heights, normal(68.0, 3.0), [66.0, 68.0])

        for row in rows:
            assert 0.0 < row.fine < row.interval
            assert row.fine == pytest.approx(row.interval / 10, rel=0.05)

    def test_unobserved_point_has_zero_proportion(self, heights: list[float]) -> None:
        (row,) = discretization_table(heights, normal(68.0, 3.0), [61.0])

        assert row.empirical == 0.0
        assert row.interval > 0.0
