"""
Tests for Normal Distribution Family

This module tests the functionality of the normal distribution family,
including parameterizations, characteristics, estimation and sampling.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy.stats import norm

from pysatl_proba.distributions.support import ContinuousSupport
from pysatl_proba.families.configuration import configure_families_register
from pysatl_proba.types import (
    CharacteristicName,
    ContinuousSupportShape1D,
    FamilyName,
    UnivariateContinuous,
)

from .base import BaseDistributionTest


class TestNormalFamily(BaseDistributionTest):
    """Test suite for Normal distribution family."""

    def setup_method(self):
        """Setup before each test method."""
        registry = configure_families_register()
        self.normal_family = registry.get(FamilyName.NORMAL)
        self.normal_dist_example = self.normal_family(mu=2.0, sigma=1.5)

    def test_family_properties(self):
        """Test basic properties of normal family."""
        assert self.normal_family.name == FamilyName.NORMAL

        assert set(self.normal_family.parametrization_names) == {"meanStd", "meanVar"}
        assert self.normal_family.base_parametrization_name == "meanStd"

    def test_mean_std_parametrization_creation(self):
        """Test creation of distribution with standard parametrization."""
        dist = self.normal_family(mu=2.0, sigma=1.5)

        assert dist.family_name == FamilyName.NORMAL
        assert dist.distribution_type == UnivariateContinuous
        assert dist.parameters.parameters == {"mu": 2.0, "sigma": 1.5}
        assert dist.parametrization_name == "meanStd"

    def test_mean_var_parametrization_creation(self):
        """Test creation of distribution with mean-variance parametrization."""
        dist = self.normal_family(mu=2.0, var=2.25, parametrization_name="meanVar")

        assert dist.parameters.parameters == {"mu": 2.0, "var": 2.25}
        assert dist.parametrization_name == "meanVar"

    def test_parametrization_constraints(self):
        """Test parameter constraints validation."""
        with pytest.raises(ValueError, match="sigma > 0"):
            self.normal_family(mu=0, sigma=-1.0)

        with pytest.raises(ValueError, match="var > 0"):
            self.normal_family(mu=0, var=0.0, parametrization_name="meanVar")

    @pytest.mark.parametrize(
        "characteristic, expected",
        [(CharacteristicName.MEAN, 2.0), (CharacteristicName.VAR, 2.25)],
    )
    def test_moments(self, characteristic, expected):
        """Test moment calculations."""
        actual = self.normal_dist_example.query_method(characteristic)(None)
        assert abs(actual - expected) < self.CALCULATION_PRECISION

    def test_variance_in_mean_var_parametrization_is_direct(self):
        """Variance of the meanVar form is returned without conversion."""
        dist = self.normal_family(mu=0.0, var=4.0, parametrization_name="meanVar")

        assert dist.query_method(CharacteristicName.VAR)(None) == 4.0
        assert dist.query_method(CharacteristicName.MEAN)(None) == 0.0

    @pytest.mark.parametrize(
        "parametrization_name, params, expected_mu, expected_sigma",
        [
            ("meanStd", {"mu": 2.0, "sigma": 1.5}, 2.0, 1.5),
            ("meanVar", {"mu": 2.0, "var": 2.25}, 2.0, 1.5),
        ],
    )
    def test_parametrization_conversions(
        self, parametrization_name, params, expected_mu, expected_sigma
    ):
        """Test conversions between parameterizations."""
        base_params = self.normal_family.to_base(
            self.normal_family.parametrizations[parametrization_name](**params)
        )

        assert base_params.name == "meanStd"
        assert abs(base_params.mu - expected_mu) < self.CALCULATION_PRECISION
        assert abs(base_params.sigma - expected_sigma) < self.CALCULATION_PRECISION

    def test_analytical_computations_availability(self):
        """Test that analytical computations are available for normal distribution."""
        comp = self.normal_family(mu=0.0, sigma=1.0).analytical_computations

        expected_chars = {
            CharacteristicName.PDF,
            CharacteristicName.CDF,
            CharacteristicName.SF,
            CharacteristicName.PPF,
            CharacteristicName.MEAN,
            CharacteristicName.VAR,
        }
        assert set(comp.keys()) == expected_chars

    def test_pdf_against_scipy(self):
        """Density matches scipy.stats.norm."""
        x = np.linspace(-3.0, 7.0, 41)

        pdf = self.normal_dist_example.query_method(CharacteristicName.PDF)

        self.assert_arrays_almost_equal(pdf(x), norm.pdf(x, loc=2.0, scale=1.5))

    def test_cdf_and_sf_against_scipy(self):
        """CDF and survival function match scipy.stats.norm."""
        x = np.array([-4.0, 0.0, 2.0, 3.5, 9.0])

        cdf = self.normal_dist_example.query_method(CharacteristicName.CDF)
        sf = self.normal_dist_example.query_method(CharacteristicName.SF)

        self.assert_arrays_almost_equal(cdf(x), norm.cdf(x, loc=2.0, scale=1.5))
        self.assert_arrays_almost_equal(sf(x), norm.sf(x, loc=2.0, scale=1.5))

    def test_cdf_at_mean_is_one_half(self):
        """The normal CDF evaluated at the mean equals 0.5."""
        cdf = self.normal_dist_example.query_method(CharacteristicName.CDF)

        assert cdf(2.0) == pytest.approx(0.5, abs=1e-15)

    def test_far_upper_tail_keeps_precision(self):
        """sf far in the tail is not rounded to zero."""
        sf = self.normal_dist_example.query_method(CharacteristicName.SF)

        value = float(sf(2.0 + 10 * 1.5))
        assert value > 0.0
        assert value == pytest.approx(norm.sf(10.0), rel=1e-8)

    def test_ppf_against_scipy(self):
        """Quantiles match scipy.stats.norm."""
        p = np.array([0.001, 0.025, 0.5, 0.975, 0.999])

        ppf = self.normal_dist_example.query_method(CharacteristicName.PPF)

        np.testing.assert_allclose(ppf(p), norm.ppf(p, loc=2.0, scale=1.5), rtol=1e-7)

    def test_ppf_extremes_and_invalid_probabilities(self):
        """ppf maps 0 and 1 to infinities and rejects values outside [0, 1]."""
        ppf = self.normal_dist_example.query_method(CharacteristicName.PPF)

        assert ppf(0.0) == -math.inf
        assert ppf(1.0) == math.inf
        with pytest.raises(ValueError, match="Probability must be in"):
            ppf(1.5)

    def test_ppf_of_tiny_probabilities_is_finite(self):
        """Lower-tail quantiles stay finite down to the smallest positive double."""
        ppf = self.normal_dist_example.query_method(CharacteristicName.PPF)

        p = np.array([1e-20, 1e-300, np.nextafter(0.0, 1.0)])

        np.testing.assert_allclose(ppf(p), norm.ppf(p, loc=2.0, scale=1.5), rtol=1e-7)
        assert np.isfinite(ppf(p)).all()

    def test_mean_var_characteristics_match_mean_std(self):
        """Both parametrizations describe the same distribution."""
        x = np.array([-1.0, 0.5, 2.0, 4.0])
        by_var = self.normal_family(mu=2.0, var=2.25, parametrization_name="meanVar")

        self.assert_arrays_almost_equal(
            by_var.query_method(CharacteristicName.CDF)(x),
            self.normal_dist_example.query_method(CharacteristicName.CDF)(x),
        )

    def test_two_standard_deviation_rule(self):
        """About 95% of the mass lies within two standard deviations."""
        cdf = self.normal_dist_example.query_method(CharacteristicName.CDF)

        mass = float(cdf(2.0 + 2 * 1.5) - cdf(2.0 - 2 * 1.5))
        assert mass == pytest.approx(0.9545, abs=1e-4)

    def test_support(self):
        """Normal distribution is supported on the whole real line."""
        support = self.normal_dist_example.support

        assert isinstance(support, ContinuousSupport)
        assert support.shape == ContinuousSupportShape1D.REAL_LINE

    def test_fit_uses_sample_mean_and_standard_deviation(self, heights):
        """The normal approximation of a sample uses mean and sd (ddof=1)."""
        fitted = self.normal_family.fit(heights)

        assert fitted.parameters.mu == pytest.approx(np.mean(heights))
        assert fitted.parameters.sigma == pytest.approx(np.std(heights, ddof=1))

    def test_fit_constant_sample_raises(self):
        """A sample without spread has no normal approximation."""
        with pytest.raises(ValueError, match="zero spread"):
            self.normal_family.fit([70.0, 70.0, 70.0])

    def test_sampling_moments(self):
        """Inverse transform sampling reproduces the moments."""
        sample = self.normal_dist_example.sample(20_000, seed=2025)
        values = sample.array[:, 0]

        assert sample.shape == (20_000, 1)
        assert float(np.mean(values)) == pytest.approx(2.0, abs=0.05)
        assert float(np.std(values)) == pytest.approx(1.5, abs=0.05)
