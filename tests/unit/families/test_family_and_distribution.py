from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import numpy as np
import pytest

from pysatl_proba.families import (
    ParametricFamily,
    ParametricFamilyRegister,
    Parametrization,
    constraint,
)
from pysatl_proba.types import UnivariateContinuous
from tests.unit.families.test_basic import TestBaseFamily


class TestFamilyRegistrationAndSampling(TestBaseFamily):
    def test_inverse_transform_sampling_stays_in_support(self) -> None:
        fam = self.make_shifted_family()
        ParametricFamilyRegister.register(fam)

        distr = fam.distribution("location", loc=68.0)
        sample = distr.sample(128, seed=0)

        assert sample.shape == (128, 1)
        assert np.all((sample.array >= 68.0) & (sample.array <= 69.0))

    def test_sampling_from_alternative_parametrization(self) -> None:
        fam = self.make_shifted_family()
        ParametricFamilyRegister.register(fam)

        distr = fam.distribution("interval", lower=-2.0, upper=-1.0)
        values = distr.sample(64, seed=1).array[:, 0]

        assert values.min() >= -2.0 and values.max() <= -1.0

    def test_fitted_conversion_from_family_characteristics(self) -> None:
        characteristics = self.shifted_unit_characteristics()
        del characteristics[self.PPF]
        fam = self.make_shifted_family(distr_characteristics=characteristics)
        ParametricFamilyRegister.register(fam)

        distr = fam(loc=10.0)

        assert distr.calculate_characteristic(self.PPF, 0.3) == pytest.approx(10.3, abs=1e-9)

    def test_family_without_estimator_cannot_fit(self) -> None:
        fam = self.make_shifted_family()

        with pytest.raises(ValueError, match="no parameter estimator"):
            fam.fit([1.0, 2.0, 3.0])

    def test_distribution_knows_its_family(self) -> None:
        fam = self.make_shifted_family()
        ParametricFamilyRegister.register(fam)

        distr = fam(loc=1.5)

        assert distr.family is fam
        assert distr.parametrization_name == "location"
        assert str(distr) == "ShiftedUnit(loc=1.5)"

    def test_alternative_parametrization_constraint(self) -> None:
        fam = self.make_shifted_family()

        with pytest.raises(ValueError, match="upper - lower == 1"):
            fam.distribution("interval", lower=0.0, upper=2.0)

    def test_violated_constraint_prevents_construction(self) -> None:
        fam = ParametricFamily(
            name="PositiveOnly",
            distr_type=UnivariateContinuous,
            distr_parametrizations=["scale"],
            distr_characteristics={},
        )

        @fam.parametrization(name="scale")
        class Positive(Parametrization):
            value: float

            @constraint("value > 0")
            def check_value(self) -> bool:
                return self.value > 0

        with pytest.raises(ValueError, match="value > 0"):
            fam.distribution("scale", value=-1.0)
