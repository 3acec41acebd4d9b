"""
Concrete distribution instances with specific parameter values.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pysatl_proba.distributions.distribution import Distribution
from pysatl_proba.families.registry import ParametricFamilyRegister

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any

    from pysatl_proba.distributions.computation import AnalyticalComputation
    from pysatl_proba.distributions.strategies import ComputationStrategy, SamplingStrategy
    from pysatl_proba.distributions.support import Support
    from pysatl_proba.families.parametric_family import ParametricFamily
    from pysatl_proba.families.parametrizations import Parametrization
    from pysatl_proba.types import (
        DistributionType,
        GenericCharacteristicName,
    )


@dataclass(slots=True)
class ParametricFamilyDistribution(Distribution):
    """
    A distribution from a parametric family with concrete parameter values.

    Parameters
    ----------
    family_name : str
        Name of the distribution family.
    _distribution_type : DistributionType
        Type of this distribution.
    parameters : Parametrization
        Parameter values for this distribution.
    _support : Support or None
        Support of this distribution.
    """

    family_name: str
    _distribution_type: DistributionType
    parameters: Parametrization
    _support: Support | None
    _analytical_cache_key: tuple[int, str] | None = field(default=None, repr=False, compare=False)
    _analytical_cache_val: dict[GenericCharacteristicName, AnalyticalComputation[Any, Any]] | None = (
        field(default=None, repr=False, compare=False)
    )

    @property
    def distribution_type(self) -> DistributionType:
        return self._distribution_type

    @property
    def parametrization_name(self) -> str:
        return self.parameters.name

    @property
    def family(self) -> ParametricFamily:
        """The registered family this distribution belongs to."""
        return ParametricFamilyRegister.get(self.family_name)

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
        """
        Analytical computations for the current parameters.

        Built lazily and cached; the cache is rebuilt when the parameters
        object is replaced.
        """
        key = (id(self.parameters), self.parameters.name)
        if self._analytical_cache_key != key or self._analytical_cache_val is None:
            self._analytical_cache_val = self.family._build_analytical_computations(self.parameters)
            self._analytical_cache_key = key
        return self._analytical_cache_val

    @property
    def sampling_strategy(self) -> SamplingStrategy:
        return self.family.sampling_strategy

    @property
    def computation_strategy(self) -> ComputationStrategy[Any, Any]:
        return self.family.computation_strategy

    @property
    def support(self) -> Support | None:
        return self._support

    def __str__(self) -> str:
        params = ", ".join(f"{k}={v:g}" for k, v in self.parameters.parameters.items())
        return f"{self.family_name}({params})"
