"""
Distribution Interface
======================

The public :class:`Distribution` protocol shared by parametric families
(theoretical distributions) and empirical distributions built from samples.

Notes
-----
- Characteristics are resolved by the distribution's computation strategy:
  analytical first, numerical conversions otherwise.
- Sampling is delegated to the distribution's sampling strategy.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pysatl_proba.distributions.computation import evaluate_elementwise

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any

    from pysatl_proba.distributions.computation import AnalyticalComputation
    from pysatl_proba.distributions.sampling import Sample
    from pysatl_proba.distributions.strategies import (
        ComputationStrategy,
        Method,
        SamplingStrategy,
    )
    from pysatl_proba.distributions.support import Support
    from pysatl_proba.types import (
        DistributionType,
        GenericCharacteristicName,
    )


@runtime_checkable
class Distribution(Protocol):
    """Public distribution interface used by strategies, fitters and simulations."""

    @property
    def distribution_type(self) -> DistributionType: ...

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]: ...

    @property
    def sampling_strategy(self) -> SamplingStrategy: ...
    @property
    def computation_strategy(self) -> ComputationStrategy[Any, Any]: ...

    @property
    def support(self) -> Support | None: ...

    def query_method(
        self, characteristic_name: GenericCharacteristicName, **options: Any
    ) -> Method[Any, Any]:
        return self.computation_strategy.query_method(characteristic_name, self, **options)

    def calculate_characteristic(
        self, characteristic_name: GenericCharacteristicName, value: Any, **options: Any
    ) -> Any:
        """
        Evaluate a characteristic at a scalar or an array of points.

        Resolution options (e.g. ``most_left``) are passed to
        :meth:`query_method`; the evaluation itself is element-wise for
        scalar-only fitted methods.
        """
        return evaluate_elementwise(self.query_method(characteristic_name, **options), value)

    def sample(self, n: int, **options: Any) -> Sample:
        return self.sampling_strategy.sample(n, distr=self, **options)
