"""
Parametric family definitions.

A :class:`ParametricFamily` bundles a family's parametrizations, its analytical
characteristics, its strategies, and an optional estimator that derives base
parameters from a sample (e.g. the normal approximation of a list of heights
uses the sample mean and standard deviation).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from functools import partial
from typing import TYPE_CHECKING

from pysatl_proba.distributions.computation import AnalyticalComputation
from pysatl_proba.distributions.strategies import (
    DefaultComputationStrategy,
    DefaultSamplingUnivariateStrategy,
)
from pysatl_proba.families.distribution import ParametricFamilyDistribution
from pysatl_proba.types import DistributionType

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any

    import numpy.typing as npt

    from pysatl_proba.distributions.sampling import Sample
    from pysatl_proba.distributions.strategies import ComputationStrategy, SamplingStrategy
    from pysatl_proba.distributions.support import Support
    from pysatl_proba.families.parametrizations import Parametrization
    from pysatl_proba.types import (
        GenericCharacteristicName,
        ParametrizationName,
    )

    type ParametrizedFunction = Callable[[Parametrization, Any], Any]
    type SupportResolver = Callable[[Parametrization], Support | None]
    type Estimator = Callable[[Sample | npt.ArrayLike], dict[str, float]]


class ParametricFamily:
    """
    A family of distributions with multiple parametrizations.

    Parameters
    ----------
    name : str
        Name of the distribution family.
    distr_type : DistributionType or Callable[[Parametrization], DistributionType]
        Distribution type or function that infers it from base parameters.
    distr_parametrizations : list[ParametrizationName]
        Parametrization names; the first one is the base parametrization.
    distr_characteristics : dict
        Characteristic name -> function of ``(parameters, x)``, or a mapping
        parametrization name -> function. A bare function is defined for the
        base parametrization.
    sampling_strategy : SamplingStrategy, optional
        Defaults to inverse transform sampling.
    computation_strategy : ComputationStrategy, optional
        Defaults to :class:`DefaultComputationStrategy`.
    support_by_parametrization : Callable, optional
        Returns the support for given parameters.
    estimator : Callable, optional
        Maps a sample to base parameter values, used by :meth:`fit`.
    """

    def __init__(
        self,
        name: str,
        distr_type: DistributionType | Callable[[Parametrization], DistributionType],
        distr_parametrizations: list[ParametrizationName],
        distr_characteristics: dict[
            GenericCharacteristicName,
            dict[ParametrizationName, ParametrizedFunction] | ParametrizedFunction,
        ],
        sampling_strategy: SamplingStrategy | None = None,
        computation_strategy: ComputationStrategy[Any, Any] | None = None,
        support_by_parametrization: SupportResolver | None = None,
        estimator: Estimator | None = None,
    ):
        if not distr_parametrizations:
            raise ValueError("A family needs at least one parametrization name.")

        self._name = name
        self._distr_type: Callable[[Parametrization], DistributionType] = (
            (lambda params: distr_type) if isinstance(distr_type, DistributionType) else distr_type
        )
        self._support_resolver: SupportResolver = (
            support_by_parametrization
            if support_by_parametrization is not None
            else (lambda _params: None)
        )
        self._estimator = estimator

        self.parametrization_names: list[ParametrizationName] = list(distr_parametrizations)
        self.base_parametrization_name: ParametrizationName = self.parametrization_names[0]
        self._parametrizations: dict[ParametrizationName, type[Parametrization]] = {}

        self.sampling_strategy = sampling_strategy or DefaultSamplingUnivariateStrategy()
        self.computation_strategy = computation_strategy or DefaultComputationStrategy()

        self.distr_characteristics: dict[
            GenericCharacteristicName, dict[ParametrizationName, ParametrizedFunction]
        ] = {
            key: val if isinstance(val, dict) else {self.base_parametrization_name: val}
            for key, val in distr_characteristics.items()
        }

        # For every parametrization: which form provides each characteristic.
        # A form defined for the parametrization itself wins over the base form.
        self._analytical_plan: dict[
            ParametrizationName, dict[GenericCharacteristicName, ParametrizationName]
        ] = {}
        for pname in self.parametrization_names:
            plan: dict[GenericCharacteristicName, ParametrizationName] = {}
            for characteristic, forms in self.distr_characteristics.items():
                if pname in forms:
                    plan[characteristic] = pname
                elif self.base_parametrization_name in forms:
                    plan[characteristic] = self.base_parametrization_name
            self._analytical_plan[pname] = plan

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, parametrizations={self.parametrization_names})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def parametrizations(self) -> dict[ParametrizationName, type[Parametrization]]:
        """Mapping from parametrization names to registered classes."""
        return self._parametrizations

    @property
    def base(self) -> type[Parametrization]:
        """
        The base parametrization class.

        Raises
        ------
        ValueError
            If the base parametrization is not registered.
        """
        try:
            return self._parametrizations[self.base_parametrization_name]
        except KeyError as exc:
            raise ValueError(
                f"Base parametrization '{self.base_parametrization_name}' is not registered."
            ) from exc

    @property
    def support_resolver(self) -> SupportResolver:
        return self._support_resolver

    def register_parametrization(
        self,
        name: ParametrizationName,
        parametrization_class: type[Parametrization],
    ) -> None:
        """
        Register a parametrization class.

        Raises
        ------
        ValueError
            If the name is unknown to the family or already registered.
        """
        if name not in self.parametrization_names:
            raise ValueError(f"Family '{self._name}' does not declare parametrization '{name}'.")
        if name in self._parametrizations:
            raise ValueError(f"Parametrization '{name}' is already registered.")
        self._parametrizations[name] = parametrization_class

    def to_base(self, parameters: Parametrization) -> Parametrization:
        """Convert parameters to the base parametrization."""
        if parameters.name == self.base_parametrization_name:
            return parameters
        return parameters.transform_to_base_parametrization()

    def _build_analytical_computations(
        self, parameters: Parametrization
    ) -> dict[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
        plan = self._analytical_plan.get(parameters.name, {})
        result: dict[GenericCharacteristicName, AnalyticalComputation[Any, Any]] = {}
        base_params: Parametrization | None = None

        for characteristic, provider_name in plan.items():
            if provider_name == parameters.name:
                params_obj = parameters
            else:
                if base_params is None:
                    base_params = self.to_base(parameters)
                params_obj = base_params

            func = self.distr_characteristics[characteristic][provider_name]
            result[characteristic] = AnalyticalComputation(
                target=characteristic,
                func=partial(func, params_obj),
            )

        return result

    def distribution(
        self,
        parametrization_name: str | None = None,
        **parameters_values: Any,
    ) -> ParametricFamilyDistribution:
        """
        Create a distribution with the given parameters.

        Parameters
        ----------
        parametrization_name : str, optional
            Parametrization to use (defaults to the base one).
        **parameters_values
            Parameter values, e.g. ``mu=69.3, sigma=3.6``.

        Raises
        ------
        KeyError
            If the parametrization name is not registered.
        ValueError
            If the parameters violate a constraint.
        """
        if parametrization_name is None:
            parametrization_class = self.base
        else:
            parametrization_class = self._parametrizations[parametrization_name]

        parameters = parametrization_class(**parameters_values)
        parameters.validate()
        base_parameters = self.to_base(parameters)
        return ParametricFamilyDistribution(
            self.name,
            self._distr_type(base_parameters),
            parameters,
            self.support_resolver(base_parameters),
        )

    __call__ = distribution

    def estimate(self, sample: Sample | npt.ArrayLike) -> dict[str, float]:
        """
        Estimate base parameter values from a sample.

        Raises
        ------
        ValueError
            If the family has no estimator.
        """
        if self._estimator is None:
            raise ValueError(f"Family '{self._name}' has no parameter estimator.")
        return self._estimator(sample)

    def fit(self, sample: Sample | npt.ArrayLike) -> ParametricFamilyDistribution:
        """
        Build the family member that approximates a sample.

        For the normal family this is ``Normal(mu=mean(x), sigma=sd(x))``.
        """
        return self.distribution(**self.estimate(sample))

    def parametrization(
        self, *, name: str
    ) -> Callable[[type[Parametrization]], type[Parametrization]]:
        """Class decorator registering a parametrization of this family."""
        from pysatl_proba.families.parametrizations import parametrization as _param_deco

        return _param_deco(family=self, name=name)
