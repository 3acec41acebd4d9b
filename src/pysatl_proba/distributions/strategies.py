"""
Computation and Sampling Strategies
===================================

Pluggable strategy interfaces and their default implementations:

- :class:`ComputationStrategy`: resolves characteristic methods.
- :class:`DefaultComputationStrategy`: resolves analyticals, optionally caches
  fitted conversions, and walks the characteristic graph on demand.
- :class:`SamplingStrategy`: draws samples from a distribution.
- :class:`DefaultSamplingUnivariateStrategy`: draws ``(n, 1)`` samples by
  inverse transform of i.i.d. uniform variates.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Any, Protocol

import numpy as np

from pysatl_proba.distributions.computation import (
    AnalyticalComputation,
    FittedComputationMethod,
    evaluate_elementwise,
)
from pysatl_proba.types import CharacteristicName, GenericCharacteristicName

from .registry import distribution_type_register
from .sampling import ArraySample, Sample

if TYPE_CHECKING:
    from .distribution import Distribution

type Method[In, Out] = AnalyticalComputation[In, Out] | FittedComputationMethod[In, Out]

# Inverse transform draws from the open interval (0, 1); ppf(0) is -inf.
_SMALLEST_UNIFORM = float(np.nextafter(0.0, 1.0))


def make_rng(options: dict[str, Any]) -> np.random.Generator:
    """
    Pop ``rng``/``seed`` from sampling options and build a generator.

    An explicit ``rng`` wins over ``seed``; without either a fresh,
    OS-seeded generator is returned.
    """
    rng = options.pop("rng", None)
    seed = options.pop("seed", None)
    if rng is not None:
        if not isinstance(rng, np.random.Generator):
            raise TypeError(f"rng must be a numpy.random.Generator, got {type(rng).__name__}.")
        return rng
    return np.random.default_rng(seed)


class ComputationStrategy[In, Out](Protocol):
    """Protocol for characteristic resolution strategies."""

    enable_caching: bool

    def query_method(
        self, state: GenericCharacteristicName, distr: "Distribution", **options: Any
    ) -> Method[In, Out]: ...


class DefaultComputationStrategy[In, Out]:
    """
    Default characteristic resolver.

    Resolution order
    ----------------
    1. If the distribution provides an analytical implementation, return it.
    2. Else, if caching is enabled and the method is cached, return it.
    3. Else walk the characteristic graph of the distribution type from each
       analytical characteristic and fit the edges of the first path found.

    Parameters
    ----------
    enable_caching : bool, default False
        Cache fitted conversions per distribution instance and options.

    Raises
    ------
    RuntimeError
        If the distribution has no analytical base, no conversion path exists,
        or a cycle is detected during resolution.
    """

    def __init__(self, enable_caching: bool = False) -> None:
        self.enable_caching = enable_caching
        self._cache: dict[tuple[Any, ...], tuple["Distribution", FittedComputationMethod[In, Out]]] = {}
        self._resolving: dict[int, set[GenericCharacteristicName]] = {}

    @staticmethod
    def _cache_key(
        distr: "Distribution", state: GenericCharacteristicName, options: dict[str, Any]
    ) -> tuple[Any, ...]:
        return (id(distr), state, tuple(sorted(options.items())))

    def _push_guard(self, distr: "Distribution", state: GenericCharacteristicName) -> None:
        seen = self._resolving.setdefault(id(distr), set())
        if state in seen:
            raise RuntimeError(
                f"Cycle detected while resolving '{state}'. "
                "Provide at least one analytical base characteristic in the distribution."
            )
        seen.add(state)

    def _pop_guard(self, distr: "Distribution", state: GenericCharacteristicName) -> None:
        key = id(distr)
        seen = self._resolving.get(key)
        if seen is not None:
            seen.discard(state)
            if not seen:
                self._resolving.pop(key, None)

    def clear_cache(self) -> None:
        """Drop all cached fitted conversions."""
        self._cache.clear()

    def query_method(
        self, state: GenericCharacteristicName, distr: "Distribution", **options: Any
    ) -> Method[In, Out]:
        """
        Resolve an analytical or fitted method for ``state``.

        Parameters
        ----------
        state : str
            Target characteristic name to resolve.
        distr : Distribution
            The distribution providing the analytical base and type.
        **options
            Passed to the fitter(s) when conversions are required.

        Returns
        -------
        Method
            Analytical or fitted callable implementing ``state``.
        """
        analytical = distr.analytical_computations
        if state in analytical:
            return analytical[state]

        key = self._cache_key(distr, state, options)
        if self.enable_caching and key in self._cache:
            return self._cache[key][1]

        if not analytical:
            raise RuntimeError(
                "Distribution provides no analytical computations to ground conversions."
            )

        graph = distribution_type_register().get(distr.distribution_type)

        self._push_guard(distr, state)
        try:
            for src in analytical:
                path = graph.find_path(src, state)
                if not path:
                    continue

                fitted: FittedComputationMethod[In, Out] | None = None
                for edge in path:
                    fitted = edge.fit(distr, **options)
                    if self.enable_caching:
                        edge_key = self._cache_key(distr, edge.target, options)
                        self._cache[edge_key] = (distr, fitted)

                if fitted is not None:
                    return fitted

            raise RuntimeError(
                f"No conversion path from any analytical characteristic to '{state}'."
            )
        finally:
            self._pop_guard(distr, state)


class SamplingStrategy(Protocol):
    """Protocol for sampling strategies (return a :class:`Sample`)."""

    def sample(self, n: int, distr: "Distribution", **options: Any) -> Sample: ...


class DefaultSamplingUnivariateStrategy(SamplingStrategy):
    """
    Default univariate sampler using inverse transform sampling.

    The strategy resolves the distribution's ``ppf`` and applies it to i.i.d.
    uniforms ``U ~ U(0, 1)``. Pass ``seed=`` or ``rng=`` for reproducible
    draws; remaining options are forwarded to ``ppf`` resolution.

    Returns
    -------
    ArraySample
        A 2D sample of shape ``(n, 1)``.
    """

    def sample(self, n: int, distr: "Distribution", **options: Any) -> ArraySample:
        if n < 0:
            raise ValueError(f"Sample size must be non-negative, got {n}.")
        rng = make_rng(options)
        ppf = distr.query_method(CharacteristicName.PPF, **options)
        U = rng.uniform(_SMALLEST_UNIFORM, 1.0, n)
        vals = np.asarray(evaluate_elementwise(ppf, U), dtype=np.float64).reshape(n, 1)
        return ArraySample(vals)
