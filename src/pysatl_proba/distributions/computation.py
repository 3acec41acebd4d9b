"""
Computation Primitives
======================

Building blocks used to evaluate distribution characteristics:

- :class:`AnalyticalComputation`: a closed-form characteristic supplied by
  the distribution itself (e.g. the normal ``cdf`` via ``erf``).
- :class:`FittedComputationMethod`: a numerical conversion (e.g. ``cdf``
  obtained by integrating ``pdf``) that is ready to be called.
- :class:`ComputationMethod`: a factory that *fits* a conversion for a given
  distribution and returns a :class:`FittedComputationMethod`.

Notes
-----
Fitted conversions are scalar (``float -> float``). Analytical computations
may be vectorized; callers that need arrays should prefer them.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np
from mypy_extensions import KwArg

from pysatl_proba.types import GenericCharacteristicName

if TYPE_CHECKING:
    from pysatl_proba.distributions.distribution import Distribution


@dataclass(frozen=True, slots=True)
class AnalyticalComputation[In, Out]:
    """Analytical computation provided directly by the distribution.

    Parameters
    ----------
    target : str
        Characteristic name (e.g., ``"pdf"``).
    func : Callable[[In, KwArg(Any)], Out]
        Analytical callable.
    """

    target: GenericCharacteristicName
    func: Callable[[In, KwArg(Any)], Out]

    def __call__(self, data: In, **options: Any) -> Out:
        return self.func(data, **options)


@dataclass(frozen=True, slots=True)
class FittedComputationMethod[In, Out]:
    """Fitted conversion method (ready-to-use).

    Parameters
    ----------
    target : str
        Destination characteristic name.
    sources : Sequence[str]
        Source characteristic names (unary conversions use length 1).
    func : Callable[[In, KwArg(Any)], Out]
        Callable implementing the fitted conversion.
    """

    target: GenericCharacteristicName
    sources: Sequence[GenericCharacteristicName]
    func: Callable[[In, KwArg(Any)], Out]

    def __call__(self, data: In, **options: Any) -> Out:
        return self.func(data, **options)


@dataclass(frozen=True, slots=True)
class ComputationMethod[In, Out]:
    """Conversion method factory (to be fitted).

    Parameters
    ----------
    target : str
        Destination characteristic name.
    sources : Sequence[str]
        Source characteristic names (unary for current graph edges).
    fitter : Callable[[Distribution, KwArg(Any)], FittedComputationMethod]
        Fitter that prepares a callable conversion for the given distribution.
    """

    target: GenericCharacteristicName
    sources: Sequence[GenericCharacteristicName]
    fitter: Callable[["Distribution", KwArg(Any)], FittedComputationMethod[In, Out]]

    def fit(self, distribution: "Distribution", **options: Any) -> FittedComputationMethod[In, Out]:
        """Fit and return a :class:`FittedComputationMethod`."""
        return self.fitter(distribution, **options)


def evaluate_elementwise(method: Callable[..., Any], data: Any, **options: Any) -> Any:
    """
    Evaluate a characteristic on scalar or array input.

    Analytical computations are tried on the whole array first; scalar-only
    methods (fitted conversions) fall back to element-wise evaluation.

    Returns
    -------
    float or numpy.ndarray
        A float for scalar input, otherwise an array of the input's shape.
    """
    arr = np.asarray(data, dtype=np.float64)
    if arr.ndim == 0:
        return float(method(float(arr), **options))

    if isinstance(method, AnalyticalComputation):
        try:
            result = np.asarray(method(arr, **options), dtype=np.float64)
        except (TypeError, ValueError):
            result = None
        if result is not None and result.shape == arr.shape:
            return result

    flat = np.fromiter(
        (float(method(float(x), **options)) for x in arr.ravel()),
        dtype=np.float64,
        count=arr.size,
    )
    return flat.reshape(arr.shape)
