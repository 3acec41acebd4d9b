"""
Numerical Conversions Between Characteristics
=============================================

Fitters for univariate continuous distributions. Each fitter resolves its
source characteristic through the distribution's computation strategy and
returns a scalar :class:`~pysatl_proba.distributions.computation.FittedComputationMethod`.

- ``pdf -> cdf``: the CDF is the running integral of the density.
- ``cdf -> pdf``: the density is the derivative of the CDF.
- ``cdf -> ppf``: quantiles by bracketing and bisection on the CDF.
- ``ppf -> cdf``: CDF by root-finding on the quantile function.
- ``cdf -> sf``: survival function ``1 - F(x)``.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable
from math import isfinite
from typing import TYPE_CHECKING, Any, cast

import numpy as np
from mypy_extensions import KwArg
from scipy import (
    integrate as _sp_integrate,
    optimize as _sp_optimize,
)

from pysatl_proba.distributions.computation import FittedComputationMethod
from pysatl_proba.types import CharacteristicName

if TYPE_CHECKING:
    from pysatl_proba.distributions.distribution import Distribution
    from pysatl_proba.types import GenericCharacteristicName, ScalarFunc

# Grid 0, +-1, ..., +-2**40 scanned when no anchor is known.
_ANCHOR_GRID_POWERS = 41
# Stands in for -log(0); exceeds -log of the smallest positive double.
_ZERO_DENSITY_PENALTY = 1e6


def _resolve(distribution: Distribution, name: GenericCharacteristicName) -> ScalarFunc:
    """
    Resolve a scalar characteristic from the distribution.

    Raises
    ------
    RuntimeError
        If the distribution does not provide a computation strategy.
    """
    try:
        fn = distribution.query_method(name)
    except AttributeError as e:
        raise RuntimeError(
            "Distribution must provide computation_strategy.query_method(name, distribution)."
        ) from e

    def _wrap(x: float, **kwargs: Any) -> float:
        return float(fn(x, **kwargs))

    return _wrap


def _ppf_from_cdf(
    cdf: ScalarFunc,
    *,
    most_left: bool = False,
    x0: float = 0.0,
    init_step: float = 1.0,
    expand_factor: float = 2.0,
    max_expand: int = 60,
    x_tol: float = 1e-12,
    max_iter: int = 200,
) -> ScalarFunc:
    """
    Build a scalar ``ppf`` from a monotone scalar ``cdf``.

    The bracket ``[L, R]`` around ``x0`` grows geometrically until it contains
    the quantile, then bisection narrows it down.

    Parameters
    ----------
    cdf : Callable[[float], float]
        Monotone CDF.
    most_left : bool, default False
        Return the leftmost quantile on flat CDF plateaus.
    x0 : float, default 0.0
        Initial bracket center. Measurements far from zero (heights in
        inches) converge faster with ``x0`` near the data.
    init_step, expand_factor, max_expand
        Bracket growth controls.
    x_tol : float, default 1e-12
        Relative stopping width of the bracket.
    max_iter : int, default 200
        Maximum number of bisection steps.

    Notes
    -----
    ``q <= 0`` maps to ``-inf`` and ``q >= 1`` maps to ``+inf``.
    """

    def _inside(q: float, FL: float, FR: float) -> bool:
        if most_left:
            return FL < q <= FR
        return FL <= q < FR

    def _expand_bracket(q: float) -> tuple[float, float]:
        step = init_step
        L, R = x0 - step, x0 + step
        FL, FR = float(cdf(L)), float(cdf(R))

        for _ in range(max_expand):
            if _inside(q, FL, FR):
                break
            if not (FL < q if most_left else FL <= q):
                step *= expand_factor
                L -= step
                FL = float(cdf(L))
            if not (q <= FR if most_left else q < FR):
                step *= expand_factor
                R += step
                FR = float(cdf(R))
        return L, R

    def _ppf(q: float, **kwargs: Any) -> float:
        if q <= 0.0:
            return float("-inf")
        if q >= 1.0:
            return float("inf")

        L, R = _expand_bracket(q)

        for _ in range(max_iter):
            if (R - L) <= x_tol * (1.0 + max(abs(L), abs(R))):
                break
            M = 0.5 * (L + R)
            FM = float(cdf(M))
            if q < FM or (most_left and q == FM):
                R = M
            else:
                L = M

        return R if most_left else L

    return _ppf


def _mass_anchor(
    distribution: Distribution, score: ScalarFunc | None = None, x0: float | None = None
) -> float:
    """
    Pick a finite point inside the bulk of the distribution's mass.

    Lookup order: an explicit ``x0``, the analytical median ``ppf(0.5)``,
    the analytical ``mean``, and finally the point of the grid
    ``0, +-1, +-2, +-4, ...`` with the highest ``score``.
    ``score`` defaults to the analytical ``pdf`` when there is one; without
    any score the fallback is ``0.0``.
    """
    if x0 is not None:
        return float(x0)

    analytical = distribution.analytical_computations
    for name, arg in ((CharacteristicName.PPF, 0.5), (CharacteristicName.MEAN, 0.0)):
        if name in analytical:
            m = float(analytical[name](arg))
            if isfinite(m):
                return m

    if score is None and CharacteristicName.PDF in analytical:
        score = cast("ScalarFunc", analytical[CharacteristicName.PDF])
    if score is None:
        return 0.0
    powers = [2.0**k for k in range(_ANCHOR_GRID_POWERS)]
    grid = [-p for p in reversed(powers)] + [0.0] + powers
    scores = [float(score(t)) for t in grid]
    i = int(np.argmax(scores))
    if scores[i] <= 0.0:
        return 0.0

    # refine between the grid neighbours on the log scale
    def neg_log_score(t: float) -> float:
        s = float(score(t))
        return float(-np.log(s)) if s > 0.0 else _ZERO_DENSITY_PENALTY

    lo, hi = grid[max(i - 1, 0)], grid[min(i + 1, len(grid) - 1)]
    res = _sp_optimize.minimize_scalar(neg_log_score, bounds=(lo, hi), method="bounded")
    return float(res.x) if float(score(res.x)) >= scores[i] else grid[i]


def _num_derivative(f: ScalarFunc, x: float, h: float = 1e-5) -> float:
    """5-point central numerical derivative used for ``cdf -> pdf``."""
    if not isfinite(x):
        return float("nan")
    f1 = float(f(x + h))
    f_1 = float(f(x - h))
    f2 = float(f(x + 2 * h))
    f_2 = float(f(x - 2 * h))
    return float((-f2 + 8 * f1 - 8 * f_1 + f_2) / (12.0 * h))


def fit_pdf_to_cdf_1C(
    distribution: Distribution, /, **options: Any
) -> FittedComputationMethod[float, float]:
    """
    Fit ``cdf`` as the running integral of ``pdf``.

    ``F(a) = integral of f(t) dt over (-inf, a]``, computed with
    :func:`scipy.integrate.quad` and clipped to ``[0, 1]``.

    The real line is split at an anchor ``m`` inside the bulk of the mass
    (the ``x0`` option when given). Left of ``m`` the left tail is
    integrated; right of ``m`` the right tail is subtracted from the total
    mass. Each quadrature then covers a tail whose mass sits next to its
    finite end.
    """
    pdf_func = _resolve(distribution, CharacteristicName.PDF)
    anchor = _mass_anchor(distribution, pdf_func, options.get("x0"))
    inf = float("inf")

    def _integrate(f: ScalarFunc, a: float, b: float) -> float:
        val, _ = _sp_integrate.quad(f, a, b, limit=200)
        return float(val)

    def _total(f: ScalarFunc) -> float:
        return _integrate(f, -inf, anchor) + _integrate(f, anchor, inf)

    total_mass = _total(pdf_func)

    def _cdf(x: float, **kwargs: Any) -> float:
        if x == -inf:
            return 0.0
        if x == inf:
            return 1.0

        def f(t: float) -> float:
            return float(pdf_func(t, **kwargs))

        if x <= anchor:
            val = _integrate(f, -inf, x)
        else:
            total = _total(f) if kwargs else total_mass
            val = total - _integrate(f, x, inf)
        return float(np.clip(val, 0.0, 1.0))

    cdf_func = cast(Callable[[float, KwArg(Any)], float], _cdf)
    return FittedComputationMethod[float, float](
        target=CharacteristicName.CDF, sources=[CharacteristicName.PDF], func=cdf_func
    )


def fit_cdf_to_pdf_1C(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[float, float]:
    """Fit ``pdf`` as a clipped numerical derivative of ``cdf``."""
    cdf_func = _resolve(distribution, CharacteristicName.CDF)

    def _pdf(x: float, **options: Any) -> float:
        def wrapped_cdf(t: float) -> float:
            return cdf_func(t, **options)

        d = _num_derivative(wrapped_cdf, x, h=1e-5)
        return float(max(d, 0.0))

    pdf_func = cast(Callable[[float, KwArg(Any)], float], _pdf)
    return FittedComputationMethod[float, float](
        target=CharacteristicName.PDF, sources=[CharacteristicName.CDF], func=pdf_func
    )


def fit_cdf_to_ppf_1C(
    distribution: Distribution, /, **options: Any
) -> FittedComputationMethod[float, float]:
    """
    Fit ``ppf`` from a resolvable ``cdf`` by bracketing and bisection.

    Options ``most_left``, ``x0``, ``init_step``, ``x_tol`` and ``max_iter``
    are forwarded to the quantile search. Without ``x0`` the bracket starts
    from an anchor inside the bulk of the mass.
    """
    cdf_func = _resolve(distribution, CharacteristicName.CDF)

    search_keys = ("most_left", "init_step", "expand_factor", "max_expand", "x_tol", "max_iter")
    search_options = {k: v for k, v in options.items() if k in search_keys}
    search_options["x0"] = _mass_anchor(distribution, x0=options.get("x0"))
    ppf_func = _ppf_from_cdf(cdf_func, **search_options)

    def _ppf(q: float, **kwargs: Any) -> float:
        return ppf_func(q)

    ppf_cast = cast(Callable[[float, KwArg(Any)], float], _ppf)
    return FittedComputationMethod[float, float](
        target=CharacteristicName.PPF, sources=[CharacteristicName.CDF], func=ppf_cast
    )


def fit_ppf_to_cdf_1C(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[float, float]:
    """Fit ``cdf`` by numerically inverting ``ppf`` with :func:`scipy.optimize.brentq`."""
    ppf_func = _resolve(distribution, CharacteristicName.PPF)

    def _cdf(x: float, **options: Any) -> float:
        if not isfinite(x):
            return 0.0 if x == float("-inf") else 1.0

        def f(q: float) -> float:
            return float(ppf_func(q, **options) - x)

        lo, hi = 1e-12, 1.0 - 1e-12
        if f(lo) > 0.0:
            return 0.0
        if f(hi) < 0.0:
            return 1.0
        q = float(_sp_optimize.brentq(f, lo, hi, maxiter=256))
        return float(np.clip(q, 0.0, 1.0))

    cdf_func = cast(Callable[[float, KwArg(Any)], float], _cdf)
    return FittedComputationMethod[float, float](
        target=CharacteristicName.CDF, sources=[CharacteristicName.PPF], func=cdf_func
    )


def fit_cdf_to_sf_1C(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[float, float]:
    """Fit the survival function ``sf(x) = 1 - cdf(x)``."""
    cdf_func = _resolve(distribution, CharacteristicName.CDF)

    def _sf(x: float, **options: Any) -> float:
        return float(np.clip(1.0 - cdf_func(x, **options), 0.0, 1.0))

    sf_func = cast(Callable[[float, KwArg(Any)], float], _sf)
    return FittedComputationMethod[float, float](
        target=CharacteristicName.SF, sources=[CharacteristicName.CDF], func=sf_func
    )
