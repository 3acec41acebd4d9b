"""
Distribution Families Configuration
===================================

Registers the built-in families in the global
:class:`~pysatl_proba.families.registry.ParametricFamilyRegister`:

- Normal: the theoretical approximation of measurement data;
- ContinuousUniform: the source of pseudo-random uniform variates.

Notes
-----
Configuration runs once per process (``functools.lru_cache``); tests reset it
with :func:`reset_families_register`.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from functools import lru_cache
from typing import TYPE_CHECKING

from pysatl_proba.families.builtins import (
    configure_normal_family,
    configure_uniform_family,
)
from pysatl_proba.families.registry import ParametricFamilyRegister
from pysatl_proba.types import FamilyName

if TYPE_CHECKING:
    from pysatl_proba.families.distribution import ParametricFamilyDistribution


@lru_cache(maxsize=1)
def configure_families_register() -> ParametricFamilyRegister:
    """
    Register all built-in families and return the global registry.

    Returns
    -------
    ParametricFamilyRegister
        The global registry of parametric families.
    """
    configure_normal_family()
    configure_uniform_family()
    return ParametricFamilyRegister()


def reset_families_register() -> None:
    """Reset the cached families registry."""
    configure_families_register.cache_clear()
    ParametricFamilyRegister._reset()


def normal(mu: float = 0.0, sigma: float = 1.0) -> ParametricFamilyDistribution:
    """Shortcut for ``Normal(mu, sigma)`` from the configured registry."""
    return configure_families_register().get(FamilyName.NORMAL)(mu=mu, sigma=sigma)


def uniform(lower_bound: float = 0.0, upper_bound: float = 1.0) -> ParametricFamilyDistribution:
    """Shortcut for ``ContinuousUniform(lower_bound, upper_bound)``."""
    return configure_families_register().get(FamilyName.CONTINUOUS_UNIFORM)(
        lower_bound=lower_bound, upper_bound=upper_bound
    )
