"""
PySATL Proba
============

Continuous probability for measurement data: empirical and theoretical
cumulative distribution functions, the normal approximation, discretization
diagnostics, Monte Carlo simulation and histograms, built on a framework of
distribution abstractions, characteristic computation graphs and parametric
families.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from importlib.metadata import version

from .distributions import *
from .distributions import __all__ as _distr_all
from .empirical import *
from .empirical import __all__ as _empirical_all
from .families import *
from .families import __all__ as _family_all
from .histograms import *
from .histograms import __all__ as _histograms_all
from .montecarlo import *
from .montecarlo import __all__ as _montecarlo_all
from .types import *
from .types import __all__ as _types_all

__version__ = version("pysatl-proba")
__all__ = [
    "__version__",
    *_distr_all,
    *_empirical_all,
    *_family_all,
    *_histograms_all,
    *_montecarlo_all,
    *_types_all,
]

del _distr_all
del _empirical_all
del _family_all
del _histograms_all
del _montecarlo_all
del _types_all
