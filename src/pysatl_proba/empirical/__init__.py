"""
Empirical subpackage

Distributions estimated directly from observations:

- the empirical distribution and its CDF (:mod:`.distribution`);
- comparison with a theoretical approximation (:mod:`.comparison`);
- diagnostics for rounded measurements (:mod:`.discretization`).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .comparison import CDFComparison, compare_cdfs, max_cdf_discrepancy, quantile_pairs
from .discretization import (
    DiscretizationRow,
    DiscretizationWarning,
    check_discretization,
    discretization_table,
    grid_share,
    round_to_resolution,
)
from .distribution import BootstrapSamplingStrategy, EmpiricalDistribution, empirical_cdf

__all__ = [
    # distribution
    "EmpiricalDistribution",
    "BootstrapSamplingStrategy",
    "empirical_cdf",
    # comparison
    "CDFComparison",
    "compare_cdfs",
    "max_cdf_discrepancy",
    "quantile_pairs",
    # discretization
    "DiscretizationRow",
    "DiscretizationWarning",
    "check_discretization",
    "discretization_table",
    "grid_share",
    "round_to_resolution",
]
