"""
Distributions subpackage

Interfaces and default implementations for probability distributions:

- distribution protocol (:mod:`.distribution`);
- characteristic descriptors (:mod:`.characteristics`);
- event probabilities (:mod:`.events`);
- numerical fitters (:mod:`.fitters`);
- characteristic graph registry (:mod:`.registry`);
- samples and summary statistics (:mod:`.sampling`);
- pluggable strategies (:mod:`.strategies`).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .characteristics import GenericCharacteristic
from .computation import (
    AnalyticalComputation,
    ComputationMethod,
    FittedComputationMethod,
)
from .distribution import Distribution
from .events import (
    probability_at,
    probability_at_most,
    probability_between,
    probability_greater,
)
from .registry import DEFAULT_COMPUTATION_KEY, GraphInvariantError
from .sampling import ArraySample, Sample, SampleSummary, standardize, summarize
from .strategies import (
    ComputationStrategy,
    DefaultComputationStrategy,
    DefaultSamplingUnivariateStrategy,
    SamplingStrategy,
)
from .support import ContinuousSupport, ExplicitTableDiscreteSupport

__all__ = [
    # computation primitives
    "AnalyticalComputation",
    "ComputationMethod",
    "FittedComputationMethod",
    "GenericCharacteristic",
    # distribution
    "Distribution",
    # events
    "probability_at",
    "probability_at_most",
    "probability_between",
    "probability_greater",
    # sampling
    "Sample",
    "ArraySample",
    "SampleSummary",
    "summarize",
    "standardize",
    # strategies
    "ComputationStrategy",
    "DefaultComputationStrategy",
    "SamplingStrategy",
    "DefaultSamplingUnivariateStrategy",
    # support
    "ContinuousSupport",
    "ExplicitTableDiscreteSupport",
    # registry
    "DEFAULT_COMPUTATION_KEY",
    "GraphInvariantError",
]
