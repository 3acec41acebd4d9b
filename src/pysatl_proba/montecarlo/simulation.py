"""
Monte Carlo Simulation
======================

Estimate probabilities and statistics by repeating a random experiment many
times and averaging the outcomes. Every run is driven by a single
``numpy.random.Generator`` built from :class:`MonteCarloConfig`, so a fixed
seed reproduces the whole simulation.

Examples
--------
The chance that the tallest of 10 000 men (heights ``N(69, 3)``) is taller
than seven feet:

>>> from pysatl_proba.families import normal
>>> config = MonteCarloConfig(n_replicates=1000, seed=1)
>>> tail_probability_of_maximum(normal(69.0, 3.0), 10_000, 84.0, config)  # doctest: +SKIP
MonteCarloEstimate(estimate=0.013, std_error=0.0036, n_replicates=1000)
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
import warnings
from typing import TYPE_CHECKING, Any

import numpy as np

from pysatl_proba.distributions.sampling import as_values
from pysatl_proba.montecarlo.config import MonteCarloConfig
from pysatl_proba.montecarlo.estimate import MonteCarloEstimate

if TYPE_CHECKING:
    from collections.abc import Callable

    import numpy.typing as npt

    from pysatl_proba.distributions.distribution import Distribution

type Experiment = Callable[[np.random.Generator], Any]
type Statistic = Callable[[npt.NDArray[np.float64]], Any]


def _config_or_default(config: MonteCarloConfig | None) -> MonteCarloConfig:
    return MonteCarloConfig() if config is None else config


def replicate(
    experiment: Experiment,
    config: MonteCarloConfig | None = None,
) -> npt.NDArray[np.float64]:
    """
    Run ``experiment(rng)`` independently ``config.n_replicates`` times.

    Parameters
    ----------
    experiment : Callable[[numpy.random.Generator], float]
        One random trial. It must draw all randomness from the generator it
        receives.
    config : MonteCarloConfig, optional
        Number of replicates and seed; defaults to ``MonteCarloConfig()``.

    Returns
    -------
    numpy.ndarray
        1D float array with one outcome per replicate.
    """
    config = _config_or_default(config)
    rng = config.make_rng()
    return np.fromiter(
        (float(experiment(rng)) for _ in range(config.n_replicates)),
        dtype=np.float64,
        count=config.n_replicates,
    )


def _probability_estimate(hits: npt.NDArray[np.bool_]) -> MonteCarloEstimate:
    n = int(hits.size)
    p = float(np.mean(hits))
    if p in (0.0, 1.0):
        warnings.warn(
            f"Estimated probability is {p:g} after {n} replicates; the standard error is "
            "zero and does not describe the uncertainty. Increase n_replicates.",
            UserWarning,
            stacklevel=3,
        )
    return MonteCarloEstimate(estimate=p, std_error=math.sqrt(p * (1.0 - p) / n), n_replicates=n)


def estimate_probability(
    event: Experiment,
    config: MonteCarloConfig | None = None,
) -> MonteCarloEstimate:
    """
    Frequency of a random event.

    Parameters
    ----------
    event : Callable[[numpy.random.Generator], bool]
        Trial returning whether the event occurred.
    config : MonteCarloConfig, optional
        Number of replicates and seed.

    Returns
    -------
    MonteCarloEstimate
        Proportion of replicates in which the event occurred, with binomial
        standard error ``sqrt(p (1 - p) / n)``.

    Warns
    -----
    UserWarning
        If the event occurred in none or in all of the replicates.
    """
    outcomes = replicate(lambda rng: bool(event(rng)), config)
    return _probability_estimate(outcomes.astype(bool))


def estimate_statistic(
    experiment: Experiment,
    config: MonteCarloConfig | None = None,
) -> MonteCarloEstimate:
    """
    Expected value of a real-valued random outcome.

    Returns
    -------
    MonteCarloEstimate
        Sample mean of the outcomes with standard error ``s / sqrt(n)``;
        the standard error is ``nan`` for a single replicate.
    """
    outcomes = replicate(experiment, config)
    n = int(outcomes.size)
    std_error = float(np.std(outcomes, ddof=1)) / math.sqrt(n) if n > 1 else float("nan")
    return MonteCarloEstimate(estimate=float(np.mean(outcomes)), std_error=std_error, n_replicates=n)


def simulate_statistic_distribution(
    distribution: Distribution,
    sample_size: int,
    statistic: Statistic = np.max,
    config: MonteCarloConfig | None = None,
) -> npt.NDArray[np.float64]:
    """
    Sampling distribution of a statistic by simulation.

    Draws ``config.n_replicates`` independent samples of ``sample_size``
    observations from ``distribution`` and reduces each with ``statistic``.

    Parameters
    ----------
    distribution : Distribution
        Any distribution that can sample (parametric or empirical).
    sample_size : int
        Number of observations per replicate.
    statistic : Callable[[numpy.ndarray], float], default numpy.max
        Reduction applied to each simulated sample.
    config : MonteCarloConfig, optional
        Number of replicates and seed.

    Returns
    -------
    numpy.ndarray
        One statistic value per replicate.

    Raises
    ------
    ValueError
        If ``sample_size`` is smaller than one.
    """
    if sample_size < 1:
        raise ValueError(f"Sample size must be at least 1, got {sample_size}.")

    def experiment(rng: np.random.Generator) -> Any:
        return statistic(as_values(distribution.sample(sample_size, rng=rng)))

    return replicate(experiment, config)


def tail_probability_of_maximum(
    distribution: Distribution,
    sample_size: int,
    threshold: float,
    config: MonteCarloConfig | None = None,
) -> MonteCarloEstimate:
    """
    Estimate ``P(max(X_1, ..., X_n) > threshold)`` for i.i.d. draws.

    Parameters
    ----------
    distribution : Distribution
        Distribution of a single observation.
    sample_size : int
        ``n``, the number of observations whose maximum is taken.
    threshold : float
        Level the maximum must exceed.
    config : MonteCarloConfig, optional
        Number of replicates and seed.

    Returns
    -------
    MonteCarloEstimate

    Warns
    -----
    UserWarning
        If no or every replicate exceeded the threshold.
    """
    maxima = simulate_statistic_distribution(distribution, sample_size, np.max, config)
    return _probability_estimate(maxima > threshold)
