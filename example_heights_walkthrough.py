#!/usr/bin/env python3
"""
Walkthrough: reported heights and their normal approximation.

The example shows how to:
1. Build the empirical CDF of rounded measurements
2. Fit the normal approximation and compare both CDFs
3. See why point probabilities do not carry over to rounded data
4. Estimate a tail probability of the maximum by Monte Carlo
5. Plot a histogram with the fitted density
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import numpy as np

from pysatl_proba import (
    EmpiricalDistribution,
    MonteCarloConfig,
    check_discretization,
    compare_cdfs,
    discretization_table,
    max_cdf_discrepancy,
    probability_between,
    probability_greater,
    tail_probability_of_maximum,
)
from pysatl_proba.families import configure_families_register
from pysatl_proba.histograms import plot_histogram
from pysatl_proba.types import FamilyName


def simulated_heights(n: int = 1000, seed: int = 2025) -> np.ndarray:
    """Heights of adult men in inches, reported to the nearest inch."""
    rng = np.random.default_rng(seed)
    return np.round(rng.normal(69.3, 3.6, size=n))


def main() -> None:
    heights = simulated_heights()

    print("=" * 70)
    print("EMPIRICAL VS NORMAL CDF")
    print("=" * 70)
    normal_family = configure_families_register().get(FamilyName.NORMAL)
    approx = normal_family.fit(heights)
    print(f"Normal approximation: {approx}")
    for row in compare_cdfs(heights, approx, [64.0, 67.0, 70.0, 73.0]):
        print(
            f"  P(X <= {row.threshold:g}): empirical {row.empirical:.3f}, "
            f"normal {row.theoretical:.3f}, difference {row.difference:+.3f}"
        )
    print(f"  largest gap between the CDFs: {max_cdf_discrepancy(heights, approx):.3f}")

    print()
    print("=" * 70)
    print("ROUNDING")
    print("=" * 70)
    share = check_discretization(heights)
    print(f"{share:.0%} of the reports are whole inches")
    for row in discretization_table(heights, approx, [68.0, 70.0, 72.0]):
        print(
            f"  x = {row.point:g}: observed {row.empirical:.3f}, "
            f"P(x - 1/2 < X <= x + 1/2) = {row.interval:.3f}, narrow interval {row.fine:.4f}"
        )
    print(f"  P(66 < X <= 72) = {probability_between(approx, 66.0, 72.0):.3f}")
    print(f"  empirical P(X > 75) = {probability_greater(EmpiricalDistribution(heights), 75.0):.3f}")

    print()
    print("=" * 70)
    print("MONTE CARLO")
    print("=" * 70)
    est = tail_probability_of_maximum(approx, 1000, 84.0, MonteCarloConfig(n_replicates=2000, seed=1))
    lower, upper = est.confidence_interval()
    print(
        f"P(tallest of 1000 men is over seven feet) ~ {est.estimate:.3f} "
        f"(95% CI {lower:.3f}..{upper:.3f})"
    )

    ax = plot_histogram(heights, bins=np.arange(55.5, 85.5), overlay=approx)
    ax.set_xlabel("height, inches")
    ax.figure.savefig("heights.png")
    print("Histogram saved to heights.png")


if __name__ == "__main__":
    main()
