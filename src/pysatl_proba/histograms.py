"""
Tabulation and Histograms
=========================

Frequency tables of observed values, binned histograms and their plots,
optionally overlaid with a theoretical density or CDF.

Plotting uses ``matplotlib``; ``pyplot`` is imported only when a figure has
to be created.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np

from pysatl_proba.distributions.characteristics import cdf, pdf
from pysatl_proba.distributions.sampling import as_values

if TYPE_CHECKING:
    import numpy.typing as npt
    from matplotlib.axes import Axes

    from pysatl_proba.distributions.distribution import Distribution
    from pysatl_proba.distributions.sampling import Sample

__all__ = [
    "Histogram",
    "histogram",
    "tabulate",
    "plot_histogram",
    "plot_cdf",
]

type Bins = int | str | npt.ArrayLike

_OVERLAY_POINTS = 200


@dataclass(frozen=True, slots=True)
class Histogram:
    """
    Binned counts of a sample.

    Parameters
    ----------
    counts : numpy.ndarray
        Number of observations per bin, or density values when ``density``
        is set.
    edges : numpy.ndarray
        Bin edges, one more than ``counts``.
    density : bool
        Whether ``counts`` are normalized so that the histogram integrates
        to one.
    """

    counts: npt.NDArray[np.float64]
    edges: npt.NDArray[np.float64]
    density: bool

    @property
    def centers(self) -> npt.NDArray[np.float64]:
        return (self.edges[:-1] + self.edges[1:]) / 2

    @property
    def widths(self) -> npt.NDArray[np.float64]:
        return np.diff(self.edges)

    @property
    def proportions(self) -> npt.NDArray[np.float64]:
        """Share of the observations falling in each bin."""
        if self.density:
            return self.counts * self.widths
        total = float(np.sum(self.counts))
        return self.counts / total if total > 0 else np.zeros_like(self.counts)


def histogram(
    sample: Sample | npt.ArrayLike,
    bins: Bins = "auto",
    density: bool = False,
    range: tuple[float, float] | None = None,
) -> Histogram:
    """
    Bin a univariate sample with :func:`numpy.histogram`.

    Parameters
    ----------
    sample : Sample or array_like
        Observations.
    bins : int, str or array_like, default "auto"
        Number of bins, a binning rule name, or explicit edges.
    density : bool, default False
        Normalize to a probability density.
    range : (float, float), optional
        Lower and upper range of the bins.

    Raises
    ------
    ValueError
        If the sample is empty.
    """
    values = as_values(sample)
    if values.size == 0:
        raise ValueError("Cannot build a histogram of an empty sample.")
    counts, edges = np.histogram(values, bins=bins, density=density, range=range)
    return Histogram(
        counts=np.asarray(counts, dtype=np.float64),
        edges=np.asarray(edges, dtype=np.float64),
        density=density,
    )


def tabulate(values: Sample | npt.ArrayLike) -> dict[float, int]:
    """
    Frequency table of distinct values.

    Returns
    -------
    dict[float, int]
        ``value -> count`` in increasing order of value. Rounded
        measurements show up as a few heavily populated values.

    Examples
    --------
    >>> tabulate([70.0, 68.0, 70.0])
    {68.0: 1, 70.0: 2}
    """
    distinct, counts = np.unique(as_values(values), return_counts=True)
    return {float(v): int(c) for v, c in zip(distinct, counts, strict=True)}


def _axes(ax: Axes | None) -> Axes:
    if ax is not None:
        return ax
    import matplotlib.pyplot as plt

    _, new_ax = plt.subplots()
    return new_ax


def _overlay_grid(values: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    lo, hi = float(np.min(values)), float(np.max(values))
    pad = 0.05 * (hi - lo) if hi > lo else 1.0
    return np.linspace(lo - pad, hi + pad, _OVERLAY_POINTS)


def plot_histogram(
    sample: Sample | npt.ArrayLike,
    ax: Axes | None = None,
    bins: Bins = "auto",
    density: bool = True,
    overlay: Distribution | None = None,
    **hist_kwargs: Any,
) -> Axes:
    """
    Draw a histogram, optionally with a theoretical density on top.

    Parameters
    ----------
    sample : Sample or array_like
        Observations.
    ax : matplotlib.axes.Axes, optional
        Target axes; a new figure is created when omitted.
    bins : int, str or array_like, default "auto"
        Passed to :func:`histogram`.
    density : bool, default True
        Draw densities so that the overlay is on the same scale.
    overlay : Distribution, optional
        Continuous distribution whose ``pdf`` is plotted over the bars.
    **hist_kwargs
        Extra keyword arguments for ``Axes.bar``.

    Returns
    -------
    matplotlib.axes.Axes
    """
    if overlay is not None and not density:
        raise ValueError("A density overlay requires density=True.")

    values = as_values(sample)
    hist = histogram(values, bins=bins, density=density)
    ax = _axes(ax)

    hist_kwargs.setdefault("alpha", 0.6)
    hist_kwargs.setdefault("edgecolor", "white")
    ax.bar(hist.centers, hist.counts, width=hist.widths, align="center", **hist_kwargs)

    if overlay is not None:
        grid = _overlay_grid(values)
        ax.plot(grid, np.asarray(pdf(overlay, grid)), color="red", lw=2, label="density")
        ax.legend()

    ax.set_ylabel("density" if density else "count")
    return ax


def plot_cdf(
    sample: Sample | npt.ArrayLike,
    ax: Axes | None = None,
    overlay: Distribution | None = None,
) -> Axes:
    """
    Draw the empirical CDF as a step function.

    Parameters
    ----------
    sample : Sample or array_like
        Observations.
    ax : matplotlib.axes.Axes, optional
        Target axes; a new figure is created when omitted.
    overlay : Distribution, optional
        Distribution whose theoretical ``cdf`` is drawn for comparison.

    Returns
    -------
    matplotlib.axes.Axes

    Raises
    ------
    ValueError
        If the sample is empty.
    """
    values = np.sort(as_values(sample))
    if values.size == 0:
        raise ValueError("Cannot plot the CDF of an empty sample.")
    ax = _axes(ax)

    heights = np.arange(1, values.size + 1, dtype=np.float64) / values.size
    ax.step(values, heights, where="post", label="empirical")

    if overlay is not None:
        grid = _overlay_grid(values)
        ax.plot(grid, np.asarray(cdf(overlay, grid)), color="red", lw=2, label="theoretical")

    ax.set_ylim(0.0, 1.05)
    ax.set_ylabel("P(X <= a)")
    ax.legend()
    return ax
