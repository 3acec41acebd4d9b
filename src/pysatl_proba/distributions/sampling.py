"""
Sampling Interfaces
===================

This module defines the sample container used for raw measurements and
simulated draws, together with the descriptive statistics (mean, standard
deviation) that parametrize theoretical approximations.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from typing import Any

    import numpy.typing as npt


class Sample(Protocol):
    """
    Protocol for sample containers.

    Attributes
    ----------
    array : numpy.ndarray
        Array representation of the samples.
    shape : tuple[int, ...]
        Shape of the sample array.
    """

    def __len__(self) -> int: ...
    @property
    def array(self) -> npt.NDArray[np.floating[Any]]: ...
    @property
    def shape(self) -> tuple[int, ...]: ...


class ArraySample:
    """
    Array-backed sample container.

    Samples are stored as a 2D floating-point array of shape
    ``(n_samples, n_dimensions)``. A 1D array is treated as a univariate
    sample and reshaped to ``(n, 1)``.

    Parameters
    ----------
    data : numpy.ndarray
        1D array of shape ``(n,)`` or 2D array of shape ``(n, d)``.

    Raises
    ------
    ValueError
        If data is neither 1D nor 2D.
    """

    dimension: int
    data: npt.NDArray[np.floating[Any]]

    def __init__(self, data: npt.NDArray[Any]) -> None:
        arr = np.asarray(data, dtype=np.float64)
        if arr.ndim == 1:
            arr = arr.reshape(-1, 1)
        if arr.ndim != 2:
            raise ValueError("ArraySample expects 1D array of shape (n,) or 2D array (n, d).")
        self.data = arr
        self.dimension = int(arr.shape[1])

    @classmethod
    def from_values(cls, values: Iterable[float]) -> ArraySample:
        """Build a univariate sample from any iterable of real numbers."""
        return cls(np.fromiter((float(v) for v in values), dtype=np.float64))

    def __len__(self) -> int:
        return int(self.data.shape[0])

    def __iter__(self) -> Iterator[npt.NDArray[np.floating[Any]]]:
        yield from self.data

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n={len(self)}, dimension={self.dimension})"

    @property
    def array(self) -> npt.NDArray[np.floating[Any]]:
        """Return the backing array."""
        return self.data

    @property
    def values(self) -> npt.NDArray[np.float64]:
        """
        Flattened univariate observations.

        Raises
        ------
        ValueError
            If the sample is multivariate.
        """
        if self.dimension != 1:
            raise ValueError(f"Expected a univariate sample, got dimension {self.dimension}.")
        return self.data[:, 0]

    @property
    def shape(self) -> tuple[int, ...]:
        """Return the shape of the sample array (n, d)."""
        n, d = self.data.shape
        return int(n), int(d)


def as_values(sample: Sample | npt.ArrayLike) -> npt.NDArray[np.float64]:
    """
    Coerce a sample or array-like into a 1D float array.

    Parameters
    ----------
    sample : Sample or array_like
        Univariate observations.

    Returns
    -------
    numpy.ndarray
        1D float array (a view when possible).
    """
    if isinstance(sample, ArraySample):
        return sample.values
    arr = np.asarray(getattr(sample, "array", sample), dtype=np.float64)
    if arr.ndim == 2 and arr.shape[1] == 1:
        return arr[:, 0]
    if arr.ndim > 1:
        raise ValueError(f"Expected univariate observations, got array of shape {arr.shape}.")
    return arr.reshape(-1)


@dataclass(frozen=True, slots=True)
class SampleSummary:
    """
    Descriptive statistics of a univariate sample.

    Parameters
    ----------
    size : int
        Number of observations.
    mean : float
        Sample mean.
    std : float
        Sample standard deviation.
    minimum, maximum : float
        Smallest and largest observation.
    """

    size: int
    mean: float
    std: float
    minimum: float
    maximum: float


def summarize(sample: Sample | npt.ArrayLike, ddof: int = 1) -> SampleSummary:
    """
    Compute the sample mean and standard deviation.

    Parameters
    ----------
    sample : Sample or array_like
        Univariate observations.
    ddof : int, default 1
        Delta degrees of freedom of the standard deviation; ``1`` gives the
        usual unbiased-variance estimate.

    Returns
    -------
    SampleSummary

    Raises
    ------
    ValueError
        If the sample is empty or too small for the requested ``ddof``.
    """
    values = as_values(sample)
    n = int(values.size)
    if n == 0:
        raise ValueError("Cannot summarize an empty sample.")
    if n <= ddof:
        raise ValueError(f"At least {ddof + 1} observations are required (got {n}).")

    return SampleSummary(
        size=n,
        mean=float(np.mean(values)),
        std=float(np.std(values, ddof=ddof)),
        minimum=float(np.min(values)),
        maximum=float(np.max(values)),
    )


def standardize(sample: Sample | npt.ArrayLike, ddof: int = 1) -> npt.NDArray[np.float64]:
    """
    Convert observations to standard units (z-scores).

    Returns
    -------
    numpy.ndarray
        ``(x - mean) / std`` for every observation.

    Raises
    ------
    ValueError
        If the sample is empty or has zero spread.
    """
    summary = summarize(sample, ddof=ddof)
    if summary.std == 0.0:
        raise ValueError("Cannot standardize a sample with zero standard deviation.")
    return (as_values(sample) - summary.mean) / summary.std
