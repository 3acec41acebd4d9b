"""
Characteristics API
===================

Callable descriptors for a distribution's characteristics. ``cdf(distr, 70.0)``
reads like the textbook ``F(70)`` and works the same for a normal
approximation and for an empirical distribution of measurements.

Notes
-----
- The characteristic name controls *what* to compute (e.g. ``"pdf"``).
- ``**options`` control *how* to compute it (fitter tolerances and flags).
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pysatl_proba.types import CharacteristicName, GenericCharacteristicName

if TYPE_CHECKING:
    from pysatl_proba.distributions.distribution import Distribution


@dataclass(slots=True, frozen=True)
class GenericCharacteristic:
    """
    Callable characteristic descriptor.

    Parameters
    ----------
    name : str
        Characteristic identifier (e.g., ``"pdf"``, ``"cdf"`` or ``"ppf"``).

    Examples
    --------
    >>> from pysatl_proba.distributions.characteristics import cdf
    >>> # cdf(normal, 70.0) -> P(X <= 70)
    """

    name: GenericCharacteristicName

    def __call__(self, distribution: "Distribution", data: Any, **options: Any) -> Any:
        """
        Evaluate the characteristic on a scalar or an array of points.

        Returns
        -------
        float or numpy.ndarray
            Characteristic value(s) at ``data``.
        """
        return distribution.calculate_characteristic(self.name, data, **options)


pdf = GenericCharacteristic(CharacteristicName.PDF)
cdf = GenericCharacteristic(CharacteristicName.CDF)
ppf = GenericCharacteristic(CharacteristicName.PPF)
pmf = GenericCharacteristic(CharacteristicName.PMF)
sf = GenericCharacteristic(CharacteristicName.SF)
