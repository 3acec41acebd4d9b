from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import re

import pysatl_proba

_PEP440 = re.compile(r"^\d+(\.\d+)*((a|b|rc)\d+)?(\.post\d+)?(\.dev\d+)?$")


def test_version_is_pep440() -> None:
    assert _PEP440.match(pysatl_proba.__version__)


def test_public_api_reexports_subpackages() -> None:
    for name in ("EmpiricalDistribution", "MonteCarloConfig", "normal", "histogram", "probability_between"):
        assert name in pysatl_proba.__all__
        assert hasattr(pysatl_proba, name)
