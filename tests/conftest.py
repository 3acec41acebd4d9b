from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Generator
from typing import Any

import matplotlib
import pytest

from pysatl_proba.distributions.registry import reset_distribution_type_register
from pysatl_proba.families.configuration import reset_families_register

matplotlib.use("Agg")

pytest.importorskip("scipy")


@pytest.fixture(autouse=True)
def _fresh_registries() -> Generator[None, Any, None]:
    reset_distribution_type_register()
    reset_families_register()
    yield


@pytest.fixture
def heights() -> list[float]:
    """Reported adult heights in whole inches."""
    return [
        60.0, 62.0, 63.0, 64.0, 64.0, 65.0, 65.0, 66.0, 66.0, 66.0,
        67.0, 67.0, 67.0, 68.0, 68.0, 68.0, 68.0, 69.0, 69.0, 69.0,
        70.0, 70.0, 70.0, 70.0, 71.0, 71.0, 72.0, 72.0, 73.0, 75.0,
    ]  # fmt: skip
