from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import pytest

from pysatl_proba.distributions.registry import (
    DEFAULT_COMPUTATION_KEY,
    CharacteristicGraph,
    DistributionTypeRegister,
    GraphInvariantError,
    distribution_type_register,
    reset_distribution_type_register,
)
from pysatl_proba.types import UnivariateContinuous, UnivariateDiscrete
from tests.unit.distributions.test_basic import DistributionTestBase


class TestCharacteristicGraph(DistributionTestBase):
    def make_graph(self) -> CharacteristicGraph:
        graph = CharacteristicGraph(distribution_type=UnivariateContinuous)
        graph.add_bidirectional_definitive(
            self.make_fictitious_computation_method(target="b", sources=["a"]),
            self.make_fictitious_computation_method(target="a", sources=["b"]),
        )
        return graph

    def test_bidirectional_definitive_pair(self) -> None:
        graph = self.make_graph()

        assert graph.definitive_nodes() == {"a", "b"}
        assert graph.is_definitive("a")
        path = graph.find_path("a", "b")
        assert path is not None and [m.target for m in path] == ["b"]
        assert graph.find_path("a", "a") == []

    def test_mismatched_inverse_pair_is_rejected(self) -> None:
        graph = CharacteristicGraph(distribution_type=UnivariateContinuous)

        with pytest.raises(GraphInvariantError, match="opposite directions"):
            graph.add_bidirectional_definitive(
                self.make_fictitious_computation_method(target="b", sources=["a"]),
                self.make_fictitious_computation_method(target="a", sources=["c"]),
            )

    def test_non_unary_edge_is_rejected(self) -> None:
        graph = self.make_graph()

        with pytest.raises(GraphInvariantError, match="unary"):
            graph.add_conversion(
                self.make_fictitious_computation_method(target="c", sources=["a", "b"])
            )

    def test_conversion_back_to_definitive_is_rolled_back(self) -> None:
        graph = self.make_graph()
        graph.add_conversion(self.make_fictitious_computation_method(target="c", sources=["a"]))

        with pytest.raises(GraphInvariantError, match="indefinitive"):
            graph.add_conversion(
                self.make_fictitious_computation_method(target="b", sources=["c"])
            )

        assert graph.find_path("c", "b") is None
        assert graph.indefinitive_nodes() == {"c"}

    def test_disconnected_definitive_pair_is_rolled_back(self) -> None:
        graph = self.make_graph()

        with pytest.raises(GraphInvariantError, match="strongly connected"):
            graph.add_bidirectional_definitive(
                self.make_fictitious_computation_method(target="d", sources=["c"]),
                self.make_fictitious_computation_method(target="c", sources=["d"]),
            )

        assert graph.definitive_nodes() == {"a", "b"}
        assert graph.all_nodes() == {"a", "b"}
        assert graph.find_path("c", "d") is None

        graph.add_conversion(self.make_fictitious_computation_method(target="e", sources=["b"]))
        assert graph.indefinitive_nodes() == {"e"}

    def test_duplicate_label_warns(self) -> None:
        graph = self.make_graph()
        graph.add_conversion(self.make_fictitious_computation_method(target="c", sources=["a"]))

        with pytest.warns(UserWarning, match="already registered"):
            graph.add_conversion(
                self.make_fictitious_computation_method(target="c", sources=["a"]),
                label=DEFAULT_COMPUTATION_KEY,
            )

    def test_default_label_is_preferred(self) -> None:
        graph = self.make_graph()
        alternative = self.make_fictitious_computation_method(target="c", sources=["a"])
        default = self.make_fictitious_computation_method(target="c", sources=["a"])

        graph.add_conversion(alternative, label="alternative")
        graph.add_conversion(default)

        path = graph.find_path("a", "c")
        assert path is not None and path[0] is default


class TestDistributionTypeRegister:
    def test_register_is_cached_and_configured(self) -> None:
        reg = distribution_type_register()

        assert reg is distribution_type_register()
        assert UnivariateContinuous in reg
        assert isinstance(reg, DistributionTypeRegister)

    def test_unknown_type_gets_empty_graph(self) -> None:
        reg = distribution_type_register()

        graph = reg.get(UnivariateDiscrete)

        assert graph.all_nodes() == frozenset()
        assert graph.find_path("pmf", "cdf") is None

    def test_reset_creates_new_instance(self) -> None:
        before = distribution_type_register()
        reset_distribution_type_register()

        assert distribution_type_register() is not before
