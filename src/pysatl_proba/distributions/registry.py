"""
Characteristic Graph Registry
=============================

A directed graph over characteristic names for a fixed
:class:`~pysatl_proba.types.DistributionType`. Edges are unary
:class:`~pysatl_proba.distributions.computation.ComputationMethod` conversions
(``1 source -> 1 target``).

Invariants
----------
1. There is at least one *definitive* characteristic.
2. The subgraph induced by the definitive characteristics is strongly connected.
3. Every non-definitive characteristic is reachable from a definitive one.
4. No path leads from a non-definitive characteristic back to a definitive one.

Definitive characteristics (``pdf``, ``cdf``, ``ppf``) each determine the
distribution, so any of them can ground the others. Derived characteristics
(``sf``) are reachable from them but never used as a source for them.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import warnings
from collections import deque
from dataclasses import dataclass, field
from functools import lru_cache
from typing import TYPE_CHECKING, Any, ClassVar, Self

from pysatl_proba.distributions.computation import ComputationMethod
from pysatl_proba.distributions.fitters import (
    fit_cdf_to_pdf_1C,
    fit_cdf_to_ppf_1C,
    fit_cdf_to_sf_1C,
    fit_pdf_to_cdf_1C,
    fit_ppf_to_cdf_1C,
)
from pysatl_proba.types import CharacteristicName, UnivariateContinuous

if TYPE_CHECKING:
    from pysatl_proba.types import DistributionType, GenericCharacteristicName

DEFAULT_COMPUTATION_KEY: str = "PySATL_default_computation"


class GraphInvariantError(RuntimeError):
    """Raised when the characteristic graph invariants are violated."""


@dataclass(slots=True)
class CharacteristicGraph:
    """
    Directed characteristic graph for a fixed :class:`DistributionType`.

    Edges are stored as ``adjacency[src][dst][label] = ComputationMethod``;
    :data:`DEFAULT_COMPUTATION_KEY` marks the preferred method of an edge.
    """

    distribution_type: DistributionType
    _adj: dict[
        GenericCharacteristicName,
        dict[GenericCharacteristicName, dict[str, ComputationMethod[Any, Any]]],
    ] = field(default_factory=dict, repr=False)
    _definitive: set[GenericCharacteristicName] = field(default_factory=set, repr=False)

    def _ensure_vertex(self, v: GenericCharacteristicName) -> None:
        self._adj.setdefault(v, {})

    @staticmethod
    def _pick_method(methods: dict[str, ComputationMethod[Any, Any]]) -> ComputationMethod[Any, Any]:
        """Pick a deterministic method for an edge (prefer default key)."""
        if DEFAULT_COMPUTATION_KEY in methods:
            return methods[DEFAULT_COMPUTATION_KEY]
        return methods[min(methods)]

    def _add_edge_unary(self, method: ComputationMethod[Any, Any], label: str) -> None:
        if len(method.sources) != 1:
            raise GraphInvariantError(
                "Only unary methods are supported for edges (1 source -> 1 target)."
            )
        src, dst = method.sources[0], method.target
        self._ensure_vertex(src)
        self._ensure_vertex(dst)
        labels = self._adj[src].setdefault(dst, {})
        if label in labels:
            warnings.warn(
                f"Edge {src} -> {dst} with label '{label}' is already registered and "
                "will be replaced.",
                UserWarning,
                stacklevel=3,
            )
        labels[label] = method

    def add_bidirectional_definitive(
        self,
        a_to_b: ComputationMethod[Any, Any],
        b_to_a: ComputationMethod[Any, Any],
        label: str = DEFAULT_COMPUTATION_KEY,
    ) -> None:
        """
        Link two definitive characteristics with a pair of inverse conversions.

        Raises
        ------
        GraphInvariantError
            If the methods do not link the same pair in opposite directions,
            or if the invariants break.
        """
        a, b = a_to_b.sources[0], a_to_b.target
        if b_to_a.sources[0] != b or b_to_a.target != a:
            raise GraphInvariantError(
                "Inverse methods must link the same pair of definitive nodes "
                "in opposite directions."
            )

        definitive_before = set(self._definitive)
        vertices_before = set(self._adj)
        previous = {
            (src, dst): self._adj.get(src, {}).get(dst, {}).get(label)
            for src, dst in ((a, b), (b, a))
        }

        self._definitive.update((a, b))
        self._add_edge_unary(a_to_b, label)
        self._add_edge_unary(b_to_a, label)
        try:
            self._validate_invariants()
        except GraphInvariantError:
            self._definitive = definitive_before
            for (src, dst), method in previous.items():
                labels = self._adj[src][dst]
                if method is not None:
                    labels[label] = method
                    continue
                del labels[label]
                if not labels:
                    del self._adj[src][dst]
            for v in set(self._adj) - vertices_before:
                if not self._adj[v]:
                    del self._adj[v]
            raise

    def add_conversion(
        self, method: ComputationMethod[Any, Any], *, label: str = DEFAULT_COMPUTATION_KEY
    ) -> None:
        """
        Add an arbitrary unary conversion ``source -> target``.

        A conversion that creates a path from a derived characteristic back
        to a definitive one is rejected by the invariants.
        """
        self._add_edge_unary(method, label)
        try:
            self._validate_invariants()
        except GraphInvariantError:
            labels = self._adj[method.sources[0]][method.target]
            del labels[label]
            if not labels:
                del self._adj[method.sources[0]][method.target]
            raise

    def is_definitive(self, name: GenericCharacteristicName) -> bool:
        return name in self._definitive

    def definitive_nodes(self) -> frozenset[GenericCharacteristicName]:
        return frozenset(self._definitive)

    def all_nodes(self) -> frozenset[GenericCharacteristicName]:
        verts = set(self._adj)
        for nbrs in self._adj.values():
            verts.update(nbrs)
        return frozenset(verts | self._definitive)

    def indefinitive_nodes(self) -> frozenset[GenericCharacteristicName]:
        return self.all_nodes() - self._definitive

    def find_path(
        self,
        src: GenericCharacteristicName,
        dst: GenericCharacteristicName,
    ) -> list[ComputationMethod[Any, Any]] | None:
        """
        Find the shortest conversion chain ``src -> ... -> dst`` (BFS).

        Returns
        -------
        list[ComputationMethod] or None
            Conversions in application order, ``[]`` when ``src == dst`` and
            ``None`` when ``dst`` is unreachable.
        """
        if src == dst:
            return []

        parent: dict[
            GenericCharacteristicName, tuple[GenericCharacteristicName, ComputationMethod[Any, Any]]
        ] = {}
        visited: set[GenericCharacteristicName] = {src}
        q: deque[GenericCharacteristicName] = deque([src])

        while q:
            v = q.popleft()
            for w, methods in self._adj.get(v, {}).items():
                if w in visited or not methods:
                    continue
                visited.add(w)
                parent[w] = (v, self._pick_method(methods))
                if w == dst:
                    path: list[ComputationMethod[Any, Any]] = []
                    cur = dst
                    while cur != src:
                        cur, m = parent[cur][0], parent[cur][1]
                        path.append(m)
                    path.reverse()
                    return path
                q.append(w)
        return None

    def reachable_from(
        self,
        start: GenericCharacteristicName,
        allowed: set[GenericCharacteristicName] | frozenset[GenericCharacteristicName] | None = None,
        *,
        reverse: bool = False,
    ) -> set[GenericCharacteristicName]:
        """Nodes reachable from ``start``, optionally restricted to ``allowed``."""
        adjacency = self._reverse_adj() if reverse else self._adj
        seen: set[GenericCharacteristicName] = {start}
        q: deque[GenericCharacteristicName] = deque([start])
        while q:
            v = q.popleft()
            for w in adjacency.get(v, {}):
                if allowed is not None and w not in allowed:
                    continue
                if w not in seen:
                    seen.add(w)
                    q.append(w)
        return seen

    def _reverse_adj(self) -> dict[GenericCharacteristicName, dict[GenericCharacteristicName, Any]]:
        rev: dict[GenericCharacteristicName, dict[GenericCharacteristicName, Any]] = {}
        for u, nbrs in self._adj.items():
            rev.setdefault(u, {})
            for v, methods in nbrs.items():
                if methods:
                    rev.setdefault(v, {})[u] = True
        return rev

    def _validate_invariants(self) -> None:
        if not self._definitive:
            raise GraphInvariantError("There must be at least one definitive characteristic.")

        start = next(iter(self._definitive))
        forward = self.reachable_from(start, allowed=self._definitive)
        backward = self.reachable_from(start, allowed=self._definitive, reverse=True)
        if forward != self._definitive or backward != self._definitive:
            raise GraphInvariantError("Definitive subgraph must be strongly connected.")

        reached: set[GenericCharacteristicName] = set()
        for d in self._definitive:
            reached |= self.reachable_from(d)
        if not self.indefinitive_nodes() <= reached:
            raise GraphInvariantError(
                "Every indefinitive node must be reachable from some definitive node."
            )

        for i in self.indefinitive_nodes():
            if self.reachable_from(i) & self._definitive:
                raise GraphInvariantError(
                    "No path from any indefinitive node back to a definitive node is allowed."
                )


class DistributionTypeRegister:
    """Singleton registry mapping a :class:`DistributionType` to its graph."""

    _instance: ClassVar[Self | None] = None
    _graphs: dict[DistributionType, CharacteristicGraph]

    def __new__(cls) -> Self:
        if cls._instance is None:
            self = super().__new__(cls)
            self._graphs = {}
            cls._instance = self
        return cls._instance

    def get(self, distribution_type: DistributionType) -> CharacteristicGraph:
        """Get (or create) the characteristic graph for a distribution type."""
        graph = self._graphs.get(distribution_type)
        if graph is None:
            graph = CharacteristicGraph(distribution_type=distribution_type)
            self._graphs[distribution_type] = graph
        return graph

    def __contains__(self, distribution_type: object) -> bool:
        return distribution_type in self._graphs

    __call__ = get

    @classmethod
    def _reset(cls) -> None:
        cls._instance = None


def _configure(reg: DistributionTypeRegister) -> None:
    """
    Default configuration for the univariate continuous case.

    ``pdf <-> cdf <-> ppf`` are definitive; ``sf`` is derived from ``cdf``.
    Univariate discrete distributions (empirical samples) provide their
    characteristics analytically and get no conversions.
    """
    PDF, CDF, PPF, SF = (
        CharacteristicName.PDF,
        CharacteristicName.CDF,
        CharacteristicName.PPF,
        CharacteristicName.SF,
    )

    graph = reg.get(UnivariateContinuous)

    graph.add_bidirectional_definitive(
        ComputationMethod[float, float](target=CDF, sources=[PDF], fitter=fit_pdf_to_cdf_1C),
        ComputationMethod[float, float](target=PDF, sources=[CDF], fitter=fit_cdf_to_pdf_1C),
    )
    graph.add_bidirectional_definitive(
        ComputationMethod[float, float](target=PPF, sources=[CDF], fitter=fit_cdf_to_ppf_1C),
        ComputationMethod[float, float](target=CDF, sources=[PPF], fitter=fit_ppf_to_cdf_1C),
    )
    graph.add_conversion(
        ComputationMethod[float, float](target=SF, sources=[CDF], fitter=fit_cdf_to_sf_1C)
    )


@lru_cache(maxsize=1)
def distribution_type_register() -> DistributionTypeRegister:
    """Return the cached :class:`DistributionTypeRegister` configured with defaults."""
    reg = DistributionTypeRegister()
    _configure(reg)
    return reg


def reset_distribution_type_register() -> None:
    """Reset the cached distribution type register (used by tests)."""
    distribution_type_register.cache_clear()
    DistributionTypeRegister._reset()
