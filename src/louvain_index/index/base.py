# src/louvain_index/index/base.py - v1
"""Abstract base class for Louvain neighborhood indices.

An index snapshots a NetworkX graph into flat numpy arrays:

    neighborhood[k], weights[k]    adjacency entries, grouped per node
    starts[i] .. starts[i + 1]     the block of node i
    belongings[i]                  community of node i
    loops[i]                       self-loop weight carried by node i

Community aggregates (total / internal weights, optional counts) are indexed
by community id. Node ids are stable within a level; zoom_out() collapses
every community into a single node of the next level and renumbers densely.

Note that the structure is only consistent while the number of communities
never increases, which holds for Louvain's greedy moves.

References:
    Newman, "Modularity and community structure in networks", PNAS 2006.
    Blondel et al., "Fast unfolding of communities in large networks", 2008.
    Dugue & Perez, "Directed Louvain: maximizing modularity in directed
    networks", 2015.
"""

from __future__ import annotations

import logging
import math
import numbers
from abc import ABC, abstractmethod
from typing import Any, Hashable, Mapping

import networkx as nx
import numpy as np

from louvain_index.index.history import History, create_history
from louvain_index.index.models import IndexOptions, IndexSnapshot

logger = logging.getLogger(__name__)


class LouvainIndexError(Exception):
    """Base error for Louvain index operations."""


class IndexBoundsError(LouvainIndexError, IndexError):
    """Raised when a node, community or level index is out of range."""


class DegenerateIndexError(LouvainIndexError):
    """Raised when modularity is evaluated on an index with no edge weight."""


def resolve_weight(data: Mapping[str, Any], weighted: bool, attribute: str) -> float | None:
    """Return the edge weight, or None when weighted mode has to fall back to 1."""
    if not weighted:
        return 1.0
    weight = data.get(attribute)
    if (
        isinstance(weight, bool)
        or not isinstance(weight, numbers.Real)
        or math.isnan(weight)
    ):
        return None
    return float(weight)


class BaseLouvainIndex(ABC):
    """Shared state and export logic of both index variants.

    Attributes:
        M: Total edge weight, fixed at build time.
        C: Number of nodes at the current level.
        E: Number of stored adjacency entries at the current level.
        level: Number of zoom_out() calls performed so far.
    """

    kind: str = "base"

    def __init__(self, graph: nx.Graph, options: IndexOptions | None = None) -> None:
        self.options = options or IndexOptions()
        self.graph = graph
        self.nodes: list[Hashable] = list(graph.nodes)
        self.keep_counts = self.options.keep_counts
        self.keep_dendrogram = self.options.keep_dendrogram

        order = len(self.nodes)
        self.C = order
        self.M = 0.0
        self.E = 0
        self.level = 0

        self.neighborhood = np.zeros(0, dtype=np.int64)
        self.weights = np.zeros(0, dtype=np.float64)
        self.starts = np.zeros(order + 1, dtype=np.int64)
        self.belongings = np.arange(order, dtype=np.int64)
        self.loops = np.zeros(order, dtype=np.float64)
        self.internal_weights = np.zeros(order, dtype=np.float64)
        # Member counts: per community, and per node (fixed within a level)
        self.counts: np.ndarray | None = None
        self.node_counts: np.ndarray | None = None
        if self.keep_counts:
            self.counts = np.ones(order, dtype=np.int64)
            self.node_counts = np.ones(order, dtype=np.int64)
        self.history: History = create_history(order, self.keep_dendrogram)

        self._fallback_weights = 0
        self._build({node: i for i, node in enumerate(self.nodes)})

        if self._fallback_weights:
            logger.debug(
                "%d edges had a missing or non-numeric %r attribute, using 1",
                self._fallback_weights,
                self.options.weight_attribute,
            )
        logger.debug(
            "Built %s index: order=%d, M=%g, E=%d",
            self.kind, order, self.M, self.E,
        )

    # --- Variant-specific operations ---

    @abstractmethod
    def _build(self, ids: dict[Hashable, int]) -> None:
        """Populate the flat arrays from self.graph."""

    @abstractmethod
    def expensive_move(self, index: int, target_community: int) -> None:
        """Recompute the node's degree figures from its block, then move it."""

    @abstractmethod
    def zoom_out(self) -> None:
        """Collapse every community into a single node of the next level."""

    @abstractmethod
    def modularity(self) -> float:
        """Newman modularity of the current partition."""

    @abstractmethod
    def _snapshot_fields(self) -> dict[str, Any]:
        """Variant-specific fields of the debug snapshot."""

    # --- Shared helpers ---

    def _weight(self, data: Mapping[str, Any]) -> float:
        weight = resolve_weight(data, self.options.weighted, self.options.weight_attribute)
        if weight is None:
            self._fallback_weights += 1
            return 1.0
        return weight

    def _check_node(self, index: int) -> int:
        if not 0 <= index < self.C:
            raise IndexBoundsError(
                f"Node index {index} out of range [0, {self.C}) at level {self.level}"
            )
        return int(index)

    def _check_community(self, community: int) -> int:
        if not 0 <= community < self.C:
            raise IndexBoundsError(
                f"Community {community} out of range [0, {self.C}) at level {self.level}"
            )
        return int(community)

    def _check_evaluable(self) -> None:
        if self.M == 0:
            raise DegenerateIndexError(
                "Index has no edge weight (M == 0); modularity is undefined"
            )

    def _move_counts(self, index: int, current: int, target: int) -> None:
        if self.counts is None or self.node_counts is None:
            return
        count = self.node_counts[index]
        self.counts[current] -= count
        self.counts[target] += count

    def _renumber(self) -> tuple[np.ndarray, np.ndarray]:
        """Dense community ids in order of first encounter over nodes 0..C-1.

        Returns:
            (labels, belongings): labels[new] is the old community id,
            belongings[i] the new community of node i.
        """
        uniques, first_seen, inverse = np.unique(
            self.belongings[: self.C], return_index=True, return_inverse=True
        )
        order = np.argsort(first_seen, kind="stable")
        rank = np.empty(len(uniques), dtype=np.int64)
        rank[order] = np.arange(len(uniques), dtype=np.int64)
        return uniques[order], rank[inverse.reshape(-1)]

    def _finish_zoom_out(self, labels: np.ndarray, belongings: np.ndarray) -> None:
        """Relabel community aggregates and advance the level."""
        C = len(labels)
        self.history.record(belongings)
        self.internal_weights = self.internal_weights[labels]
        self.loops = self.internal_weights.copy()
        if self.counts is not None:
            self.counts = self.counts[labels]
            self.node_counts = self.counts.copy()
        self.belongings = np.arange(C, dtype=np.int64)
        self.C = C
        self.level += 1
        logger.debug(
            "Zoomed out to level %d: C=%d, E=%d", self.level, self.C, self.E
        )

    def _label(self, index: int) -> Hashable:
        return self.nodes[index] if self.level == 0 else index

    def _project(self, lower: np.ndarray, upper: np.ndarray) -> dict[Hashable, list[Hashable]]:
        projection: dict[Hashable, list[Hashable]] = {}
        for i in range(self.C):
            block = self.neighborhood[lower[i]:upper[i]].tolist()
            projection[self._label(i)] = [self._label(j) for j in block]
        return projection

    # --- Public API ---

    def bounds(self, index: int) -> tuple[int, int]:
        """[start, end) range of the node's block in the flat arrays."""
        index = self._check_node(index)
        return int(self.starts[index]), int(self.starts[index + 1])

    def project(self) -> dict[Hashable, list[Hashable]]:
        """Neighbor lists keyed by node key (level 0) or node id (later levels)."""
        return self._project(self.starts[:-1], self.starts[1:])

    def mapping(self, level: int | None = None) -> np.ndarray:
        """Original-node to community-id array at the given level."""
        if level is None:
            level = self.level
        if not 0 <= level <= self.level:
            raise IndexBoundsError(f"Level {level} out of range [0, {self.level}]")
        return self.history.mapping_at(level)

    def collect(self, level: int | None = None) -> dict[Hashable, int]:
        """Map every original node key to its community id at the given level."""
        mapping = self.mapping(level)
        return {node: int(c) for node, c in zip(self.nodes, mapping.tolist())}

    def assign(self, attribute: str, level: int | None = None) -> None:
        """Write collect(level) back onto the graph's node attributes."""
        for node, community in self.collect(level).items():
            self.graph.nodes[node][attribute] = community

    def snapshot(self) -> IndexSnapshot:
        """Truncated copy of the internal arrays for debugging."""
        C, E = self.C, self.E
        return IndexSnapshot(
            kind=self.kind,
            C=C,
            M=self.M,
            E=E,
            level=self.level,
            nodes=[str(node) for node in self.nodes],
            starts=self.starts[: C + 1].tolist(),
            neighborhood=self.neighborhood[:E].tolist(),
            weights=self.weights[:E].tolist(),
            loops=self.loops[:C].tolist(),
            belongings=self.belongings[:C].tolist(),
            counts=self.counts[:C].tolist() if self.counts is not None else None,
            internal_weights=self.internal_weights[:C].tolist(),
            **self.history.payload(),
            **self._snapshot_fields(),
        )

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} order={len(self.nodes)} C={self.C} "
            f"M={self.M:g} E={self.E} level={self.level}>"
        )
