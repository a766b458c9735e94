# src/louvain_index/index/undirected.py - v1
"""Undirected Louvain index.

Every non-loop edge is stored in both endpoints' blocks (E = 2 * non-loop
edges) but counts once toward M, at the endpoint with the smaller index.
A self-loop of weight w is not stored: it adds w to M and 2w to the node's
loops, internal and total weights, so that sum(total_weights) == 2M.

Delta derivation for moving node i (degree d, self-loops l) from community
c to community t, with d_c / d_t the weight from i to c / t:

    dQ = (d_t - d_c) / M
         + ((l + d) * tot_c - (l + d)^2 - (l + d) * tot_t) / (2 M^2)
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Hashable

import numpy as np

from louvain_index.index.base import BaseLouvainIndex


class UndirectedLouvainIndex(BaseLouvainIndex):
    """Louvain index over an undirected graph (nx.Graph / nx.MultiGraph)."""

    kind = "undirected"

    def _build(self, ids: dict[Hashable, int]) -> None:
        order = len(self.nodes)
        self.total_weights = np.zeros(order, dtype=np.float64)

        neighborhood: list[int] = []
        weights: list[float] = []

        for i, node in enumerate(self.nodes):
            self.starts[i] = len(neighborhood)

            for _, neighbor, data in self.graph.edges(node, data=True):
                weight = self._weight(data)
                j = ids[neighbor]

                if j == i:
                    self.M += weight
                    self.loops[i] += 2 * weight
                    self.internal_weights[i] += 2 * weight
                    self.total_weights[i] += 2 * weight
                    continue

                # Counted once, at the smaller endpoint
                if i < j:
                    self.M += weight

                self.total_weights[i] += weight
                neighborhood.append(j)
                weights.append(weight)

        self.starts[order] = len(neighborhood)
        self.neighborhood = np.asarray(neighborhood, dtype=np.int64)
        self.weights = np.asarray(weights, dtype=np.float64)
        self.E = len(neighborhood)

    def move(
        self,
        index: int,
        degree: float,
        current_community_degree: float,
        target_community_degree: float,
        target_community: int,
    ) -> None:
        """Commit a move using precomputed degree figures. O(1).

        Args:
            index: Node to move.
            degree: Sum of the node's incident weights (self-loops excluded).
            current_community_degree: Weight from the node to its current community.
            target_community_degree: Weight from the node to the target community.
            target_community: Community to join.
        """
        index = self._check_node(index)
        target_community = self._check_community(target_community)
        current_community = int(self.belongings[index])

        if current_community == target_community:
            return

        loops = self.loops[index]

        self.total_weights[current_community] -= degree + loops
        self.total_weights[target_community] += degree + loops

        self.internal_weights[current_community] -= current_community_degree * 2 + loops
        self.internal_weights[target_community] += target_community_degree * 2 + loops

        self.belongings[index] = target_community
        self._move_counts(index, current_community, target_community)

    def degrees(self, index: int, target_community: int) -> tuple[float, float, float]:
        """Scan the node's block: (degree, current community degree, target community degree)."""
        start, end = self.bounds(index)
        target_community = self._check_community(target_community)

        weights = self.weights[start:end]
        communities = self.belongings[self.neighborhood[start:end]]
        current_community = self.belongings[index]

        return (
            float(weights.sum()),
            float(weights[communities == current_community].sum()),
            float(weights[communities == target_community].sum()),
        )

    def expensive_move(self, index: int, target_community: int) -> None:
        degree, current_degree, target_degree = self.degrees(index, target_community)
        self.move(index, degree, current_degree, target_degree, target_community)

    def zoom_out(self) -> None:
        labels, belongings = self._renumber()
        C = len(labels)

        node_communities = belongings.tolist()
        neighborhood = self.neighborhood.tolist()
        weights = self.weights.tolist()
        starts = self.starts.tolist()

        # Intra-community entries are already tallied in internal_weights
        induced: list[defaultdict[int, float]] = [defaultdict(float) for _ in range(C)]
        for i in range(self.C):
            ci = node_communities[i]
            adjacency = induced[ci]
            for k in range(starts[i], starts[i + 1]):
                cj = node_communities[neighborhood[k]]
                if ci != cj:
                    adjacency[cj] += weights[k]

        new_neighborhood: list[int] = []
        new_weights: list[float] = []
        self.starts = np.zeros(C + 1, dtype=np.int64)
        for ci, adjacency in enumerate(induced):
            self.starts[ci] = len(new_neighborhood)
            new_neighborhood.extend(adjacency.keys())
            new_weights.extend(adjacency.values())
        self.starts[C] = len(new_neighborhood)

        self.neighborhood = np.asarray(new_neighborhood, dtype=np.int64)
        self.weights = np.asarray(new_weights, dtype=np.float64)
        self.E = len(new_neighborhood)
        self.total_weights = self.total_weights[labels]

        self._finish_zoom_out(labels, belongings)

    def modularity(self) -> float:
        self._check_evaluable()
        M2 = self.M * 2
        C = self.C
        return float(
            np.sum(
                self.internal_weights[:C] / M2
                - (self.total_weights[:C] / M2) ** 2
            )
        )

    def delta(self, degree: float, target_community_degree: float, target_community: int) -> float:
        """Gain of inserting an isolated node into the target community.

        target_community_degree is passed undoubled, hence the /M term.
        """
        self._check_evaluable()
        target_community = self._check_community(target_community)
        M = self.M
        total = self.total_weights[target_community]
        return float(target_community_degree / M - (total * degree) / (2 * M * M))

    def delta_with_own_community(
        self, degree: float, target_community_degree: float, target_community: int
    ) -> float:
        """Like delta(), for a node still counted inside the target's totals."""
        self._check_evaluable()
        target_community = self._check_community(target_community)
        M = self.M
        total = self.total_weights[target_community]
        return float(
            target_community_degree / M - ((total - degree) * degree) / (2 * M * M)
        )

    def true_delta(
        self,
        index: int,
        degree: float,
        current_community_degree: float,
        target_community_degree: float,
        target_community: int,
    ) -> float:
        """Full leave-then-join modularity delta, self-loops included.

        Raises:
            ValueError: If the target is the node's own community (dQ is 0
                there but the formula does not apply).
        """
        self._check_evaluable()
        index = self._check_node(index)
        target_community = self._check_community(target_community)
        current_community = int(self.belongings[index])

        if current_community == target_community:
            raise ValueError(
                f"true_delta is undefined for node {index} staying in community "
                f"{target_community}"
            )

        M = self.M
        loops = float(self.loops[index])
        k = loops + degree
        current_total = self.total_weights[current_community]
        target_total = self.total_weights[target_community]

        return float(
            (target_community_degree - current_community_degree) / M
            + (k * current_total - k * k - k * target_total) / (2 * M * M)
        )

    def _snapshot_fields(self) -> dict[str, Any]:
        return {"total_weights": self.total_weights[: self.C].tolist()}
