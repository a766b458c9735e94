# src/louvain_index/index/directed.py - v1
"""Directed Louvain index (Dugue & Perez directed modularity).

Each node's block holds its out-edges in [starts[i], offsets[i]) followed by
its in-edges in [offsets[i], starts[i + 1]). M accumulates once per out-edge.
A self-loop of weight w is not stored: it adds w to M, to the node's loops
and internal weight, and to both its in and out totals.

Delta derivation for moving node i from community c to t, with
a = d_in + l and b = d_out + l:

    dQ = ((dt_in + dt_out) - (dc_in + dc_out)) / M
         + (b * in_c + a * out_c - b * in_t - a * out_t - 2ab) / M^2
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Hashable

import numpy as np

from louvain_index.index.base import BaseLouvainIndex


class DirectedLouvainIndex(BaseLouvainIndex):
    """Louvain index over a directed graph (nx.DiGraph / nx.MultiDiGraph)."""

    kind = "directed"

    def _build(self, ids: dict[Hashable, int]) -> None:
        order = len(self.nodes)
        self.offsets = np.zeros(order, dtype=np.int64)
        self.total_in_weights = np.zeros(order, dtype=np.float64)
        self.total_out_weights = np.zeros(order, dtype=np.float64)

        neighborhood: list[int] = []
        weights: list[float] = []

        for i, node in enumerate(self.nodes):
            self.starts[i] = len(neighborhood)

            for _, target, data in self.graph.out_edges(node, data=True):
                weight = self._weight(data)
                j = ids[target]

                # Totals and M are only updated when the edge goes out
                self.M += weight

                if j == i:
                    self.loops[i] += weight
                    self.internal_weights[i] += weight
                    self.total_in_weights[i] += weight
                    self.total_out_weights[i] += weight
                    continue

                self.total_out_weights[i] += weight
                self.total_in_weights[j] += weight
                neighborhood.append(j)
                weights.append(weight)

            self.offsets[i] = len(neighborhood)

            for source, _, data in self.graph.in_edges(node, data=True):
                j = ids[source]
                if j == i:
                    continue
                neighborhood.append(j)
                weights.append(self._weight(data))

        self.starts[order] = len(neighborhood)
        self.neighborhood = np.asarray(neighborhood, dtype=np.int64)
        self.weights = np.asarray(weights, dtype=np.float64)
        self.E = len(neighborhood)

    def out_bounds(self, index: int) -> tuple[int, int]:
        index = self._check_node(index)
        return int(self.starts[index]), int(self.offsets[index])

    def in_bounds(self, index: int) -> tuple[int, int]:
        index = self._check_node(index)
        return int(self.offsets[index]), int(self.starts[index + 1])

    def project_out(self) -> dict[Hashable, list[Hashable]]:
        return self._project(self.starts[:-1], self.offsets)

    def project_in(self) -> dict[Hashable, list[Hashable]]:
        return self._project(self.offsets, self.starts[1:])

    def move(
        self,
        index: int,
        in_degree: float,
        out_degree: float,
        current_community_in_degree: float,
        current_community_out_degree: float,
        target_community_in_degree: float,
        target_community_out_degree: float,
        target_community: int,
    ) -> None:
        """Commit a move using precomputed in/out degree figures. O(1)."""
        index = self._check_node(index)
        target_community = self._check_community(target_community)
        current_community = int(self.belongings[index])

        if current_community == target_community:
            return

        loops = self.loops[index]

        self.total_in_weights[current_community] -= in_degree + loops
        self.total_in_weights[target_community] += in_degree + loops

        self.total_out_weights[current_community] -= out_degree + loops
        self.total_out_weights[target_community] += out_degree + loops

        self.internal_weights[current_community] -= (
            current_community_in_degree + current_community_out_degree + loops
        )
        self.internal_weights[target_community] += (
            target_community_in_degree + target_community_out_degree + loops
        )

        self.belongings[index] = target_community
        self._move_counts(index, current_community, target_community)

    def degrees(
        self, index: int, target_community: int
    ) -> tuple[float, float, float, float, float, float]:
        """Scan the node's block.

        Returns:
            (in_degree, out_degree, current_in, current_out, target_in, target_out)
        """
        start, end = self.bounds(index)
        target_community = self._check_community(target_community)
        offset = int(self.offsets[index])
        current_community = self.belongings[index]

        out_weights = self.weights[start:offset]
        in_weights = self.weights[offset:end]
        out_communities = self.belongings[self.neighborhood[start:offset]]
        in_communities = self.belongings[self.neighborhood[offset:end]]

        return (
            float(in_weights.sum()),
            float(out_weights.sum()),
            float(in_weights[in_communities == current_community].sum()),
            float(out_weights[out_communities == current_community].sum()),
            float(in_weights[in_communities == target_community].sum()),
            float(out_weights[out_communities == target_community].sum()),
        )

    def expensive_move(self, index: int, target_community: int) -> None:
        (
            in_degree,
            out_degree,
            current_in,
            current_out,
            target_in,
            target_out,
        ) = self.degrees(index, target_community)
        self.move(
            index,
            in_degree,
            out_degree,
            current_in,
            current_out,
            target_in,
            target_out,
            target_community,
        )

    def zoom_out(self) -> None:
        labels, belongings = self._renumber()
        C = len(labels)

        node_communities = belongings.tolist()
        neighborhood = self.neighborhood.tolist()
        weights = self.weights.tolist()
        starts = self.starts.tolist()
        offsets = self.offsets.tolist()

        out_induced: list[defaultdict[int, float]] = [defaultdict(float) for _ in range(C)]
        in_induced: list[defaultdict[int, float]] = [defaultdict(float) for _ in range(C)]
        for i in range(self.C):
            ci = node_communities[i]
            offset = offsets[i]
            for k in range(starts[i], starts[i + 1]):
                cj = node_communities[neighborhood[k]]
                if ci == cj:
                    continue
                adjacency = out_induced[ci] if k < offset else in_induced[ci]
                adjacency[cj] += weights[k]

        new_neighborhood: list[int] = []
        new_weights: list[float] = []
        self.starts = np.zeros(C + 1, dtype=np.int64)
        self.offsets = np.zeros(C, dtype=np.int64)
        for ci in range(C):
            self.starts[ci] = len(new_neighborhood)
            new_neighborhood.extend(out_induced[ci].keys())
            new_weights.extend(out_induced[ci].values())
            self.offsets[ci] = len(new_neighborhood)
            new_neighborhood.extend(in_induced[ci].keys())
            new_weights.extend(in_induced[ci].values())
        self.starts[C] = len(new_neighborhood)

        self.neighborhood = np.asarray(new_neighborhood, dtype=np.int64)
        self.weights = np.asarray(new_weights, dtype=np.float64)
        self.E = len(new_neighborhood)
        self.total_in_weights = self.total_in_weights[labels]
        self.total_out_weights = self.total_out_weights[labels]

        self._finish_zoom_out(labels, belongings)

    def modularity(self) -> float:
        self._check_evaluable()
        M = self.M
        C = self.C
        return float(
            np.sum(
                self.internal_weights[:C] / M
                - self.total_in_weights[:C] * self.total_out_weights[:C] / (M * M)
            )
        )

    def delta(
        self,
        in_degree: float,
        out_degree: float,
        target_community_degree: float,
        target_community: int,
    ) -> float:
        """Gain of inserting an isolated node into the target community.

        target_community_degree is the in + out weight between the node and
        the target community.
        """
        self._check_evaluable()
        target_community = self._check_community(target_community)
        M = self.M
        total_in = self.total_in_weights[target_community]
        total_out = self.total_out_weights[target_community]
        return float(
            target_community_degree / M
            - (out_degree * total_in + in_degree * total_out) / (M * M)
        )

    def delta_with_own_community(
        self,
        in_degree: float,
        out_degree: float,
        target_community_degree: float,
        target_community: int,
    ) -> float:
        self._check_evaluable()
        target_community = self._check_community(target_community)
        M = self.M
        total_in = self.total_in_weights[target_community]
        total_out = self.total_out_weights[target_community]
        return float(
            target_community_degree / M
            - (
                out_degree * (total_in - in_degree)
                + in_degree * (total_out - out_degree)
            )
            / (M * M)
        )

    def true_delta(
        self,
        index: int,
        in_degree: float,
        out_degree: float,
        current_community_in_degree: float,
        current_community_out_degree: float,
        target_community_in_degree: float,
        target_community_out_degree: float,
        target_community: int,
    ) -> float:
        """Full leave-then-join directed modularity delta, self-loops included.

        Raises:
            ValueError: If the target is the node's own community.
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
        a = in_degree + loops
        b = out_degree + loops

        current_in = self.total_in_weights[current_community]
        current_out = self.total_out_weights[current_community]
        target_in = self.total_in_weights[target_community]
        target_out = self.total_out_weights[target_community]

        gained = target_community_in_degree + target_community_out_degree
        lost = current_community_in_degree + current_community_out_degree

        return float(
            (gained - lost) / M
            + (
                b * current_in
                + a * current_out
                - b * target_in
                - a * target_out
                - 2 * a * b
            )
            / (M * M)
        )

    def _snapshot_fields(self) -> dict[str, Any]:
        C = self.C
        return {
            "offsets": self.offsets[:C].tolist(),
            "total_in_weights": self.total_in_weights[:C].tolist(),
            "total_out_weights": self.total_out_weights[:C].tolist(),
        }
