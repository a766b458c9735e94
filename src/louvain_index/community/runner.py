# src/louvain_index/community/runner.py - v1
"""Greedy hierarchical Louvain driven by the neighborhood index.

Each level runs the local-moving phase: every node scans its block once to
sum the weight it sends to each neighboring community, the best candidate is
picked with delta() against delta_with_own_community() for staying put, and
the winner is committed with move(). Passes repeat until no node moves, then
the index zooms out. The run stops when a level performs no move or when
max_levels coarsenings have been done.
"""

from __future__ import annotations

import logging
import random
import uuid
from collections import defaultdict
from typing import Any

import networkx as nx

from louvain_index.community.models import LouvainResult
from louvain_index.config.settings import Settings
from louvain_index.index.base import BaseLouvainIndex
from louvain_index.index.directed import DirectedLouvainIndex
from louvain_index.index.factory import create_index
from louvain_index.index.models import IndexOptions
from louvain_index.logging.context import (
    clear_context,
    set_level_context,
    set_run_context,
)

logger = logging.getLogger(__name__)


def run_louvain(
    graph: nx.Graph,
    options: IndexOptions | None = None,
    *,
    max_levels: int = -1,
    tolerance: float = 1e-10,
    randomize: bool = False,
    seed: int | None = 42,
    assign_attribute: str | None = None,
) -> LouvainResult:
    """Run hierarchical Louvain on a NetworkX graph.

    Args:
        graph: Graph to partition (directedness picks the index variant).
        options: Index construction options.
        max_levels: Maximum number of coarsenings (-1 = until convergence).
        tolerance: Minimum modularity gain for a move to be committed.
        randomize: Shuffle the node visiting order at every pass.
        seed: Seed for the shuffling RNG (None = non-deterministic).
        assign_attribute: If set, write final communities onto graph nodes.

    Returns:
        LouvainResult with the final partition and per-level statistics.
    """
    options = options or IndexOptions()
    index = create_index(graph, options)

    if graph.number_of_nodes() == 0:
        return LouvainResult()

    if index.M == 0:
        logger.info("Graph has no edge weight, every node stays a singleton")
        communities = index.collect()
        if assign_attribute:
            index.assign(assign_attribute)
        return LouvainResult(
            communities=communities,
            count=len(communities),
            dendrogram=[communities] if options.keep_dendrogram else None,
        )

    rng = random.Random(seed)
    set_run_context(uuid.uuid4().hex[:12], graph.graph.get("name"))

    level_modularities: list[float] = []
    moves_per_level: list[int] = []

    try:
        while True:
            set_level_context(index.level, "local_moving")
            moves = _local_moving(index, tolerance, rng if randomize else None)
            moves_per_level.append(moves)

            if moves == 0:
                break

            level_modularities.append(index.modularity())
            logger.info(
                "Level %d: %d moves, modularity=%.6f",
                index.level, moves, level_modularities[-1],
            )

            set_level_context(index.level, "zoom_out")
            index.zoom_out()

            if 0 <= max_levels <= index.level:
                break
    finally:
        clear_context()

    communities = index.collect()
    if assign_attribute:
        index.assign(assign_attribute)

    dendrogram = None
    if options.keep_dendrogram:
        dendrogram = [index.collect(level) for level in range(index.level + 1)]

    modularity = index.modularity()
    logger.info(
        "Louvain finished: %d communities over %d levels, modularity=%.6f",
        index.C, index.level, modularity,
    )

    return LouvainResult(
        communities=communities,
        count=index.C,
        modularity=modularity,
        level_modularities=level_modularities,
        moves_per_level=moves_per_level,
        num_levels=index.level,
        dendrogram=dendrogram,
    )


def run_louvain_from_settings(
    graph: nx.Graph,
    settings: Settings,
    **kwargs: Any,
) -> LouvainResult:
    """run_louvain() with options and runner parameters taken from Settings."""
    return run_louvain(
        graph,
        IndexOptions.from_settings(settings),
        max_levels=settings.louvain_max_levels,
        tolerance=settings.louvain_tolerance,
        randomize=settings.louvain_randomize,
        seed=settings.louvain_seed,
        **kwargs,
    )


def _local_moving(
    index: BaseLouvainIndex,
    tolerance: float,
    rng: random.Random | None,
) -> int:
    """Greedy passes at the current level, returns the number of committed moves."""
    if isinstance(index, DirectedLouvainIndex):
        step = _best_directed_move
    else:
        step = _best_undirected_move

    total_moves = 0
    order = list(range(index.C))

    while True:
        if rng is not None:
            rng.shuffle(order)

        moves = sum(step(index, i, tolerance) for i in order)
        total_moves += moves
        logger.debug("Local moving pass: %d moves", moves)

        if moves == 0:
            return total_moves


def _best_undirected_move(index: Any, i: int, tolerance: float) -> bool:
    start, end = index.starts[i], index.starts[i + 1]
    if start == end:
        return False

    current = int(index.belongings[i])
    community_degrees: defaultdict[int, float] = defaultdict(float)
    degree = 0.0

    neighbors = index.neighborhood[start:end]
    for community, weight in zip(
        index.belongings[neighbors].tolist(), index.weights[start:end].tolist()
    ):
        degree += weight
        community_degrees[community] += weight

    full_degree = degree + float(index.loops[i])
    current_degree = community_degrees.get(current, 0.0)

    best_community = current
    best_delta = index.delta_with_own_community(full_degree, current_degree, current)

    for community, community_degree in community_degrees.items():
        if community == current:
            continue
        gain = index.delta(full_degree, community_degree, community)
        if gain - best_delta > tolerance:
            best_community, best_delta = community, gain

    if best_community == current:
        return False

    index.move(
        i, degree, current_degree, community_degrees[best_community], best_community
    )
    return True


def _best_directed_move(index: Any, i: int, tolerance: float) -> bool:
    start, offset, end = index.starts[i], index.offsets[i], index.starts[i + 1]
    if start == end:
        return False

    current = int(index.belongings[i])
    in_degrees: defaultdict[int, float] = defaultdict(float)
    out_degrees: defaultdict[int, float] = defaultdict(float)
    in_degree = out_degree = 0.0

    neighbors = index.neighborhood[start:end]
    for k, (community, weight) in enumerate(
        zip(index.belongings[neighbors].tolist(), index.weights[start:end].tolist()),
        start=int(start),
    ):
        if k < offset:
            out_degree += weight
            out_degrees[community] += weight
        else:
            in_degree += weight
            in_degrees[community] += weight

    loops = float(index.loops[i])
    full_in, full_out = in_degree + loops, out_degree + loops

    best_community = current
    best_delta = index.delta_with_own_community(
        full_in,
        full_out,
        in_degrees.get(current, 0.0) + out_degrees.get(current, 0.0),
        current,
    )

    # Out-neighbors first, then in-only neighbors, in block order
    candidates = list(dict.fromkeys([*out_degrees, *in_degrees]))
    for community in candidates:
        if community == current:
            continue
        gain = index.delta(
            full_in,
            full_out,
            in_degrees.get(community, 0.0) + out_degrees.get(community, 0.0),
            community,
        )
        if gain - best_delta > tolerance:
            best_community, best_delta = community, gain

    if best_community == current:
        return False

    index.move(
        i,
        in_degree,
        out_degree,
        in_degrees.get(current, 0.0),
        out_degrees.get(current, 0.0),
        in_degrees.get(best_community, 0.0),
        out_degrees.get(best_community, 0.0),
        best_community,
    )
    return True
