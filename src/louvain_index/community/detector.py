# src/louvain_index/community/detector.py - v1
"""Hierarchical community detection via the Louvain index.

Pure function: takes a NetworkX graph, returns CommunityHierarchy.
Does NOT modify the input graph. Every coarsening level becomes one level of
the hierarchy; communities link to their parent (next level) and children
(previous level).
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Hashable

import networkx as nx

from louvain_index.community.models import Community, CommunityHierarchy
from louvain_index.community.runner import run_louvain
from louvain_index.config.settings import Settings
from louvain_index.index.models import IndexOptions

logger = logging.getLogger(__name__)


def detect_communities(
    graph: nx.Graph,
    options: IndexOptions | None = None,
    settings: Settings | None = None,
    min_community_size: int | None = None,
    seed: int | None = None,
) -> CommunityHierarchy:
    """Apply hierarchical Louvain and build the community tree.

    Args:
        graph: NetworkX graph (directed or undirected).
        options: Index options; the dendrogram is always retained here.
        settings: Source of runner parameters and defaults when given.
        min_community_size: Minimum members per reported community.
        seed: Shuffle seed; visiting order is only randomized with a seed.

    Returns:
        CommunityHierarchy with detected communities.
    """
    if settings is not None:
        options = options or IndexOptions.from_settings(settings)
        if min_community_size is None:
            min_community_size = settings.community_min_size
        if seed is None and settings.louvain_randomize:
            seed = settings.louvain_seed
    min_community_size = min_community_size or 1

    if graph.number_of_nodes() == 0:
        return CommunityHierarchy(num_levels=0, seed=seed, total_communities=0)

    options = (options or IndexOptions()).model_copy(update={"keep_dendrogram": True})
    runner_kwargs: dict[str, Any] = {}
    if settings is not None:
        runner_kwargs.update(
            max_levels=settings.louvain_max_levels,
            tolerance=settings.louvain_tolerance,
        )

    result = run_louvain(
        graph, options, randomize=seed is not None, seed=seed, **runner_kwargs
    )
    dendrogram = result.dendrogram or []

    communities: list[Community] = []
    representatives: dict[str, Hashable] = {}
    # Level 0 is the all-singleton partition and is not reported
    for level in range(1, len(dendrogram)):
        members_by_id: dict[int, list[Hashable]] = defaultdict(list)
        for node, community in dendrogram[level].items():
            members_by_id[community].append(node)

        score = result.level_modularities[level - 1]
        for community, members in sorted(members_by_id.items()):
            if len(members) < min_community_size:
                continue
            community_id = _community_id(level, community)
            representatives[community_id] = members[0]
            communities.append(Community(
                community_id=community_id,
                level=level,
                members=sorted(str(m) for m in members),
                modularity_score=score,
            ))

    _link_levels(communities, representatives, dendrogram)

    logger.info(
        "Detected %d communities over %d levels (min size %d)",
        len(communities), result.num_levels, min_community_size,
    )

    return CommunityHierarchy(
        communities=communities,
        num_levels=result.num_levels,
        seed=seed,
        total_communities=len(communities),
        modularity=result.modularity,
    )


def _community_id(level: int, community: int) -> str:
    return f"comm_{level}_{community:03d}"


def _link_levels(
    communities: list[Community],
    representatives: dict[str, Hashable],
    dendrogram: list[dict[Any, int]],
) -> None:
    """Fill parent_id / children_ids between consecutive reported levels."""
    by_id = {c.community_id: c for c in communities}

    for community in communities:
        next_level = community.level + 1
        if next_level >= len(dendrogram):
            continue
        # All members share the same parent
        node = representatives[community.community_id]
        parent = by_id.get(_community_id(next_level, dendrogram[next_level][node]))
        if parent is None:
            continue
        community.parent_id = parent.community_id
        parent.children_ids.append(community.community_id)
