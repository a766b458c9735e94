# src/louvain_index/index/factory.py - v1
"""Factory for Louvain index instantiation.

The variant follows graph.is_directed(); options default to Settings when
none are given explicitly.
"""

from __future__ import annotations

from typing import Any

import networkx as nx

from louvain_index.config.settings import Settings
from louvain_index.index.base import BaseLouvainIndex
from louvain_index.index.directed import DirectedLouvainIndex
from louvain_index.index.models import IndexOptions
from louvain_index.index.undirected import UndirectedLouvainIndex


class UnsupportedGraphError(ValueError):
    """Raised when the input is not a NetworkX graph."""


def create_index(
    graph: Any,
    options: IndexOptions | None = None,
    settings: Settings | None = None,
) -> BaseLouvainIndex:
    """Build the Louvain index matching the graph's directedness.

    Args:
        graph: NetworkX Graph, DiGraph, MultiGraph or MultiDiGraph.
        options: Explicit construction options (take precedence).
        settings: Settings used to derive options when none are given.

    Returns:
        DirectedLouvainIndex or UndirectedLouvainIndex.

    Raises:
        UnsupportedGraphError: If graph is not a NetworkX graph.
    """
    if not isinstance(graph, nx.Graph):
        raise UnsupportedGraphError(
            f"Expected a networkx graph, got {type(graph).__name__}"
        )

    if options is None:
        options = (
            IndexOptions.from_settings(settings) if settings is not None else IndexOptions()
        )

    if graph.is_directed():
        return DirectedLouvainIndex(graph, options)
    return UndirectedLouvainIndex(graph, options)
