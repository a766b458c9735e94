# tests/conftest.py - v1
"""Shared test fixtures for all unit and integration tests.

Provides small NetworkX graphs with known community structure.
No external dependencies beyond networkx.
"""

from __future__ import annotations

import networkx as nx
import pytest


def build_clustered_graph() -> nx.Graph:
    """Two dense clusters of four nodes joined by the A4-B1 bridge."""
    g = nx.Graph()
    for prefix in ("A", "B"):
        n1, n2, n3, n4 = (f"{prefix}{i}" for i in range(1, 5))
        g.add_edge(n1, n2)
        g.add_edge(n2, n3)
        g.add_edge(n3, n4)
        g.add_edge(n1, n3)
        g.add_edge(n1, n4)
    g.add_edge("A4", "B1")
    # Reorder so that all A nodes come first
    ordered = nx.Graph()
    ordered.add_nodes_from(sorted(g.nodes))
    ordered.add_edges_from(g.edges(data=True))
    return ordered


def build_directed_clusters() -> nx.DiGraph:
    """Two bidirectional triangles joined by a single a3 -> b1 edge."""
    g = nx.DiGraph()
    for prefix in ("a", "b"):
        nodes = [f"{prefix}{i}" for i in range(1, 4)]
        g.add_nodes_from(nodes)
        for u in nodes:
            for v in nodes:
                if u != v:
                    g.add_edge(u, v)
    g.add_edge("a3", "b1")
    return g


# === FIXTURES: Sample graphs ===


@pytest.fixture
def triangle() -> nx.Graph:
    return nx.Graph([("a", "b"), ("b", "c"), ("a", "c")])


@pytest.fixture
def path_graph() -> nx.Graph:
    """Undirected path A-B-C-D with unit weights."""
    return nx.Graph([("A", "B"), ("B", "C"), ("C", "D")])


@pytest.fixture
def clustered_graph() -> nx.Graph:
    return build_clustered_graph()


@pytest.fixture
def directed_cycle() -> nx.DiGraph:
    return nx.DiGraph([("a", "b"), ("b", "c"), ("c", "a")])


@pytest.fixture
def directed_clusters() -> nx.DiGraph:
    return build_directed_clusters()
