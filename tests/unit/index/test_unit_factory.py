# tests/unit/index/test_unit_factory.py - v1
"""Tests for index/factory.py and index/models.py."""

from __future__ import annotations

import networkx as nx
import pytest

from louvain_index.config.settings import Settings
from louvain_index.index.directed import DirectedLouvainIndex
from louvain_index.index.factory import UnsupportedGraphError, create_index
from louvain_index.index.models import IndexOptions
from louvain_index.index.undirected import UndirectedLouvainIndex


class TestCreateIndex:
    def test_undirected(self, triangle):
        assert isinstance(create_index(triangle), UndirectedLouvainIndex)

    def test_multigraph_is_undirected(self):
        assert isinstance(create_index(nx.MultiGraph([(1, 2)])), UndirectedLouvainIndex)

    def test_directed(self, directed_cycle):
        assert isinstance(create_index(directed_cycle), DirectedLouvainIndex)

    def test_rejects_non_networkx(self):
        with pytest.raises(UnsupportedGraphError, match="dict"):
            create_index({"a": ["b"]})

    def test_unsupported_is_value_error(self):
        with pytest.raises(ValueError):
            create_index([("a", "b")])

    def test_explicit_options(self, triangle):
        index = create_index(triangle, IndexOptions(keep_counts=True))
        assert index.counts is not None

    def test_options_from_settings(self):
        g = nx.Graph()
        g.add_edge("x", "y", w=4.0)
        settings = Settings(
            _env_file=None,
            louvain_weighted=True,
            louvain_weight_attribute="w",
            louvain_keep_dendrogram=True,
        )
        index = create_index(g, settings=settings)
        assert index.M == 4
        assert index.keep_dendrogram is True

    def test_explicit_options_win_over_settings(self, triangle):
        settings = Settings(_env_file=None, louvain_keep_counts=True)
        index = create_index(triangle, IndexOptions(), settings=settings)
        assert index.counts is None


class TestIndexOptions:
    def test_defaults(self):
        options = IndexOptions()
        assert options.weighted is False
        assert options.weight_attribute == "weight"
        assert options.keep_counts is False
        assert options.keep_dendrogram is False

    def test_from_settings(self):
        settings = Settings(_env_file=None, louvain_keep_counts=True)
        options = IndexOptions.from_settings(settings)
        assert options.keep_counts is True
        assert options.weighted is False
