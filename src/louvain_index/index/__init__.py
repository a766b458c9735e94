"""Packed-array Louvain indices (undirected and directed)."""

from louvain_index.index.base import (
    BaseLouvainIndex,
    DegenerateIndexError,
    IndexBoundsError,
    LouvainIndexError,
)
from louvain_index.index.directed import DirectedLouvainIndex
from louvain_index.index.factory import UnsupportedGraphError, create_index
from louvain_index.index.models import IndexOptions, IndexSnapshot
from louvain_index.index.undirected import UndirectedLouvainIndex

__all__ = [
    "BaseLouvainIndex",
    "DegenerateIndexError",
    "DirectedLouvainIndex",
    "IndexBoundsError",
    "IndexOptions",
    "IndexSnapshot",
    "LouvainIndexError",
    "UndirectedLouvainIndex",
    "UnsupportedGraphError",
    "create_index",
]
