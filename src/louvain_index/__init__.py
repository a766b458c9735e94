"""Louvain neighborhood index and hierarchical community detection."""

from louvain_index.version import __version__

__all__ = ["__version__"]
