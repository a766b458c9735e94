"""Greedy Louvain runner and community hierarchy detection."""

from louvain_index.community.detector import detect_communities
from louvain_index.community.models import Community, CommunityHierarchy, LouvainResult
from louvain_index.community.runner import run_louvain, run_louvain_from_settings

__all__ = [
    "Community",
    "CommunityHierarchy",
    "LouvainResult",
    "detect_communities",
    "run_louvain",
    "run_louvain_from_settings",
]
