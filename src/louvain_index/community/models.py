# src/louvain_index/community/models.py - v1
"""Community detection models: LouvainResult, Community, CommunityHierarchy."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class LouvainResult(BaseModel):
    """Outcome of a full hierarchical Louvain run."""

    communities: dict[Any, int] = Field(default_factory=dict)
    count: int = 0
    modularity: float = 0.0
    level_modularities: list[float] = Field(default_factory=list)
    moves_per_level: list[int] = Field(default_factory=list)
    num_levels: int = 0
    dendrogram: list[dict[Any, int]] | None = None


class Community(BaseModel):
    """Single community at one hierarchy level."""

    community_id: str
    level: int
    members: list[str] = Field(default_factory=list)
    parent_id: str | None = None
    children_ids: list[str] = Field(default_factory=list)
    modularity_score: float = 0.0


class CommunityHierarchy(BaseModel):
    """Full hierarchical community structure from Louvain."""

    communities: list[Community] = Field(default_factory=list)
    num_levels: int = 0
    seed: int | None = None
    total_communities: int = 0
    modularity: float = 0.0

    def at_level(self, level: int) -> list[Community]:
        """Communities of a single level."""
        return [c for c in self.communities if c.level == level]
