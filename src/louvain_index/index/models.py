# src/louvain_index/index/models.py - v1
"""Louvain index models: IndexOptions, IndexSnapshot."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from louvain_index.config.settings import Settings


class IndexOptions(BaseModel):
    """Construction options shared by both index variants."""

    weighted: bool = False
    weight_attribute: str = "weight"
    keep_counts: bool = False
    keep_dendrogram: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> IndexOptions:
        """Build options from the index section of Settings."""
        return cls(
            weighted=settings.louvain_weighted,
            weight_attribute=settings.louvain_weight_attribute,
            keep_counts=settings.louvain_keep_counts,
            keep_dendrogram=settings.louvain_keep_dendrogram,
        )


class IndexSnapshot(BaseModel):
    """Debug view of an index, arrays truncated to the live C / E prefix."""

    kind: str
    C: int
    M: float
    E: int
    level: int
    nodes: list[str] = Field(default_factory=list)
    starts: list[int] = Field(default_factory=list)
    offsets: list[int] | None = None
    neighborhood: list[int] = Field(default_factory=list)
    weights: list[float] = Field(default_factory=list)
    loops: list[float] = Field(default_factory=list)
    belongings: list[int] = Field(default_factory=list)
    counts: list[int] | None = None
    internal_weights: list[float] = Field(default_factory=list)
    total_weights: list[float] | None = None
    total_in_weights: list[float] | None = None
    total_out_weights: list[float] | None = None
    dendrogram: list[list[int]] | None = None
    mapping: list[int] | None = None
