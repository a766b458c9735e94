# src/louvain_index/index/history.py - v1
"""Coarsening history: full dendrogram or a single flattened mapping.

Both variants answer the same question: for every original node, which
node id does it map to at a given hierarchy level? FullHistory keeps each
level's belonging vector and composes them at read time; FlattenedHistory
composes eagerly and can only answer for the current level.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

import numpy as np


@dataclass
class FullHistory:
    """One belonging vector per coarsening, level k maps level-k ids to level-(k+1) ids."""

    order: int
    levels: list[np.ndarray] = field(default_factory=list)

    @property
    def depth(self) -> int:
        return len(self.levels)

    def record(self, belongings: np.ndarray) -> None:
        self.levels.append(belongings.copy())

    def mapping_at(self, level: int) -> np.ndarray:
        mapping = np.arange(self.order, dtype=np.int64)
        for belongings in self.levels[:level]:
            mapping = belongings[mapping]
        return mapping

    def payload(self) -> dict[str, list[list[int]]]:
        return {
            "dendrogram": [
                self.mapping_at(k).tolist() for k in range(self.depth + 1)
            ]
        }


@dataclass
class FlattenedHistory:
    """Composed original-node mapping for the current level only."""

    order: int
    mapping: np.ndarray = field(init=False)
    depth: int = 0

    def __post_init__(self) -> None:
        self.mapping = np.arange(self.order, dtype=np.int64)

    def record(self, belongings: np.ndarray) -> None:
        self.mapping = belongings[self.mapping]
        self.depth += 1

    def mapping_at(self, level: int) -> np.ndarray:
        if level != self.depth:
            raise ValueError(
                f"Level {level} was not retained; only the current level "
                f"({self.depth}) is available without keep_dendrogram"
            )
        return self.mapping

    def payload(self) -> dict[str, list[int]]:
        return {"mapping": self.mapping.tolist()}


History = Union[FullHistory, FlattenedHistory]


def create_history(order: int, keep_dendrogram: bool) -> History:
    """Pick the history variant matching the keep_dendrogram option."""
    if keep_dendrogram:
        return FullHistory(order=order)
    return FlattenedHistory(order=order)
