# src/louvain_index/logging/context.py - v1
"""Contextual logging support: attach run_id, graph name, level and phase to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set per Louvain run.
_run_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "run_id", default=None
)
_graph_name: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "graph_name", default=None
)
_level: contextvars.ContextVar[int | None] = contextvars.ContextVar(
    "level", default=None
)
_phase: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "phase", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    run_id: str | None = None
    graph_name: str | None = None
    level: int | None = None
    phase: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        run_id=_run_id.get(),
        graph_name=_graph_name.get(),
        level=_level.get(),
        phase=_phase.get(),
    )


def set_run_context(run_id: str, graph_name: str | None = None) -> None:
    """Set run-level context (called once per Louvain run)."""
    _run_id.set(run_id)
    _graph_name.set(graph_name)


def set_level_context(level: int, phase: str | None = None) -> None:
    """Set hierarchy-level context (called per level and phase)."""
    _level.set(level)
    _phase.set(phase)


def clear_context() -> None:
    """Reset all context variables."""
    _run_id.set(None)
    _graph_name.set(None)
    _level.set(None)
    _phase.set(None)
