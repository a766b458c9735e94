# src/louvain_index/logging/handlers.py - v1
"""Rotating file handler for Louvain run logs."""

from __future__ import annotations

import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

_UNITS = {"": 1, "B": 1, "KB": 1024, "MB": 1024**2, "GB": 1024**3}


def _parse_size(size_str: str) -> int:
    """Parse '10MB', '512kb' or a bare byte count into bytes."""
    match = re.fullmatch(r"(\d+)\s*([KMG]?B)?", size_str.strip(), re.IGNORECASE)
    if not match or int(match.group(1)) == 0:
        raise ValueError(f"Invalid size format: {size_str!r}. Use e.g. '10MB'.")
    return int(match.group(1)) * _UNITS[(match.group(2) or "").upper()]


def create_rotating_handler(
    log_file: str | Path,
    rotation: str = "10MB",
    retention: int = 30,
) -> RotatingFileHandler:
    """Open log_file for size-based rotation, creating parent directories.

    Args:
        log_file: Path to log file.
        rotation: Max file size before rotation (e.g. "10MB").
        retention: Number of rotated files kept next to the active one.
    """
    if retention < 0:
        raise ValueError(f"retention must be >= 0, got {retention}")
    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)

    return RotatingFileHandler(
        filename=str(path),
        maxBytes=_parse_size(rotation),
        backupCount=retention,
        encoding="utf-8",
    )
