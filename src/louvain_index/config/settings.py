# src/louvain_index/config/settings.py - v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for index construction, Louvain runner and logging
settings. Every field maps to an upper-cased env var of the same name
(e.g. LOUVAIN_WEIGHTED=true).
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Index construction ===
    louvain_weighted: bool = False
    louvain_weight_attribute: str = "weight"
    louvain_keep_counts: bool = False
    louvain_keep_dendrogram: bool = False

    # === Louvain runner ===
    louvain_max_levels: int = -1
    louvain_tolerance: float = 1e-10
    louvain_randomize: bool = False
    louvain_seed: int | None = 42

    # === Community hierarchy ===
    community_min_size: int = 1

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("louvain_tolerance")
    @classmethod
    def validate_tolerance(cls, v: float) -> float:  # noqa: N805
        if v < 0:
            raise ValueError("louvain_tolerance must be >= 0")
        return v

    @field_validator("community_min_size")
    @classmethod
    def validate_min_size(cls, v: int) -> int:  # noqa: N805
        if v < 1:
            raise ValueError("community_min_size must be >= 1")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.louvain_max_levels == 0 or self.louvain_max_levels < -1:
            errors.append("LOUVAIN_MAX_LEVELS must be >= 1 or -1 (unlimited)")

        if self.louvain_weighted and not self.louvain_weight_attribute.strip():
            errors.append(
                "LOUVAIN_WEIGHTED requires a non-empty LOUVAIN_WEIGHT_ATTRIBUTE"
            )

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-run config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
