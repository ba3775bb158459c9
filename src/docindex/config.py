"""
Centralized configuration for docindex.

Uses Pydantic BaseSettings for environment variable integration
and validation. All configurable values should be defined here.

Configuration sources (in order of precedence):
1. Explicit constructor arguments
2. Environment variables (DOCINDEX_*)
3. .env file
4. Default values

Example:
    from docindex.config import get_config

    config = get_config()
    print(config.skills_dir)  # From DOCINDEX_SKILLS_DIR or default

    # Override at runtime
    config = get_config(max_results=10)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DocIndexConfig(BaseSettings):
    """
    Central configuration for the documentation index resolver.

    All settings can be overridden via environment variables
    prefixed with DOCINDEX_.

    Example:
        export DOCINDEX_SKILLS_DIR=plugins/rails/skills
        export DOCINDEX_LOG_LEVEL=debug
    """

    model_config = SettingsConfigDict(
        env_prefix="DOCINDEX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Service identification
    service_name: str = Field(
        default="docindex",
        description="Service name for log attribution",
    )

    # Manifest sources
    skills_dir: Optional[str] = Field(
        default=None,
        description="Root directory of skill packages (SKILL.md per skill)",
    )
    manifest_path: Optional[str] = Field(
        default=None,
        description="YAML manifest file; takes precedence over skills_dir",
    )

    # Matching
    max_results: int = Field(
        default=5,
        ge=1,
        description="Maximum ranked documents per query",
    )
    trigger_weight: int = Field(
        default=10,
        ge=1,
        description="Points per word of a trigger phrase found in the query",
    )
    exact_trigger_bonus: int = Field(
        default=100,
        ge=0,
        description="Extra points when the query is exactly a trigger phrase",
    )

    # Logging
    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="info",
        description="Logging level for docindex",
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Event log output format (json for Loki, text for console)",
    )

    @field_validator("skills_dir", "manifest_path")
    @classmethod
    def expand_path(cls, v: Optional[str]) -> Optional[str]:
        """Expand ~ and environment variables in paths."""
        if v is None:
            return v
        return os.path.expanduser(os.path.expandvars(v))

    def get_skills_root(self) -> Optional[Path]:
        return Path(self.skills_dir) if self.skills_dir else None

    def get_manifest_path(self) -> Optional[Path]:
        return Path(self.manifest_path) if self.manifest_path else None


# Global singleton
_config: Optional[DocIndexConfig] = None


def get_config(**overrides) -> DocIndexConfig:
    """
    Get the global configuration instance.

    Creates a singleton on first call. Subsequent calls return
    the same instance unless overrides are provided.

    Args:
        **overrides: Override any config values

    Returns:
        DocIndexConfig instance
    """
    global _config

    if overrides or _config is None:
        _config = DocIndexConfig(**overrides)

    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None
