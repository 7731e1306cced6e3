#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Renderer configuration.

All values can be overridden via environment variables (``BBRENDER_*``) or a
.env file.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bbrender._version import __version__ as _pkg_version


# -----------------------------------------------------------------------------

class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_prefix="BBRENDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Package ────────────────────────────────────────────────────────────

    version: str = _pkg_version

    # ── Engine ─────────────────────────────────────────────────────────────

    autolink: bool = True
    link_tags: list[str] = ["url"]
    max_depth: int = Field(default=8, ge=0)

    # Larger inputs only get whitespace normalisation, no tag scanning.
    max_input_chars: int = Field(default=1_000_000, gt=0)

    # ── Catalog ────────────────────────────────────────────────────────────

    # JSON tag catalog; the built-in catalog is used when unset.
    catalog_path: Optional[Path] = None

    # ── Logging ────────────────────────────────────────────────────────────

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v


# -----------------------------------------------------------------------------

@lru_cache
def get_settings() -> Settings:
    return Settings()


# -----------------------------------------------------------------------------
