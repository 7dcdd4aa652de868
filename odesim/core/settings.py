"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    model: str = "claude-sonnet-4-5-20250929"
    max_steps: int = Field(100_000, ge=1)
    preview_max_steps: int = Field(100, ge=1)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings from ``ODESIM_*`` environment variables (cached)."""
    env = {
        "model": os.environ.get("ODESIM_MODEL"),
        "max_steps": os.environ.get("ODESIM_MAX_STEPS"),
        "preview_max_steps": os.environ.get("ODESIM_PREVIEW_MAX_STEPS"),
    }
    return Settings(**{k: v for k, v in env.items() if v is not None})
