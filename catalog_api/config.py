"""API process configuration."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


def _get_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    return value if value is not None else default


@dataclass(frozen=True)
class Settings:
    """Environment driven settings for the reference catalog API."""

    seed_path: Optional[str] = _get_env("CATALOG_SEED_PATH", None)
    log_level: str = _get_env("LOG_LEVEL", "INFO")
    max_page_size: int = int(_get_env("CATALOG_MAX_PAGE_SIZE", "100"))


settings = Settings()
