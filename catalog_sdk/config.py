"""Client configuration and constants."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Tuple


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


def _split_hosts(raw: str) -> Tuple[str, ...]:
    return tuple(h.strip().lower() for h in raw.split(",") if h.strip())


@dataclass(frozen=True)
class Settings:
    """Simple settings container with environment variable overrides."""

    api_url: str = _get_env("CATALOG_API_URL", "http://127.0.0.1:8085")
    page_size: int = int(_get_env("CATALOG_PAGE_SIZE", "20"))
    debounce_ms: int = int(_get_env("CATALOG_DEBOUNCE_MS", "500"))
    timeout: float = float(_get_env("CATALOG_TIMEOUT", "10"))
    image_hosts: Tuple[str, ...] = field(
        default_factory=lambda: _split_hosts(_get_env("CATALOG_IMAGE_HOSTS", ""))
    )
    log_level: str = _get_env("LOG_LEVEL", "INFO")

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0


settings = Settings()
