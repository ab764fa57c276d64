"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


def _load_env_file(path: str = ".env") -> None:
    """Populate os.environ from the provided .env file if it exists."""

    env_path = Path(path)
    if not env_path.exists():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


@dataclass(frozen=True, slots=True)
class Settings:
    """Centralised storefront settings based on OS environment variables."""

    environment: str = "dev"
    log_level: str = "INFO"

    api_url: str = "http://localhost:3000/api"
    request_timeout: float = 10.0
    session_path: str = "data/session.json"

    color_reference_path: str = ""
    featured_limit: int = 8


def _build_settings() -> Settings:
    _load_env_file()

    return Settings(
        environment=os.getenv("ENVIRONMENT", "dev"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        api_url=os.getenv("STOREFRONT_API_URL", "http://localhost:3000/api"),
        request_timeout=float(os.getenv("STOREFRONT_REQUEST_TIMEOUT", "10")),
        session_path=os.getenv("STOREFRONT_SESSION_PATH", "data/session.json"),
        color_reference_path=os.getenv("STOREFRONT_COLOR_REFERENCE", ""),
        featured_limit=int(os.getenv("STOREFRONT_FEATURED_LIMIT", "8")),
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance to avoid re-reading configuration."""

    return _build_settings()
