"""Shared fixtures for storefront tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import httpx
import pytest

from storefront.api.client import StorefrontClient
from storefront.config.settings import Settings, get_settings
from storefront.storage import SessionStore

Handler = Callable[[httpx.Request], httpx.Response]

API_URL = "https://shop.test/api"


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> None:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(api_url=API_URL, request_timeout=2.0)


@pytest.fixture
def make_client(settings: Settings) -> Callable[[Handler], StorefrontClient]:
    """Return a factory building clients that answer through ``handler``."""

    def _factory(handler: Handler) -> StorefrontClient:
        return StorefrontClient(settings, transport=httpx.MockTransport(handler))

    return _factory


@pytest.fixture
def session_store(tmp_path: Path) -> SessionStore:
    return SessionStore(tmp_path / "session.json")


@pytest.fixture
def user_payload() -> Callable[..., dict[str, object]]:
    """Return a factory for backend user records."""

    def _factory(**overrides: object) -> dict[str, object]:
        payload: dict[str, object] = {
            "id": 7,
            "username": "lucia",
            "nombre": "Lucía Pérez",
            "email": "lucia@example.com",
            "direccion": "Calle Mayor 1",
            "ciudad": "Madrid",
            "cp": "28001",
            "role": "user",
            "token": "jwt-token-lucia",
        }
        payload.update(overrides)
        return payload

    return _factory
