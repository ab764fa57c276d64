"""Smoke tests for session storage and settings."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from storefront.config.settings import get_settings
from storefront.models import User
from storefront.storage import SessionStore


@pytest.mark.asyncio
async def test_missing_session_loads_as_none(tmp_path: Path) -> None:
    store = SessionStore(tmp_path / "nested" / "session.json")

    assert await store.load() is None


@pytest.mark.asyncio
async def test_save_creates_parent_dirs_and_keeps_accents(tmp_path: Path) -> None:
    store = SessionStore(tmp_path / "nested" / "session.json")
    user = User(id=3, username="jose", nombre="José Núñez", token="tok")

    await store.save(user)

    raw = store.path.read_text(encoding="utf-8")
    assert "José Núñez" in raw
    assert json.loads(raw)["token"] == "tok"
    assert await store.load() == user


@pytest.mark.asyncio
async def test_clear_is_idempotent(tmp_path: Path) -> None:
    store = SessionStore(tmp_path / "session.json")
    await store.save(User(id=1, username="ana"))

    await store.clear()
    await store.clear()

    assert not store.path.exists()


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STOREFRONT_API_URL", "https://tienda.test/api")
    monkeypatch.setenv("STOREFRONT_REQUEST_TIMEOUT", "3.5")
    monkeypatch.setenv("STOREFRONT_FEATURED_LIMIT", "4")

    settings = get_settings()

    assert settings.api_url == "https://tienda.test/api"
    assert settings.request_timeout == 3.5
    assert settings.featured_limit == 4
    assert settings.color_reference_path == ""
