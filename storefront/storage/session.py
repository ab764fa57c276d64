"""JSON-backed storage for the signed-in user."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from pydantic import ValidationError

from storefront.models import User

logger = logging.getLogger(__name__)


class SessionStore:
    """Persists the current user (including the bearer token) as a JSON file."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    async def load(self) -> User | None:
        """Return the stored user, or ``None`` when nobody is signed in."""

        async with self._lock:
            if not self._path.exists():
                return None
            data = await asyncio.to_thread(self._path.read_text, encoding="utf-8")
        try:
            return User.model_validate(json.loads(data))
        except (json.JSONDecodeError, ValidationError) as exc:
            logger.warning("Ignoring unreadable session file %s: %s", self._path, exc)
            return None

    async def save(self, user: User) -> None:
        """Persist ``user`` to disk."""

        body = json.dumps(user.model_dump(), ensure_ascii=False, indent=2)
        async with self._lock:
            await asyncio.to_thread(self._write_file, self._path, body)

    async def clear(self) -> None:
        """Remove the stored session if present."""

        async with self._lock:
            await asyncio.to_thread(self._path.unlink, missing_ok=True)

    @staticmethod
    def _write_file(path: Path, body: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body, encoding="utf-8")
