"""Local persistence helpers."""

from .session import SessionStore

__all__ = ["SessionStore"]
