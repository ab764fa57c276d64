"""Helpers to normalise product names before comparison."""

from __future__ import annotations

import unicodedata


def normalize(text: str) -> str:
    """Return ``text`` lower-cased, without diacritics and trimmed.

    Accented characters are decomposed (NFD) and the combining marks are
    dropped, so ``"Túnel"`` and ``"tunel"`` compare equal. Punctuation and
    inner whitespace are left untouched. Non-string input yields ``""``.
    """

    if not isinstance(text, str):
        return ""

    decomposed = unicodedata.normalize("NFD", text.lower())
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return stripped.strip()
