"""Token-overlap similarity between normalised product names."""

from __future__ import annotations

DEFAULT_PARTIAL_CREDIT = 0.7
DEFAULT_MIN_TOKEN_LENGTH = 3


def tokenize(text: str, min_length: int = DEFAULT_MIN_TOKEN_LENGTH) -> list[str]:
    """Split on whitespace and drop noise tokens shorter than ``min_length``."""

    return [token for token in text.split() if len(token) >= min_length]


def similarity(
    a: str,
    b: str,
    *,
    partial_credit: float = DEFAULT_PARTIAL_CREDIT,
    min_token_length: int = DEFAULT_MIN_TOKEN_LENGTH,
) -> float:
    """
    Score how much of ``a`` is covered by ``b``, in ``[0, 1]``.

    Each token of ``a`` earns 1.0 when it appears verbatim in ``b``, otherwise
    ``partial_credit`` for the first token of ``b`` that contains it or is
    contained in it. The sum is divided by the longer token list, so extra
    tokens on either side lower the score. Both inputs must already be
    normalised.
    """

    tokens_a = tokenize(a, min_token_length)
    tokens_b = tokenize(b, min_token_length)
    if not tokens_a or not tokens_b:
        return 0.0

    match_count = 0.0
    for token in tokens_a:
        if token in tokens_b:
            match_count += 1.0
            continue
        for other in tokens_b:
            if token in other or other in token:
                match_count += partial_credit
                break

    return match_count / max(len(tokens_a), len(tokens_b))
