"""Tests for the token-overlap similarity heuristic."""

import pytest

from storefront.catalog.similarity import similarity, tokenize


def test_tokenize_drops_short_tokens() -> None:
    assert tokenize("banana para el ombligo") == ["banana", "para", "ombligo"]


def test_verbatim_tokens_score_against_longer_side() -> None:
    assert similarity("anillo corazon", "anillo con corazon") == pytest.approx(2 / 3)


def test_substring_earns_partial_credit_in_both_directions() -> None:
    assert similarity("corazones", "corazon") == pytest.approx(0.7)
    assert similarity("anillo", "anillos") == pytest.approx(0.7)


def test_partial_credit_is_given_once_per_token() -> None:
    assert similarity("anillos", "anillo nillo") == pytest.approx(0.35)


def test_only_noise_tokens_score_zero() -> None:
    assert similarity("de la", "anillo") == 0.0
    assert similarity("", "anillo") == 0.0


def test_partial_credit_is_tunable() -> None:
    assert similarity("corazones", "corazon", partial_credit=0.5) == pytest.approx(0.5)
