"""Resolve a free-text product name into the colours offered for it.

Resolution runs a fixed cascade and stops at the first tier that produces
colours:

1. missing name (absent or empty): the baseline colours;
2. plug override: any name mentioning plugs gets the plug colours;
3. exact phrase match, in dictionary order;
4. best partial phrase match, accepted only above the similarity threshold;
5. first keyword contained in the name;
6. first product type contained in the name;
7. the default colours.

Phrase matching is scored across the whole dictionary while keyword and type
matching take the first hit. The resolver never raises and keeps no state
between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from storefront.catalog.normalizer import normalize
from storefront.catalog.reference_data import (
    DEFAULT_RESOLUTION_CONFIG,
    ColorTable,
    ResolutionConfig,
)
from storefront.catalog.similarity import similarity

logger = logging.getLogger(__name__)


class ResolutionTier(str, Enum):
    """Cascade stage that produced a resolution."""

    MISSING_NAME = "missing_name"
    PLUG_OVERRIDE = "plug_override"
    EXACT = "exact"
    PARTIAL = "partial"
    KEYWORD = "keyword"
    TYPE = "type"
    DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class ColorResolution:
    """Colours chosen for a product name and how they were found."""

    colors: tuple[str, ...]
    tier: ResolutionTier
    matched_key: str | None = None
    score: float | None = None


def _exact_match(name: str, table: ColorTable) -> tuple[str, tuple[str, ...]] | None:
    for key, colors in table:
        if normalize(key) == name:
            return key, colors
    return None


def _best_partial_match(
    name: str,
    config: ResolutionConfig,
) -> tuple[str, tuple[str, ...], float] | None:
    best_key = ""
    best_colors: tuple[str, ...] = ()
    best_score = 0.0
    for key, colors in config.phrases:
        score = similarity(
            name,
            normalize(key),
            partial_credit=config.partial_credit,
            min_token_length=config.min_token_length,
        )
        # strictly greater: on ties the earlier entry stays
        if score > best_score:
            best_key, best_colors, best_score = key, colors, score

    if best_score > config.similarity_threshold:
        return best_key, best_colors, best_score
    return None


def _first_contained(name: str, table: ColorTable) -> tuple[str, tuple[str, ...]] | None:
    for key, colors in table:
        if normalize(key) in name:
            return key, colors
    return None


def resolve(raw_name: Any, config: ResolutionConfig = DEFAULT_RESOLUTION_CONFIG) -> ColorResolution:
    """Run the resolution cascade and report which tier answered."""

    name = normalize(raw_name)
    # Only an absent or empty name is missing; blank names run the cascade.
    if not isinstance(raw_name, str) or not raw_name:
        resolution = ColorResolution(config.baseline_colors, ResolutionTier.MISSING_NAME)
    elif normalize(config.plug_marker) in name:
        resolution = ColorResolution(
            config.plug_colors,
            ResolutionTier.PLUG_OVERRIDE,
            matched_key=config.plug_marker,
        )
    else:
        resolution = _resolve_named(name, config)

    logger.debug(
        "Resolved %r via %s (key=%r, score=%s) -> %s",
        raw_name,
        resolution.tier.value,
        resolution.matched_key,
        resolution.score,
        list(resolution.colors),
    )
    return resolution


def _resolve_named(name: str, config: ResolutionConfig) -> ColorResolution:
    exact = _exact_match(name, config.phrases)
    if exact:
        return ColorResolution(exact[1], ResolutionTier.EXACT, matched_key=exact[0], score=1.0)

    partial = _best_partial_match(name, config)
    if partial:
        key, colors, score = partial
        return ColorResolution(colors, ResolutionTier.PARTIAL, matched_key=key, score=score)

    keyword = _first_contained(name, config.keywords)
    if keyword:
        return ColorResolution(keyword[1], ResolutionTier.KEYWORD, matched_key=keyword[0])

    product_type = _first_contained(name, config.types)
    if product_type:
        return ColorResolution(product_type[1], ResolutionTier.TYPE, matched_key=product_type[0])

    return ColorResolution(config.default_colors, ResolutionTier.DEFAULT)


def resolve_colors(raw_name: Any, config: ResolutionConfig = DEFAULT_RESOLUTION_CONFIG) -> list[str]:
    """Return the ordered colours to offer for ``raw_name``.

    The list is never empty; callers render it in the returned order.
    """

    return list(resolve(raw_name, config).colors)
