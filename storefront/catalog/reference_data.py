"""Reference dictionaries used to resolve product colours.

The tables are ordered ``(key, colours)`` pairs: the resolver walks them in
the authored order, and earlier entries win ties. Keys may be written with
or without accents and in any case, they are normalised at comparison time.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping

ColorTable = tuple[tuple[str, tuple[str, ...]], ...]


class ReferenceDataError(ValueError):
    """Raised when a reference document cannot be turned into a configuration."""


@dataclass(frozen=True, slots=True)
class ResolutionConfig:
    """Immutable bundle of the dictionaries and fallbacks the resolver reads."""

    phrases: ColorTable
    keywords: ColorTable
    types: ColorTable
    default_colors: tuple[str, ...] = ("Estándar",)
    baseline_colors: tuple[str, ...] = ("negro", "azul", "blanco")
    plug_marker: str = "plug"
    plug_colors: tuple[str, ...] = ("negro", "azul", "amarillo", "blanco", "verde", "morado")
    similarity_threshold: float = 0.6
    partial_credit: float = 0.7
    min_token_length: int = 3

    def __post_init__(self) -> None:
        for field_name in ("default_colors", "baseline_colors", "plug_colors"):
            if not getattr(self, field_name):
                raise ReferenceDataError(f"{field_name}: colour list must not be empty.")


def _table(*entries: tuple[str, Iterable[str]]) -> ColorTable:
    return tuple((key, tuple(colors)) for key, colors in entries)


_HEART_RING = ("dorado", "negro", "plateado")
_HINGED_RING = ("azul", "cobre", "dorado", "negro", "multicolor")
_NOSTRIL = ("azul", "multicolor", "negro")
_FLOWER_BANANA = ("azul", "celeste", "rojo", "rosa", "verde")
_GEM_BANANA = ("azul", "morado", "transparente", "rojo", "verde", "trebol")
_NAVEL_BANANA = ("dorado", "plateado", "multicolor")
_ARROW = ("dorado", "negro", "plateado")
_LONG_BARBELL = ("azul", "cobre", "dorado", "mulicolor")
_LABRET_SHAPES = ("dorado", "negro", "plateado", "rosa")
_PLUG_SIMPLE = ("amarillo", "azul", "morado", "negro", "blanco", "verde")
_PLUG_SILICONE = ("amarillo", "azul", "beige", "caoba", "morado", "rojo", "verde")
_ACRYLIC = ("azul", "blanco", "rojo", "negro", "amarillo")
_METAL = ("azul", "cobre", "dorado")
_GOLDSMITH = ("dorado", "plateado")
_SILICONE = ("azul", "blanco", "rojo", "rosa", "negro", "verde")

# Colour tokens are opaque: "mulicolor" and "cobrejpg" match asset folder
# names in the catalogue and must not be corrected here.
PRODUCT_COLORS: ColorTable = _table(
    # rings
    ("anillo con corazón", _HEART_RING),
    ("anillo corazón", _HEART_RING),
    ("anillo con corazon", _HEART_RING),
    ("anillo corazon", _HEART_RING),
    ("anillo fino", _HINGED_RING),
    ("anillo con bisagra", _HINGED_RING),
    ("anillo bisagra", _HINGED_RING),
    ("aro para nostril", _NOSTRIL),
    ("aro nostril", _NOSTRIL),
    ("segment ring", ("azul", "dorado", "multicolor", "rosa")),
    # bananas
    ("banana con rosa", _FLOWER_BANANA),
    ("banana flor", _FLOWER_BANANA),
    ("banana con flor", _FLOWER_BANANA),
    ("banana con gema", _GEM_BANANA),
    ("banana gema", _GEM_BANANA),
    ("banana simple", _NAVEL_BANANA),
    ("banana para el ombligo", _NAVEL_BANANA),
    ("banana para ombligo", _NAVEL_BANANA),
    # barbells
    ("barbell con alas", ("plateado",)),
    ("barbells alas", ("plateado",)),
    ("barbell alas", ("plateado",)),
    ("barbell flecha", _ARROW),
    ("barbells flecha", _ARROW),
    ("barbell con flecha", _ARROW),
    ("barbell largo", _LONG_BARBELL),
    ("barbells largo", _LONG_BARBELL),
    ("circular barbell con flecha", ("dorado", "cobrejpg", "negro")),
    ("circular barbell flecha", ("dorado", "cobrejpg", "negro")),
    ("circular barbell con piedra", ("cristal", "negro")),
    ("circular barbell piedra", ("cristal", "negro")),
    # labrets
    ("labret corazón", _LABRET_SHAPES),
    ("labret con corazón", _LABRET_SHAPES),
    ("labret corazon", _LABRET_SHAPES),
    ("labret simple", ("cobre", "dorado", "negro", "multicolor")),
    ("labret triángulo", _LABRET_SHAPES),
    ("labret triangulo", _LABRET_SHAPES),
    ("labret con triángulo", _LABRET_SHAPES),
    ("labret triangulos", _LABRET_SHAPES),
    # plugs
    ("plug simple", _PLUG_SIMPLE),
    ("plug", _PLUG_SIMPLE),
    ("plug doble", _PLUG_SILICONE),
    ("plug dobles", _PLUG_SILICONE),
    ("plug de silicona", _PLUG_SILICONE),
    ("plug silicona", _PLUG_SILICONE),
    # stretchers and expanders
    ("set de dilatadores", ("blanco", "rosa", "plateado", "violeta")),
    ("dilatadores", ("negro", "rojo")),
    ("dilatador", ("negro", "rojo")),
    ("expander duo", ("celeste", "dorado", "verde")),
    ("expander con duo", ("celeste", "dorado", "verde")),
    ("expander medusa", ("negro", "verde")),
    ("expander con medusa", ("negro", "verde")),
    # tunnels, by material
    ("túnel de acrílico", _ACRYLIC),
    ("tunel de acrílico", _ACRYLIC),
    ("túnel acrílico", _ACRYLIC),
    ("tunel acrilico", _ACRYLIC),
    ("túnel de metal", _METAL),
    ("tunel de metal", _METAL),
    ("túnel metal", _METAL),
    ("tunel metal", _METAL),
    ("túnel orfebre", _GOLDSMITH),
    ("tunel orfebre", _GOLDSMITH),
    ("túnel mandala", _GOLDSMITH),
    ("tunel mandala", _GOLDSMITH),
    ("túnel de silicona", _SILICONE),
    ("tunel de silicona", _SILICONE),
    ("túnel silicona", _SILICONE),
    ("tunel silicona", _SILICONE),
    # generic
    ("túnel simple", _SILICONE),
    ("tunel simple", _SILICONE),
    ("túnel", _SILICONE),
    ("tunel", _SILICONE),
    ("piercing", _HINGED_RING),
)

KEYWORD_COLORS: ColorTable = _table(
    ("bisagra", _HINGED_RING),
    ("corazon", _LABRET_SHAPES),
    ("triangulo", _LABRET_SHAPES),
    ("flecha", _ARROW),
    ("alas", ("plateado",)),
    ("gema", ("azul", "morado", "transparente", "rojo", "verde")),
    ("acrilico", _ACRYLIC),
    ("acrílico", _ACRYLIC),
    ("silicona", _SILICONE),
    ("metal", _METAL),
    ("orfebre", _GOLDSMITH),
    ("mandala", _GOLDSMITH),
    ("nostril", _NOSTRIL),
    ("ombligo", _NAVEL_BANANA),
    ("piedra", ("cristal", "negro")),
    ("duo", ("celeste", "dorado", "verde")),
    ("medusa", ("negro", "verde")),
    ("rosa", _FLOWER_BANANA),
    ("flor", _FLOWER_BANANA),
)

TYPE_COLORS: ColorTable = _table(
    ("anillo", _HINGED_RING),
    ("aro", _NOSTRIL),
    ("banana", ("azul", "dorado", "plateado", "verde", "rojo")),
    ("barbell", ("azul", "cobre", "dorado", "negro", "plateado")),
    ("labret", ("cobre", "dorado", "negro", "plateado", "rosa")),
    ("plug", ("amarillo", "azul", "negro", "blanco", "verde")),
    ("tunel", ("azul", "blanco", "dorado", "plateado", "rojo", "verde")),
    ("túnel", ("azul", "blanco", "dorado", "plateado", "rojo", "verde")),
    ("expander", ("celeste", "dorado", "negro", "verde")),
    ("dilatador", ("blanco", "negro", "rosa", "rojo", "plateado", "violeta")),
    ("piercing", _HINGED_RING),
)

DEFAULT_RESOLUTION_CONFIG = ResolutionConfig(
    phrases=PRODUCT_COLORS,
    keywords=KEYWORD_COLORS,
    types=TYPE_COLORS,
)

_TABLE_FIELDS = ("phrases", "keywords", "types")
_COLOR_FIELDS = ("default_colors", "baseline_colors", "plug_colors")
_NUMBER_FIELDS = ("similarity_threshold", "partial_credit")


def _parse_colors(value: Any, where: str) -> tuple[str, ...]:
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ReferenceDataError(f"{where}: expected a list of colours, got {value!r}.")
    colors = tuple(str(color) for color in value)
    if not colors:
        raise ReferenceDataError(f"{where}: colour list must not be empty.")
    return colors


def _parse_table(value: Any, name: str) -> ColorTable:
    if isinstance(value, Mapping):
        items: Iterable[Any] = value.items()
    elif isinstance(value, list):
        items = value
    else:
        raise ReferenceDataError(f"{name}: expected a list of [key, colours] pairs or an object.")

    entries: list[tuple[str, tuple[str, ...]]] = []
    for index, item in enumerate(items):
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            raise ReferenceDataError(f"{name}[{index}]: expected a [key, colours] pair.")
        key, colors = item
        if not isinstance(key, str) or not key.strip():
            raise ReferenceDataError(f"{name}[{index}]: key must be a non-empty string.")
        entries.append((key, _parse_colors(colors, f"{name}[{key!r}]")))
    return tuple(entries)


def config_from_mapping(
    payload: Mapping[str, Any],
    base: ResolutionConfig = DEFAULT_RESOLUTION_CONFIG,
) -> ResolutionConfig:
    """Build a configuration from a decoded document, filling gaps from ``base``."""

    if not isinstance(payload, Mapping):
        raise ReferenceDataError("Reference document must be a JSON object.")

    values: dict[str, Any] = {
        "phrases": base.phrases,
        "keywords": base.keywords,
        "types": base.types,
        "default_colors": base.default_colors,
        "baseline_colors": base.baseline_colors,
        "plug_marker": base.plug_marker,
        "plug_colors": base.plug_colors,
        "similarity_threshold": base.similarity_threshold,
        "partial_credit": base.partial_credit,
        "min_token_length": base.min_token_length,
    }
    for name in _TABLE_FIELDS:
        if name in payload:
            values[name] = _parse_table(payload[name], name)
    for name in _COLOR_FIELDS:
        if name in payload:
            values[name] = _parse_colors(payload[name], name)
    for name in _NUMBER_FIELDS:
        if name in payload:
            number = payload[name]
            if isinstance(number, bool) or not isinstance(number, (int, float)):
                raise ReferenceDataError(f"{name}: expected a number, got {number!r}.")
            values[name] = float(number)
    if "min_token_length" in payload:
        length = payload["min_token_length"]
        if isinstance(length, bool) or not isinstance(length, int) or length < 1:
            raise ReferenceDataError(f"min_token_length: expected a positive integer, got {length!r}.")
        values["min_token_length"] = length
    if "plug_marker" in payload:
        marker = payload["plug_marker"]
        if not isinstance(marker, str) or not marker.strip():
            raise ReferenceDataError("plug_marker: expected a non-empty string.")
        values["plug_marker"] = marker

    return ResolutionConfig(**values)


def load_resolution_config(path: str | Path) -> ResolutionConfig:
    """Read a JSON reference document from ``path``."""

    source = Path(path)
    try:
        payload = json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ReferenceDataError(f"{source}: invalid JSON ({exc.msg}).") from exc
    return config_from_mapping(payload)


def dump_resolution_config(config: ResolutionConfig) -> dict[str, Any]:
    """Return a JSON-serialisable document equivalent to ``config``."""

    document: dict[str, Any] = {
        name: [[key, list(colors)] for key, colors in getattr(config, name)]
        for name in _TABLE_FIELDS
    }
    for name in _COLOR_FIELDS:
        document[name] = list(getattr(config, name))
    document["plug_marker"] = config.plug_marker
    for name in _NUMBER_FIELDS:
        document[name] = getattr(config, name)
    document["min_token_length"] = config.min_token_length
    return document
