"""Product colour resolution."""

from .color_resolver import ColorResolution, ResolutionTier, resolve, resolve_colors
from .normalizer import normalize
from .reference_data import (
    DEFAULT_RESOLUTION_CONFIG,
    ReferenceDataError,
    ResolutionConfig,
    load_resolution_config,
)
from .similarity import similarity

__all__ = [
    "ColorResolution",
    "DEFAULT_RESOLUTION_CONFIG",
    "ReferenceDataError",
    "ResolutionConfig",
    "ResolutionTier",
    "load_resolution_config",
    "normalize",
    "resolve",
    "resolve_colors",
    "similarity",
]
