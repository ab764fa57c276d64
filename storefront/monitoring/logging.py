"""Root logger setup for the storefront client and its scripts."""

from __future__ import annotations

import logging

from storefront.config.settings import get_settings


def configure_logging() -> None:
    """Apply ``LOG_LEVEL`` and the pipe-separated line format to the root logger.

    Resolver tier tracing is emitted at DEBUG; failed backend calls at ERROR.
    """

    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
