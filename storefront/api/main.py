"""FastAPI entrypoint and HTTP routes."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Query

from storefront.catalog import ResolutionConfig, resolve
from storefront.config.settings import get_settings
from storefront.metrics.prometheus_exporter import color_resolutions_total
from storefront.services.context import resolution_config_for


def create_app(config: ResolutionConfig | None = None) -> FastAPI:
    """Initialise the FastAPI application."""

    settings = get_settings()
    resolution_config = config or resolution_config_for(settings)
    app = FastAPI(
        title="Storefront API",
        version="0.1.0",
        docs_url="/docs" if settings.environment != "prod" else None,
        redoc_url="/redoc" if settings.environment != "prod" else None,
    )

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple health endpoint used for readiness probes."""

        return {"status": "ok"}

    @app.get("/colors", tags=["catalog"])
    async def product_colors(name: str = Query(default="")) -> dict[str, Any]:
        """Resolve the selectable colours for a product name."""

        resolution = resolve(name, resolution_config)
        color_resolutions_total.labels(tier=resolution.tier.value).inc()
        return {"colors": list(resolution.colors), "tier": resolution.tier.value}

    return app


app = create_app()
