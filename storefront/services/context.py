"""Wiring of the storefront services around a single backend client."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import httpx

from storefront.api.client import StorefrontClient
from storefront.catalog import DEFAULT_RESOLUTION_CONFIG, ResolutionConfig, load_resolution_config
from storefront.config.settings import Settings
from storefront.services.auth import AuthService
from storefront.services.catalog import CatalogService
from storefront.services.orders import OrderService
from storefront.storage import SessionStore


def resolution_config_for(settings: Settings) -> ResolutionConfig:
    """Return the colour reference data configured for this deployment."""

    if settings.color_reference_path:
        return load_resolution_config(settings.color_reference_path)
    return DEFAULT_RESOLUTION_CONFIG


@dataclass(slots=True)
class StorefrontContext:
    """Container for objects shared by the storefront front-ends."""

    client: StorefrontClient
    auth: AuthService
    catalog: CatalogService
    orders: OrderService

    async def close(self) -> None:
        await self.client.close()


async def create_context(
    settings: Settings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> StorefrontContext:
    """Build the services and restore any stored session."""

    client = StorefrontClient(settings, transport=transport)
    auth = AuthService(client, SessionStore(Path(settings.session_path)))
    await auth.restore()
    catalog = CatalogService(
        client,
        resolution_config_for(settings),
        featured_limit=settings.featured_limit,
    )
    return StorefrontContext(
        client=client,
        auth=auth,
        catalog=catalog,
        orders=OrderService(client, auth),
    )
