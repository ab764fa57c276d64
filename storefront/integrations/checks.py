"""Connectivity checks for the storefront backend."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable

import httpx

from storefront.api.client import StorefrontClient
from storefront.config.settings import get_settings


@dataclass(slots=True)
class IntegrationCheckResult:
    """Structured result describing the integration check outcome."""

    name: str
    success: bool
    message: str


async def _run_check(
    name: str,
    factory: Callable[[], Awaitable[bool]],
    success_message: str,
) -> IntegrationCheckResult:
    try:
        result = await factory()
    except httpx.HTTPError as exc:
        return IntegrationCheckResult(name=name, success=False, message=str(exc) or type(exc).__name__)

    if result:
        return IntegrationCheckResult(name=name, success=True, message=success_message)
    return IntegrationCheckResult(
        name=name,
        success=False,
        message="Service responded with non-success status.",
    )


async def check_storefront_api() -> IntegrationCheckResult:
    """Ping the storefront backend and return the result."""

    settings = get_settings()
    client = StorefrontClient(settings)

    async def _ping() -> bool:
        try:
            return await client.ping()
        finally:
            await client.close()

    return await _run_check(
        name="Storefront API",
        factory=_ping,
        success_message=f"Backend at {settings.api_url} is reachable.",
    )


async def run_all_checks() -> list[IntegrationCheckResult]:
    """Execute all integration checks concurrently."""

    return list(await asyncio.gather(check_storefront_api()))
