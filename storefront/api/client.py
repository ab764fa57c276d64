"""Async wrapper around the storefront REST backend."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Mapping

import httpx

from storefront.config.settings import Settings
from storefront.metrics.prometheus_exporter import request_errors_total

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], "str | None"]
UnauthorizedHook = Callable[[], Any]


class StorefrontRequestError(RuntimeError):
    """Raised when the backend cannot be reached or answers with an error status."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        *,
        payload: Any = None,
        timed_out: bool = False,
    ) -> None:
        self.status_code = status_code
        self.payload = payload
        self.timed_out = timed_out
        super().__init__(message)

    @property
    def backend_message(self) -> str | None:
        """Return the ``message`` field of a JSON error body, if any."""

        if isinstance(self.payload, Mapping):
            message = self.payload.get("message")
            if message:
                return str(message)
        return None


class StorefrontClient:
    """Sends JSON requests to the backend and attaches the session token."""

    def __init__(
        self,
        settings: Settings,
        *,
        token_provider: TokenProvider | None = None,
        on_unauthorized: UnauthorizedHook | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._token_provider = token_provider
        self._on_unauthorized = on_unauthorized
        self._client = httpx.AsyncClient(
            base_url=settings.api_url.rstrip("/"),
            timeout=settings.request_timeout,
            transport=transport,
        )

    def set_token_provider(self, provider: TokenProvider | None) -> None:
        self._token_provider = provider

    def set_unauthorized_hook(self, hook: UnauthorizedHook | None) -> None:
        self._on_unauthorized = hook

    async def close(self) -> None:
        """Close the underlying HTTP client."""

        await self._client.aclose()

    def _auth_headers(self) -> dict[str, str]:
        token = self._token_provider() if self._token_provider else None
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    async def request_json(
        self,
        method: str,
        endpoint: str,
        *,
        json_body: Any = None,
        params: Mapping[str, Any] | None = None,
        files: Iterable[tuple[str, tuple[str, bytes, str]]] | None = None,
    ) -> Any:
        """Perform a request and return the decoded JSON body (``None`` if empty)."""

        try:
            response = await self._client.request(
                method,
                endpoint,
                json=json_body,
                params=params,
                files=files,
                headers=self._auth_headers(),
            )
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            request_errors_total.labels(status="timeout").inc()
            raise StorefrontRequestError(
                f"Backend timed out on {method} {endpoint}.",
                timed_out=True,
            ) from exc
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            request_errors_total.labels(status=str(status_code)).inc()
            if status_code == 401:
                logger.warning("Backend rejected credentials on %s %s; clearing session.", method, endpoint)
                await self._notify_unauthorized()
            raise StorefrontRequestError(
                f"Backend returned {status_code} on {method} {endpoint}: {exc.response.text}",
                status_code=status_code,
                payload=_decode_body(exc.response),
            ) from exc
        except httpx.TransportError as exc:
            request_errors_total.labels(status="0").inc()
            raise StorefrontRequestError(
                f"Backend unreachable on {method} {endpoint}: {exc}",
                status_code=0,
            ) from exc

        if not response.content:
            return None
        return response.json()

    async def _notify_unauthorized(self) -> None:
        if self._on_unauthorized is None:
            return
        result = self._on_unauthorized()
        if hasattr(result, "__await__"):
            await result

    async def ping(self) -> bool:
        """Return ``True`` if the products endpoint answers without a server error."""

        response = await self._client.get("/productos", headers=self._auth_headers())
        return response.status_code < 500


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None
