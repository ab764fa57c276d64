"""Catalogue access and per-product colour lookup."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from pydantic import ValidationError

from storefront.api.client import StorefrontClient, StorefrontRequestError
from storefront.catalog import (
    DEFAULT_RESOLUTION_CONFIG,
    ColorResolution,
    ResolutionConfig,
    resolve,
)
from storefront.metrics.prometheus_exporter import color_resolutions_total
from storefront.models import Category, Product

logger = logging.getLogger(__name__)


class CatalogService:
    """Facade over the ``/productos`` and ``/categorias`` endpoints."""

    def __init__(
        self,
        client: StorefrontClient,
        config: ResolutionConfig = DEFAULT_RESOLUTION_CONFIG,
        *,
        featured_limit: int = 8,
    ) -> None:
        self._client = client
        self._config = config
        self._featured_limit = featured_limit
        self._selected_product: Product | None = None

    @property
    def resolution_config(self) -> ResolutionConfig:
        return self._config

    async def get_products(self) -> list[Product]:
        """Return every product, or an empty list if the backend fails."""

        try:
            payload = await self._client.request_json("GET", "/productos")
        except StorefrontRequestError as exc:
            logger.error("Failed to fetch products: %s", exc)
            return []
        return _as_products(payload)

    async def search_products(self, term: str) -> list[Product]:
        """Search products by free text; blank terms return nothing."""

        query = (term or "").strip()
        if not query:
            logger.warning("Ignoring product search with an empty term")
            return []

        try:
            payload = await self._client.request_json("GET", "/productos/search", params={"q": query})
        except StorefrontRequestError as exc:
            logger.error("Product search for %r failed (status=%s): %s", query, exc.status_code, exc)
            return []
        products = _as_products(payload)
        logger.info("Search %r returned %d products", query, len(products))
        return products

    async def get_product(self, product_id: int) -> Product:
        """Return a single product; backend errors propagate."""

        payload = await self._client.request_json("GET", f"/productos/{product_id}")
        return Product.model_validate(payload)

    async def get_products_by_category(self, category_id: int) -> list[Product]:
        try:
            payload = await self._client.request_json("GET", f"/productos/categoria/{category_id}")
        except StorefrontRequestError as exc:
            logger.error("Failed to fetch products of category %s: %s", category_id, exc)
            return []
        return _as_products(payload)

    async def get_category(self, category_id: int) -> Category:
        payload = await self._client.request_json("GET", f"/categorias/{category_id}")
        return Category.model_validate(payload)

    async def get_featured_products(self) -> list[Product]:
        """Return the first products of the catalogue for the home page."""

        products = await self.get_products()
        return products[: self._featured_limit]

    async def add_product(self, product: Mapping[str, Any]) -> Product:
        logger.info("Adding product %s", product.get("nombre"))
        payload = await self._client.request_json("POST", "/productos", json_body=dict(product))
        return Product.model_validate(payload)

    async def update_product(self, product_id: int, product: Mapping[str, Any]) -> Product:
        logger.info("Updating product %s", product_id)
        payload = await self._client.request_json("PUT", f"/productos/{product_id}", json_body=dict(product))
        return Product.model_validate(payload)

    async def delete_product(self, product_id: int) -> Any:
        logger.info("Deleting product %s", product_id)
        return await self._client.request_json("DELETE", f"/productos/{product_id}")

    async def upload_product_images(
        self,
        product_id: int,
        images: Sequence[tuple[str, bytes, str]],
    ) -> Any:
        """Upload ``(filename, content, content_type)`` tuples as ``images`` parts."""

        files = [("images", image) for image in images]
        logger.info("Uploading %d images for product %s", len(files), product_id)
        return await self._client.request_json("POST", f"/productos/{product_id}/images", files=files)

    def colors_for_name(self, product_name: str | None) -> ColorResolution:
        """Resolve the selectable colours for an already fetched product name."""

        resolution = resolve(product_name, self._config)
        color_resolutions_total.labels(tier=resolution.tier.value).inc()
        return resolution

    async def get_product_colors(self, product_id: int) -> list[str]:
        """
        Return the colours to offer for a product.

        When the product cannot be fetched the resolver is not consulted and
        the baseline colours are returned instead.
        """

        try:
            product = await self.get_product(product_id)
        except (StorefrontRequestError, ValidationError) as exc:
            logger.error("Cannot fetch product %s for colours: %s", product_id, exc)
            return list(self._config.baseline_colors)

        return list(self.colors_for_name(product.nombre).colors)

    @property
    def selected_product(self) -> Product | None:
        return self._selected_product

    def select_product_for_popup(self, product: Product) -> None:
        logger.debug("Product %s selected for popup", product.nombre)
        self._selected_product = product

    def clear_selected_product(self) -> None:
        self._selected_product = None

    def close_product_popup(self) -> None:
        self.clear_selected_product()


def _as_products(payload: Any) -> list[Product]:
    if not isinstance(payload, list):
        return []
    return [Product.model_validate(item) for item in payload]
