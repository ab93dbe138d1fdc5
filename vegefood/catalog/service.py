"""Catalog provider reading static product and category JSON."""
import json
import os
from pathlib import Path
from typing import List, Optional, Union

import httpx
from pydantic import ValidationError

from vegefood.errors import CatalogError
from vegefood.logging import get_logger
from .models import Category, Product

logger = get_logger(__name__)

DEFAULT_CATALOG_SOURCE = str(Path(__file__).parent / "data")

PRODUCTS_FILE = "products.json"
CATEGORIES_FILE = "categories.json"


class CatalogProvider:
    """
    Read-only access to the static catalog.

    `source` is either an http(s) base URL or a local directory holding
    products.json and categories.json. Each query fetches the full
    collection; lookups by id or category are linear scans.
    """

    def __init__(
        self,
        source: Union[str, Path, None] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 5.0,
    ):
        self.source = str(source or os.environ.get("CATALOG_SOURCE", DEFAULT_CATALOG_SOURCE))
        self._transport = transport
        self._timeout = timeout

    @property
    def is_remote(self) -> bool:
        return self.source.startswith(("http://", "https://"))

    async def _fetch(self, filename: str) -> list:
        if self.is_remote:
            url = f"{self.source.rstrip('/')}/{filename}"
            try:
                async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                    response = await client.get(url)
                    response.raise_for_status()
                    data = response.json()
            except (httpx.HTTPError, ValueError) as e:
                logger.error(f"Failed to fetch {url}: {e}")
                raise CatalogError(f"Catalog unavailable: {e}") from e
        else:
            path = Path(self.source) / filename
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as e:
                logger.error(f"Failed to read {path}: {e}")
                raise CatalogError(f"Catalog unavailable: {e}") from e

        if not isinstance(data, list):
            raise CatalogError(f"{filename} must contain a JSON array")
        return data

    async def get_products(self) -> List[Product]:
        data = await self._fetch(PRODUCTS_FILE)
        try:
            return [Product.model_validate(item) for item in data]
        except ValidationError as e:
            raise CatalogError(f"Invalid product data: {e}") from e

    async def get_categories(self) -> List[Category]:
        data = await self._fetch(CATEGORIES_FILE)
        try:
            return [Category.model_validate(item) for item in data]
        except ValidationError as e:
            raise CatalogError(f"Invalid category data: {e}") from e

    async def get_product_by_id(self, product_id: int) -> Optional[Product]:
        products = await self.get_products()
        return next((p for p in products if p.id == product_id), None)

    async def get_products_by_category(self, category: str) -> List[Product]:
        products = await self.get_products()
        return [p for p in products if p.category == category]
