"""
Thin async HTTP client for the remote product catalog (FakeStore API).

Transport failures (connect errors, timeouts) propagate as httpx
exceptions so the caller can retry them; a 404 becomes CatalogNotFound.
"""
from typing import Any, Optional
from urllib.parse import quote

import httpx
import structlog

from shared.config import settings
from shared.errors import InternalError

logger = structlog.get_logger(__name__)


class CatalogNotFound(Exception):
    pass


class FakeStoreClient:

    def __init__(self, http_client: httpx.AsyncClient):
        self.http = http_client

    @classmethod
    def from_settings(cls) -> "FakeStoreClient":
        http_client = httpx.AsyncClient(
            base_url=settings.FAKESTORE_BASE_URL,
            timeout=httpx.Timeout(settings.CATALOG_TIMEOUT_SECONDS),
        )
        return cls(http_client)

    async def aclose(self) -> None:
        await self.http.aclose()

    async def _get(self, path: str) -> Optional[Any]:
        resp = await self.http.get(path)
        if resp.status_code == 404:
            raise CatalogNotFound(path)
        if resp.is_error:
            logger.error("catalog_error_response", path=path, status=resp.status_code)
            raise InternalError()
        if not resp.content.strip():
            return None
        return resp.json()

    async def get_all_products(self) -> list[dict]:
        return await self._get("/products") or []

    async def get_product_by_id(self, product_id: int) -> Optional[dict]:
        return await self._get(f"/products/{product_id}")

    async def get_categories(self) -> list[str]:
        return await self._get("/products/categories") or []

    async def get_products_by_category(self, category: str) -> Optional[list[dict]]:
        return await self._get(f"/products/category/{quote(category, safe='')}")
