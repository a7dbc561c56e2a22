from typing import Optional

import structlog

from shared.config import settings
from shared.errors import NotFoundError
from shared.resilience import QueryCache, RetryPolicy

from .client import CatalogNotFound, FakeStoreClient

logger = structlog.get_logger(__name__)

# Cache regions
ALL_PRODUCTS = "products"
PRODUCT = "product"
CATEGORIES = "categories"
PRODUCTS_BY_CATEGORY = "productsByCategory"


class ProductService:
    """
    Read-only proxy over the remote catalog.

    Successful answers are memoized per query key until clear_cache() or a
    restart; transport failures are retried by the retry policy, not-found
    answers are not.
    """

    def __init__(self, client: FakeStoreClient, cache: Optional[QueryCache] = None,
                 retry_policy: Optional[RetryPolicy] = None):
        self.client = client
        self.cache = cache if cache is not None else QueryCache()
        self.retry_policy = retry_policy or RetryPolicy(
            max_attempts=settings.CATALOG_MAX_ATTEMPTS,
            backoff_seconds=settings.CATALOG_RETRY_BACKOFF_SECONDS,
        )

    async def get_all_products(self) -> list[dict]:
        return await self.cache.get_or_load(
            ALL_PRODUCTS, None,
            lambda: self.retry_policy.call("get_all_products", self.client.get_all_products),
        )

    async def get_product_by_id(self, product_id: int) -> dict:
        return await self.cache.get_or_load(
            PRODUCT, product_id,
            lambda: self.retry_policy.call("get_product_by_id", self._fetch_product, product_id),
        )

    async def get_categories(self) -> list[str]:
        return await self.cache.get_or_load(
            CATEGORIES, None,
            lambda: self.retry_policy.call("get_categories", self.client.get_categories),
        )

    async def get_products_by_category(self, category: str) -> list[dict]:
        return await self.cache.get_or_load(
            PRODUCTS_BY_CATEGORY, category,
            lambda: self.retry_policy.call("get_products_by_category", self._fetch_category, category),
        )

    def clear_cache(self) -> None:
        self.cache.clear()
        logger.info("catalog_cache_cleared")

    async def _fetch_product(self, product_id: int) -> dict:
        try:
            product = await self.client.get_product_by_id(product_id)
        except CatalogNotFound:
            raise NotFoundError(f"Product not found with id: {product_id}")
        if not product:
            raise NotFoundError(f"Product not found with id: {product_id}")
        return product

    async def _fetch_category(self, category: str) -> list[dict]:
        try:
            products = await self.client.get_products_by_category(category)
        except CatalogNotFound:
            raise NotFoundError(f"Category not found: {category}")
        if not products:
            raise NotFoundError(f"No products found in category: {category}")
        return products
