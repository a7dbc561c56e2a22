import httpx
import pytest

from shared.config import settings
from shared.errors import NotFoundError, UpstreamUnavailableError
from shared.resilience import QueryCache, RetryPolicy

from services.product_service.client import FakeStoreClient
from services.product_service.service import ProductService


# --- service layer ---

async def test_product_by_id_is_cached(product_service, fake_catalog):
    first = await product_service.get_product_by_id(1)
    second = await product_service.get_product_by_id(1)

    assert first == second
    assert first["title"] == "Backpack"
    assert fake_catalog.calls_to("/products/1") == 1


async def test_each_product_id_has_its_own_cache_slot(product_service, fake_catalog):
    await product_service.get_product_by_id(1)
    await product_service.get_product_by_id(2)
    await product_service.get_product_by_id(1)

    assert fake_catalog.calls_to("/products/1") == 1
    assert fake_catalog.calls_to("/products/2") == 1


async def test_all_products_and_categories_are_cached(product_service, fake_catalog):
    products = await product_service.get_all_products()
    await product_service.get_all_products()
    categories = await product_service.get_categories()
    await product_service.get_categories()

    assert len(products) == 3
    assert categories == ["jewelery", "men's clothing"]
    assert fake_catalog.calls_to("/products") == 1
    assert fake_catalog.calls_to("/products/categories") == 1


async def test_products_by_category_are_cached_per_category(product_service, fake_catalog):
    jewelery = await product_service.get_products_by_category("jewelery")
    await product_service.get_products_by_category("jewelery")

    assert [p["id"] for p in jewelery] == [5]
    assert fake_catalog.calls_to("/products/category/jewelery") == 1


async def test_missing_product_404_is_not_found_and_not_retried(product_service, fake_catalog):
    with pytest.raises(NotFoundError, match="Product not found with id: 404"):
        await product_service.get_product_by_id(404)

    assert fake_catalog.calls_to("/products/404") == 1


async def test_missing_product_empty_body_is_not_found(product_service, fake_catalog):
    with pytest.raises(NotFoundError, match="Product not found with id: 77"):
        await product_service.get_product_by_id(77)

    assert fake_catalog.calls_to("/products/77") == 1


async def test_not_found_answers_are_not_cached(product_service, fake_catalog):
    with pytest.raises(NotFoundError):
        await product_service.get_product_by_id(77)
    with pytest.raises(NotFoundError):
        await product_service.get_product_by_id(77)

    assert fake_catalog.calls_to("/products/77") == 2


async def test_unknown_category_is_not_found(product_service):
    with pytest.raises(NotFoundError, match="Category not found: missing"):
        await product_service.get_products_by_category("missing")


async def test_empty_category_is_not_found(product_service):
    with pytest.raises(NotFoundError, match="No products found in category: electronics"):
        await product_service.get_products_by_category("electronics")


async def test_transient_failure_is_retried_then_succeeds(product_service, fake_catalog):
    fake_catalog.transport_failures = 2

    product = await product_service.get_product_by_id(2)

    assert product["id"] == 2
    assert fake_catalog.calls_to("/products/2") == 3


async def test_retry_budget_exhausted_raises_upstream_unavailable(product_service, fake_catalog):
    fake_catalog.transport_failures = 10

    with pytest.raises(UpstreamUnavailableError):
        await product_service.get_all_products()

    assert fake_catalog.calls_to("/products") == 3


async def test_failed_fetch_leaves_cache_empty(product_service, fake_catalog):
    fake_catalog.transport_failures = 3
    with pytest.raises(UpstreamUnavailableError):
        await product_service.get_categories()

    categories = await product_service.get_categories()

    assert categories
    assert fake_catalog.calls_to("/products/categories") == 4


async def test_clear_cache_forces_refetch(product_service, fake_catalog):
    await product_service.get_product_by_id(1)
    product_service.clear_cache()
    await product_service.get_product_by_id(1)

    assert fake_catalog.calls_to("/products/1") == 2


# --- HTTP layer ---

async def test_list_products(product_client):
    resp = await product_client.get("/products")

    assert resp.status_code == 200
    assert [p["id"] for p in resp.json()] == [1, 2, 5]


async def test_get_product(product_client):
    resp = await product_client.get("/products/5")

    assert resp.status_code == 200
    body = resp.json()
    assert body["title"] == "Bracelet"
    assert body["category"] == "jewelery"
    assert body["rating"]["count"] == 400


async def test_get_categories(product_client):
    resp = await product_client.get("/products/categories")

    assert resp.status_code == 200
    assert resp.json() == ["jewelery", "men's clothing"]


async def test_get_products_by_category(product_client):
    resp = await product_client.get("/products/category/jewelery")

    assert resp.status_code == 200
    assert [p["id"] for p in resp.json()] == [5]


async def test_get_missing_product_is_404(product_client):
    resp = await product_client.get("/products/404")

    assert resp.status_code == 404
    assert resp.json()["message"] == "Product not found with id: 404"


async def test_exhausted_retries_is_503(product_client, fake_catalog):
    fake_catalog.transport_failures = 3

    resp = await product_client.get("/products/1")

    assert resp.status_code == 503
    body = resp.json()
    assert body["error"] == "Service Unavailable"
    assert body["message"] == "Service temporarily unavailable. Please try again later."


async def test_catalog_server_error_is_generic_500(product_client, fake_catalog):
    fake_catalog.error_status = 502

    resp = await product_client.get("/products")

    assert resp.status_code == 500
    assert resp.json()["message"] == "An unexpected error occurred"
    assert fake_catalog.calls_to("/products") == 1


async def test_cache_eviction_requires_internal_key(product_client, fake_catalog):
    await product_client.get("/products/1")

    denied = await product_client.delete("/products/cache")
    allowed = await product_client.delete("/products/cache", headers={"X-Internal-API-Key": settings.INTERNAL_API_KEY})
    await product_client.get("/products/1")

    assert denied.status_code == 403
    assert allowed.status_code == 204
    assert fake_catalog.calls_to("/products/1") == 2


async def test_service_builds_default_cache_and_retry_policy():
    async with httpx.AsyncClient(base_url="https://catalog.test") as http_client:
        service = ProductService(FakeStoreClient(http_client))

        assert isinstance(service.cache, QueryCache)
        assert len(service.cache) == 0
        assert isinstance(service.retry_policy, RetryPolicy)
        assert service.retry_policy.max_attempts == settings.CATALOG_MAX_ATTEMPTS
