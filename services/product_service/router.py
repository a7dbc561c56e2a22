from typing import Optional

from fastapi import APIRouter, Depends, status

from shared.security.dependencies import verify_internal_api_key

from .client import FakeStoreClient
from .schemas import ProductResponse
from .service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])
public_router = APIRouter()  # For any public endpoints (e.g. health check)

# One service per process: its cache is shared by every request
_product_service: Optional[ProductService] = None


def get_product_service() -> ProductService:
    global _product_service
    if _product_service is None:
        _product_service = ProductService(FakeStoreClient.from_settings())
    return _product_service


async def close_product_service() -> None:
    global _product_service
    if _product_service is not None:
        await _product_service.client.aclose()
        _product_service = None


@public_router.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "product", "status": "running"}


@router.get("", response_model=list[ProductResponse])
async def get_all_products(service: ProductService = Depends(get_product_service)):
    return await service.get_all_products()


# Declared before /{product_id} so "categories" is not parsed as an id
@router.get("/categories", response_model=list[str])
async def get_categories(service: ProductService = Depends(get_product_service)):
    return await service.get_categories()


@router.get("/category/{category}", response_model=list[ProductResponse])
async def get_products_by_category(category: str, service: ProductService = Depends(get_product_service)):
    return await service.get_products_by_category(category)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: int, service: ProductService = Depends(get_product_service)):
    return await service.get_product_by_id(product_id)


@router.delete(
    "/cache",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(verify_internal_api_key)],
    include_in_schema=False,
)
async def clear_cache(service: ProductService = Depends(get_product_service)):
    """Evicts every cached catalog answer. Internal callers only."""
    service.clear_cache()
