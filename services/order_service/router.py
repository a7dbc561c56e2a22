from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db

from .pricing import FixedPriceSource, PriceSource
from .schemas import CreateOrderRequest, OrderResponse
from .service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])
public_router = APIRouter()  # For any public endpoints (e.g. health check)

_default_price_source = FixedPriceSource()


def get_price_source() -> PriceSource:
    return _default_price_source


def get_order_service(
    db: AsyncSession = Depends(get_db),
    price_source: PriceSource = Depends(get_price_source),
) -> OrderService:
    return OrderService(db, price_source)


@public_router.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "order", "status": "running"}


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(payload: CreateOrderRequest, service: OrderService = Depends(get_order_service)):
    return await service.create_order(payload)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: int, service: OrderService = Depends(get_order_service)):
    return await service.get_order_by_id(order_id)
