from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from shared.schemas import CamelModel


class OrderItemRequest(CamelModel):
    product_id: Optional[int] = None
    quantity: Optional[int] = None


class CreateOrderRequest(CamelModel):
    customer_id: Optional[str] = None
    items: Optional[List[OrderItemRequest]] = None


class OrderItemResponse(CamelModel):
    product_id: int
    quantity: int
    unit_price: Decimal


class OrderResponse(CamelModel):
    id: int
    customer_id: str
    created_at: datetime
    total_amount: Decimal
    items: List[OrderItemResponse]
