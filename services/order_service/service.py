from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import NotFoundError
from shared.observability.metrics import ecomm_order_amount, ecomm_orders_created_total
from shared.validation import Violations

from .models import Order, OrderItem
from .pricing import PriceSource
from .repository import OrderRepository
from .schemas import CreateOrderRequest

logger = structlog.get_logger(__name__)

CENT = Decimal("0.01")


def validate_create_order(data: CreateOrderRequest) -> None:
    violations = Violations()
    violations.require_text("customerId", data.customer_id, "Customer ID is required")
    violations.require_non_empty("items", data.items, "Order must contain at least one item")
    for index, item in enumerate(data.items or []):
        violations.require(f"items[{index}].productId", item.product_id, "Product ID is required")
        violations.require(f"items[{index}].quantity", item.quantity, "Quantity is required")
        violations.require_positive(f"items[{index}].quantity", item.quantity, "Quantity must be greater than zero")
    violations.raise_if_any()


class OrderService:

    def __init__(self, db: AsyncSession, price_source: PriceSource):
        self.db = db
        self.price_source = price_source

    async def create_order(self, data: CreateOrderRequest) -> Order:
        validate_create_order(data)

        items = []
        for req in data.items:
            unit_price = await self.price_source.unit_price(req.product_id)
            items.append(
                OrderItem(
                    product_id=req.product_id,
                    quantity=req.quantity,
                    unit_price=Decimal(unit_price).quantize(CENT, rounding=ROUND_HALF_UP),
                )
            )

        # Stored prices have two decimals, so the total is summed from the rounded values
        total = sum((item.unit_price * item.quantity for item in items), Decimal("0"))
        order = Order(
            customer_id=data.customer_id.strip(),
            created_at=datetime.now(timezone.utc),
            total_amount=total,
            items=items,
        )
        order = await OrderRepository.create_order(self.db, order)

        ecomm_orders_created_total.inc()
        ecomm_order_amount.observe(float(total))
        logger.info("order_created", order_id=order.id, items=len(items), total_amount=str(total))
        return order

    async def get_order_by_id(self, order_id: int) -> Order:
        order = await OrderRepository.get_order(self.db, order_id)
        if not order:
            raise NotFoundError(f"Order not found with id: {order_id}")
        return order
