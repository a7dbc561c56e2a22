from decimal import Decimal
from typing import Protocol

from shared.config import settings


class PriceSource(Protocol):
    async def unit_price(self, product_id: int) -> Decimal:
        ...


class FixedPriceSource:
    """Prices every product at the same constant; there is no pricing integration yet."""

    def __init__(self, price: Decimal = settings.ORDER_UNIT_PRICE):
        self.price = Decimal(price)

    async def unit_price(self, product_id: int) -> Decimal:
        return self.price
