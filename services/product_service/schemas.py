from decimal import Decimal
from typing import Optional

from shared.schemas import CamelModel


class Rating(CamelModel):
    rate: Optional[float] = None
    count: Optional[int] = None


class ProductResponse(CamelModel):
    id: int
    title: Optional[str] = None
    price: Optional[Decimal] = None
    description: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = None
    rating: Optional[Rating] = None
