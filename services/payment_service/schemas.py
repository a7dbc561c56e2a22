from datetime import datetime
from decimal import Decimal
from typing import Optional

from shared.schemas import CamelModel

from .models import PaymentStatus


class PaymentRequest(CamelModel):
    order_id: Optional[str] = None
    amount: Optional[Decimal] = None
    method: Optional[str] = None


class PaymentResponse(CamelModel):
    id: int
    order_id: str
    amount: Decimal
    method: str
    status: PaymentStatus
    processed_at: datetime
