"""
Records payment attempts. There is no gateway: the outcome of each attempt
comes from an injectable decider, an unweighted coin flip by default.
"""
import random
from datetime import datetime, timezone
from typing import Callable

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import NotFoundError
from shared.observability.metrics import ecomm_payments_total
from shared.validation import Violations

from .models import Payment, PaymentStatus
from .repository import PaymentRepository
from .schemas import PaymentRequest

logger = structlog.get_logger(__name__)

OutcomeDecider = Callable[[], bool]

_rng = random.SystemRandom()


def coin_flip() -> bool:
    return _rng.random() < 0.5


def validate_payment_request(data: PaymentRequest) -> None:
    violations = Violations()
    # Only what the payments table cannot store; any amount is recorded as given
    violations.require("orderId", data.order_id, "Order ID is required")
    violations.require("amount", data.amount, "Amount is required")
    violations.require("method", data.method, "Payment method is required")
    violations.raise_if_any()


class PaymentService:

    def __init__(self, db: AsyncSession, decide_outcome: OutcomeDecider = coin_flip):
        self.db = db
        self.decide_outcome = decide_outcome

    async def process_payment(self, data: PaymentRequest) -> Payment:
        validate_payment_request(data)

        status = PaymentStatus.PAID if self.decide_outcome() else PaymentStatus.FAILED
        payment = Payment(
            order_id=data.order_id.strip(),
            amount=data.amount,
            method=data.method.strip(),
            status=status,
            processed_at=datetime.now(timezone.utc),
        )
        payment = await PaymentRepository.create_payment(self.db, payment)

        ecomm_payments_total.labels(status=status.value).inc()
        logger.info("payment_processed", payment_id=payment.id, order_id=payment.order_id, status=status.value)
        return payment

    async def get_payment_by_order_id(self, order_id: str) -> Payment:
        payment = await PaymentRepository.get_latest_by_order_id(self.db, order_id)
        if not payment:
            raise NotFoundError(f"Payment not found for order ID: {order_id}")
        return payment
