from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db

from .schemas import PaymentRequest, PaymentResponse
from .service import OutcomeDecider, PaymentService, coin_flip

router = APIRouter(prefix="/payments", tags=["Payments"])
public_router = APIRouter()  # For any public endpoints (e.g. health check)


def get_outcome_decider() -> OutcomeDecider:
    return coin_flip


def get_payment_service(
    db: AsyncSession = Depends(get_db),
    decide_outcome: OutcomeDecider = Depends(get_outcome_decider),
) -> PaymentService:
    return PaymentService(db, decide_outcome)


@public_router.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "payment", "status": "running"}


@router.post("", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
async def process_payment(payload: PaymentRequest, service: PaymentService = Depends(get_payment_service)):
    return await service.process_payment(payload)


@router.get("/{order_id}", response_model=PaymentResponse)
async def get_payment(order_id: str, service: PaymentService = Depends(get_payment_service)):
    return await service.get_payment_by_order_id(order_id)
