import enum

from sqlalchemy import Column, DateTime, Enum, Integer, Numeric, String

from shared.config.database import Base


class PaymentStatus(str, enum.Enum):
    PAID = "PAID"
    FAILED = "FAILED"


class Payment(Base):
    __tablename__ = "payments"
    __table_args__ = {"schema": "payment_schema"}

    id = Column(Integer, primary_key=True, index=True)
    # Not unique: every attempt for an order is kept
    order_id = Column(String(255), nullable=False, index=True)
    amount = Column(Numeric(18, 2), nullable=False)
    method = Column(String(64), nullable=False)
    status = Column(Enum(PaymentStatus, name="payment_status"), nullable=False)
    processed_at = Column(DateTime(timezone=True), nullable=False)
