"""PaymentReconciliation ORM model — ledger of payments whose registration stayed pending."""
import uuid
import enum
from sqlalchemy import Column, String, DateTime, ForeignKey, Enum as SAEnum
from sqlalchemy.sql import func
from classreg.database import Base


class ReconciliationStatus(str, enum.Enum):
    open = "open"
    resolved = "resolved"


class PaymentReconciliation(Base):
    __tablename__ = "payment_reconciliations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    payment_id = Column(String(36), ForeignKey("payments.id"), nullable=False, unique=True)
    registration_id = Column(String(36), nullable=False, index=True)
    reason = Column(String(500), nullable=False)
    status = Column(SAEnum(ReconciliationStatus), nullable=False, default=ReconciliationStatus.open)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    resolved_at = Column(DateTime(timezone=True), nullable=True)
