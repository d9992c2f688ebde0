"""Registration ORM model — one attendee's intent to attend an event."""
import uuid
import enum
from sqlalchemy import Column, String, DateTime, Enum as SAEnum
from sqlalchemy.sql import func
from classreg.database import Base


class RegistrationStatus(str, enum.Enum):
    pending = "pending"
    paid = "paid"


class Registration(Base):
    __tablename__ = "registrations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # No FK: the id may name a fallback catalog event that only exists in code.
    event_id = Column(String(36), nullable=False, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    address = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False)
    state = Column(String(50), nullable=False)
    zip_code = Column(String(20), nullable=False)
    phone = Column(String(30), nullable=False)
    email = Column(String(255), nullable=False)
    guest_name = Column(String(200), nullable=True)
    status = Column(SAEnum(RegistrationStatus), nullable=False, default=RegistrationStatus.pending)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
