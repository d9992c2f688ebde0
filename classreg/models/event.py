"""Event ORM model — a scheduled class session.

Rows are entered administratively; the workflows only read them.
"""
import uuid
from sqlalchemy import Column, String, Date, DateTime
from sqlalchemy.sql import func
from classreg.database import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    date = Column(Date, nullable=False, index=True)
    location_name = Column(String(255), nullable=False)
    address = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False)
    state = Column(String(50), nullable=False)
    zip = Column(String(20), nullable=False)
    time = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
