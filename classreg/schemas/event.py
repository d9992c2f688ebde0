"""Pydantic schemas for Events."""
from datetime import date
from typing import Optional
from pydantic import BaseModel


class EventOut(BaseModel):
    id: str
    date: date
    location_name: str
    address: str
    city: str
    state: str
    zip: str
    time: Optional[str] = None

    model_config = {"from_attributes": True, "frozen": True}
