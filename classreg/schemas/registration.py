"""Pydantic schemas for Registrations.

Form input arrives with camelCase keys (``firstName``, ``zipCode`` ...);
attributes are snake_case.
"""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, StrictBool, field_validator
from pydantic.alias_generators import to_camel

from classreg.errors import ErrorCode
from classreg.schemas.event import EventOut


class RegistrationCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    event_id: str = Field(min_length=1)
    first_name: str = Field(min_length=2)
    last_name: str = Field(min_length=2)
    address: str = Field(min_length=5)
    city: str = Field(min_length=2)
    state: str = Field(min_length=2)
    zip_code: str = Field(min_length=5)
    phone: str = Field(min_length=10)
    email: EmailStr
    guest_name: Optional[str] = None
    confirm_event: StrictBool

    @field_validator("confirm_event")
    @classmethod
    def must_confirm(cls, v: bool) -> bool:
        if v is not True:
            raise ValueError("Please confirm your event selection")
        return v


class RegistrationOut(BaseModel):
    id: str
    event_id: str
    first_name: str
    last_name: str
    address: str
    city: str
    state: str
    zip_code: str
    phone: str
    email: str
    guest_name: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class RegistrationDetail(RegistrationOut):
    """Registration plus the event it points at (live or fallback)."""

    event: EventOut


class RegistrationResult(BaseModel):
    """Tagged outcome of the registration workflow."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    registration_id: Optional[str] = None
    error: Optional[str] = None
    # Not serialized; routers map it to an HTTP status.
    code: Optional[ErrorCode] = Field(default=None, exclude=True)
