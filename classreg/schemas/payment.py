"""Pydantic schemas for Payments."""
from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from classreg.errors import ErrorCode


class PaymentCreate(BaseModel):
    """Card details for the simulated charge.

    Only lengths are checked: no Luhn checksum, no expiry-in-the-past rule.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    registration_id: str = Field(min_length=1)
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    address: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zip_code: str = Field(min_length=1)
    card_type: str = Field(min_length=1)
    card_number: str = Field(min_length=13, max_length=19)
    expiration_month: str = Field(min_length=1)  # "MM"
    expiration_year: str = Field(min_length=1)  # "YYYY"
    security_code: str = Field(min_length=3, max_length=4)


class PaymentResult(BaseModel):
    """Tagged outcome of the payment workflow."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    payment_id: Optional[str] = None
    error: Optional[str] = None
    # Not serialized; routers map it to an HTTP status.
    code: Optional[ErrorCode] = Field(default=None, exclude=True)
