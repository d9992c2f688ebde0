"""Pydantic schemas for payment reconciliation."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class ReconciliationOut(BaseModel):
    id: str
    payment_id: str
    registration_id: str
    reason: str
    status: str
    created_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ReconciliationReport(BaseModel):
    resolved: list[str] = []
    failed: list[str] = []
