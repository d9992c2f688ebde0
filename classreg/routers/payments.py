"""Payment API routes — step two of the registration funnel."""
import logging
from typing import Any
from fastapi import APIRouter, Body, Depends, Response, status

from classreg.deps import get_gateway
from classreg.errors import ErrorCode
from classreg.schemas.payment import PaymentResult
from classreg.services import payment_service
from classreg.stores.interfaces import PersistenceGateway

logger = logging.getLogger(__name__)
router = APIRouter()

FAILURE_STATUS = {
    ErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.REGISTRATION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PERSISTENCE_FAILED: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@router.post("/", response_model=PaymentResult, status_code=status.HTTP_201_CREATED)
def pay(
    response: Response,
    payload: Any = Body(...),
    gateway: PersistenceGateway = Depends(get_gateway),
):
    """Record the class fee for a pending registration."""
    result = payment_service.pay(gateway, payload)
    if not result.success:
        response.status_code = FAILURE_STATUS.get(result.code, status.HTTP_400_BAD_REQUEST)
    return result
