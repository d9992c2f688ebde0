"""Registration API routes — step one of the registration funnel."""
import logging
from typing import Any
from fastapi import APIRouter, Body, Depends, HTTPException, Response, status

from classreg.deps import get_gateway
from classreg.errors import ErrorCode, PersistenceError
from classreg.schemas.registration import RegistrationDetail, RegistrationResult
from classreg.services import registration_service
from classreg.stores.interfaces import PersistenceGateway

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=RegistrationResult, status_code=status.HTTP_201_CREATED)
def register(
    response: Response,
    payload: Any = Body(...),
    gateway: PersistenceGateway = Depends(get_gateway),
):
    """Register an attendee; the returned id is the handle for the payment step."""
    result = registration_service.register(gateway, payload)
    if not result.success:
        if result.code == ErrorCode.VALIDATION_FAILED:
            response.status_code = status.HTTP_400_BAD_REQUEST
        else:
            response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return result


@router.get("/{registration_id}", response_model=RegistrationDetail)
def get_registration(registration_id: str, gateway: PersistenceGateway = Depends(get_gateway)):
    """Fetch a registration with its event, for the payment page."""
    try:
        registration = registration_service.get_registration(gateway, registration_id)
    except PersistenceError:
        raise HTTPException(status_code=503, detail="Registration lookup is temporarily unavailable")
    if not registration:
        raise HTTPException(status_code=404, detail="Registration not found")
    return registration
