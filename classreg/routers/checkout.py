"""Hosted checkout route — POST then redirect to Stripe."""
import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, RedirectResponse

from classreg.config import settings
from classreg.deps import get_checkout_provider
from classreg.errors import UpstreamProviderError
from classreg.services import checkout_service
from classreg.services.checkout_service import CheckoutProvider

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/")
def create_checkout(provider: CheckoutProvider = Depends(get_checkout_provider)):
    """Create a checkout session and answer with a 303 to the hosted page."""
    try:
        url = checkout_service.create_checkout_redirect(provider, settings.PUBLIC_BASE_URL)
    except UpstreamProviderError as e:
        return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content={"error": e.message})
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)
