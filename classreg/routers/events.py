"""Event API routes — read-only, always answered (live or fallback data)."""
import logging
from fastapi import APIRouter, Depends, Query

from classreg.config import settings
from classreg.deps import get_gateway
from classreg.schemas.event import EventOut
from classreg.services import event_service
from classreg.stores.interfaces import PersistenceGateway

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/upcoming", response_model=list[EventOut])
def list_upcoming_events(
    limit: int = Query(event_service.DEFAULT_UPCOMING_LIMIT, ge=1, le=50),
    gateway: PersistenceGateway = Depends(get_gateway),
):
    """List upcoming events, soonest first."""
    today = event_service.site_today(settings)
    return event_service.list_upcoming_events(gateway, today, limit)


@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: str, gateway: PersistenceGateway = Depends(get_gateway)):
    """Fetch a single event; unknown ids resolve to a fallback event."""
    return event_service.get_event(gateway, event_id)
