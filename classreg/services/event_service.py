"""Event lookup: live data first, fallback catalog on any failure.

Lookups never raise. Internally every lookup returns either ``Live`` or
``Fallback`` so callers (and tests) can tell which branch fired; the public
helpers collapse that to plain values.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

import pytz

from classreg.config import Settings
from classreg.errors import PersistenceError
from classreg.schemas.event import EventOut
from classreg.services.fallback_catalog import FALLBACK_EVENTS, fallback_event
from classreg.stores.interfaces import EVENTS, PersistenceGateway, eq, gte

logger = logging.getLogger(__name__)

DEFAULT_UPCOMING_LIMIT = 5


@dataclass(frozen=True)
class Live:
    events: list[EventOut]


@dataclass(frozen=True)
class Fallback:
    events: list[EventOut]
    reason: str


LookupResult = Union[Live, Fallback]


def site_today(config: Settings, now: Optional[datetime] = None) -> date:
    """Current calendar date in the site's timezone."""
    tz = pytz.timezone(config.SITE_TIMEZONE)
    if now is None:
        return datetime.now(tz).date()
    if now.tzinfo is None:
        now = pytz.utc.localize(now)
    return now.astimezone(tz).date()


def lookup_upcoming(
    gateway: PersistenceGateway,
    today: date,
    limit: int = DEFAULT_UPCOMING_LIMIT,
) -> LookupResult:
    """Events on or after ``today``, soonest first, at most ``limit``.

    The fallback catalog is returned whole: not filtered by date, not capped.
    """
    try:
        rows = gateway.select(EVENTS, [gte("date", today)], order_by="date", limit=limit)
    except PersistenceError as exc:
        logger.warning("Using fallback events: %s", exc)
        return Fallback(list(FALLBACK_EVENTS), reason="store error")

    if not rows:
        logger.info("Using fallback events: no upcoming events found")
        return Fallback(list(FALLBACK_EVENTS), reason="no events")
    return Live([EventOut.model_validate(r) for r in rows])


def lookup_event(gateway: PersistenceGateway, event_id: str) -> LookupResult:
    """The event with ``event_id``; falls back to the catalog entry or its first entry."""
    try:
        rows = gateway.select(EVENTS, [eq("id", event_id)], limit=1)
    except PersistenceError as exc:
        logger.warning("Using fallback event for %s: %s", event_id, exc)
        return Fallback([fallback_event(event_id)], reason="store error")

    if not rows:
        logger.info("Event %s not found, using fallback event", event_id)
        return Fallback([fallback_event(event_id)], reason="not found")
    return Live([EventOut.model_validate(rows[0])])


def list_upcoming_events(
    gateway: PersistenceGateway,
    today: date,
    limit: int = DEFAULT_UPCOMING_LIMIT,
) -> list[EventOut]:
    return lookup_upcoming(gateway, today, limit).events


def get_event(gateway: PersistenceGateway, event_id: str) -> EventOut:
    return lookup_event(gateway, event_id).events[0]
