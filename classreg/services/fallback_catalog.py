"""Hardcoded events served whenever the live store is unavailable or empty."""
from datetime import date

from classreg.schemas.event import EventOut

FALLBACK_EVENTS: tuple[EventOut, ...] = (
    EventOut(
        id="1",
        date=date(2025, 4, 12),
        location_name="Calvin University Prince Conference Center",
        address="1800 E Beltline Ave SE",
        city="Grand Rapids",
        state="MI",
        zip="49546",
        time="9:00 AM - 12:00 PM",
    ),
    EventOut(
        id="2",
        date=date(2025, 5, 3),
        location_name="Calvin University Prince Conference Center",
        address="1800 E Beltline Ave SE",
        city="Grand Rapids",
        state="MI",
        zip="49546",
        time="9:00 AM - 12:00 PM",
    ),
    EventOut(
        id="3",
        date=date(2025, 5, 10),
        location_name="Lynn University International Business Center",
        address="3601 N. Military Trail",
        city="Boca Raton",
        state="FL",
        zip="33431",
        time="9:00 AM - 12:00 PM",
    ),
)


def fallback_event(event_id: str) -> EventOut:
    """Return the catalog entry with ``event_id``, or the first entry as default."""
    for event in FALLBACK_EVENTS:
        if event.id == event_id:
            return event
    return FALLBACK_EVENTS[0]
