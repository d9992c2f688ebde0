"""Registration workflow, step one of the funnel.

register() validates the form, stores a ``pending`` registration and hands
back its id. That id is the only state the payment step needs.
Not idempotent: a retried call creates another pending registration.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from classreg.errors import PersistenceError, ValidationError
from classreg.models.registration import RegistrationStatus
from classreg.schemas.registration import RegistrationDetail, RegistrationResult
from classreg.services import event_service
from classreg.services.validation import validate_registration
from classreg.stores.interfaces import EVENTS, REGISTRATIONS, PersistenceGateway, eq

logger = logging.getLogger(__name__)

INVALID_FORM_MESSAGE = "Invalid form data. Please check your inputs."
REGISTER_FAILED_MESSAGE = "Failed to register. Please try again."


def _check_event_reference(gateway: PersistenceGateway, event_id: str) -> None:
    """Warn about a stale event id; never blocks the registration."""
    try:
        if not gateway.select(EVENTS, [eq("id", event_id)], limit=1):
            logger.warning("Registration references unknown event %s", event_id)
    except PersistenceError as exc:
        logger.warning("Could not verify event %s: %s", event_id, exc)


def register(gateway: PersistenceGateway, data: Any) -> RegistrationResult:
    """Validate and persist a new registration in ``pending`` status."""
    try:
        form = validate_registration(data)
    except ValidationError as exc:
        logger.info("Registration rejected: %s", exc)
        return RegistrationResult(success=False, error=INVALID_FORM_MESSAGE, code=exc.code)

    _check_event_reference(gateway, form.event_id)

    try:
        row = gateway.insert(REGISTRATIONS, {
            "event_id": form.event_id,
            "first_name": form.first_name,
            "last_name": form.last_name,
            "address": form.address,
            "city": form.city,
            "state": form.state,
            "zip_code": form.zip_code,
            "phone": form.phone,
            "email": form.email,
            "guest_name": form.guest_name or None,
            "status": RegistrationStatus.pending,
            "created_at": datetime.now(timezone.utc),
        })
    except PersistenceError as exc:
        logger.error("Failed to store registration for event %s", form.event_id)
        return RegistrationResult(success=False, error=REGISTER_FAILED_MESSAGE, code=exc.code)

    logger.info("Registration %s created for event %s", row["id"], form.event_id)
    return RegistrationResult(success=True, registration_id=row["id"])


def get_registration(gateway: PersistenceGateway, registration_id: str) -> Optional[RegistrationDetail]:
    """Fetch a registration with its event resolved through the event lookup.

    Returns None when the registration does not exist. Store errors propagate.
    """
    rows = gateway.select(REGISTRATIONS, [eq("id", registration_id)], limit=1)
    if not rows:
        return None
    row = rows[0]
    event = event_service.get_event(gateway, row["event_id"])
    return RegistrationDetail(**row, event=event)
