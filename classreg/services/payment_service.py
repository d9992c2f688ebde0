"""Payment workflow, step two of the funnel.

The charge itself is simulated: a ``completed`` payment row is written and
the registration is flipped from ``pending`` to ``paid``. The two writes are
separate statements. If the flip fails after the payment row exists, the
caller still gets success (the purchase went through) and an open
reconciliation row is left for an operator; see reconciliation_service.

Calling pay() again for a registration that already has a completed payment
returns that payment instead of recording a second one.
"""
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional

from classreg.errors import (
    PartialFailureError,
    PersistenceError,
    RegistrationNotFoundError,
    ValidationError,
)
from classreg.models.payment import PaymentStatus
from classreg.models.reconciliation import ReconciliationStatus
from classreg.models.registration import RegistrationStatus
from classreg.schemas.payment import PaymentResult
from classreg.services.validation import validate_payment
from classreg.stores.interfaces import (
    PAYMENT_RECONCILIATIONS,
    PAYMENTS,
    REGISTRATIONS,
    PersistenceGateway,
    eq,
)

logger = logging.getLogger(__name__)

PAYMENT_AMOUNT = Decimal("49.00")

INVALID_PAYMENT_MESSAGE = "Invalid payment data. Please check your inputs."
PAYMENT_FAILED_MESSAGE = "Failed to process payment. Please try again."


def mark_registration_paid(gateway: PersistenceGateway, registration_id: str) -> int:
    """Flip a pending registration to paid; returns rows changed (0 if already paid)."""
    return gateway.update(
        REGISTRATIONS,
        [eq("id", registration_id), eq("status", RegistrationStatus.pending)],
        {"status": RegistrationStatus.paid},
    )


def _record_partial_failure(gateway: PersistenceGateway, payment_id: str, registration_id: str) -> None:
    error = PartialFailureError(payment_id, registration_id)
    logger.error("%s (payment %s, registration %s)", error, payment_id, registration_id)
    try:
        if gateway.select(PAYMENT_RECONCILIATIONS, [eq("payment_id", payment_id)], limit=1):
            return
        gateway.insert(PAYMENT_RECONCILIATIONS, {
            "payment_id": payment_id,
            "registration_id": registration_id,
            "reason": error.message,
            "status": ReconciliationStatus.open,
            "created_at": datetime.now(timezone.utc),
        })
    except PersistenceError:
        logger.critical(
            "Could not record reconciliation for payment %s; registration %s needs manual repair",
            payment_id, registration_id,
        )


def _settle(gateway: PersistenceGateway, payment_id: str, registration_id: str) -> None:
    try:
        mark_registration_paid(gateway, registration_id)
    except PersistenceError:
        _record_partial_failure(gateway, payment_id, registration_id)


def _existing_payment(gateway: PersistenceGateway, registration_id: str) -> Optional[dict]:
    rows = gateway.select(
        PAYMENTS,
        [eq("registration_id", registration_id), eq("status", PaymentStatus.completed)],
        order_by="created_at",
        limit=1,
    )
    return rows[0] if rows else None


def pay(gateway: PersistenceGateway, data: Any) -> PaymentResult:
    """Validate card details, record the payment and mark the registration paid."""
    try:
        form = validate_payment(data)
    except ValidationError as exc:
        logger.info("Payment rejected: %s", exc)
        return PaymentResult(success=False, error=INVALID_PAYMENT_MESSAGE, code=exc.code)

    registration_id = form.registration_id
    try:
        registrations = gateway.select(REGISTRATIONS, [eq("id", registration_id)], limit=1)
        existing = _existing_payment(gateway, registration_id) if registrations else None
    except PersistenceError as exc:
        logger.error("Could not load registration %s for payment", registration_id)
        return PaymentResult(success=False, error=PAYMENT_FAILED_MESSAGE, code=exc.code)

    if not registrations:
        error = RegistrationNotFoundError(registration_id)
        logger.warning("%s (registration %s)", error, registration_id)
        return PaymentResult(success=False, error=error.message, code=error.code)

    if existing is not None:
        logger.info("Registration %s already has payment %s", registration_id, existing["id"])
        if registrations[0]["status"] == RegistrationStatus.pending.value:
            _settle(gateway, existing["id"], registration_id)
        return PaymentResult(success=True, payment_id=existing["id"])

    try:
        payment = gateway.insert(PAYMENTS, {
            "registration_id": registration_id,
            "amount": PAYMENT_AMOUNT,
            "status": PaymentStatus.completed,
            "payment_method": form.card_type,
            "created_at": datetime.now(timezone.utc),
        })
    except PersistenceError as exc:
        logger.error("Failed to store payment for registration %s", registration_id)
        return PaymentResult(success=False, error=PAYMENT_FAILED_MESSAGE, code=exc.code)

    _settle(gateway, payment["id"], registration_id)
    logger.info("Payment %s recorded for registration %s", payment["id"], registration_id)
    return PaymentResult(success=True, payment_id=payment["id"])
