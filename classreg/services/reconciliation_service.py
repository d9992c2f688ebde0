"""Operator repair path for payments whose registration stayed pending."""
import logging
from datetime import datetime, timezone

from classreg.errors import PersistenceError
from classreg.models.reconciliation import ReconciliationStatus
from classreg.models.registration import RegistrationStatus
from classreg.schemas.reconciliation import ReconciliationOut, ReconciliationReport
from classreg.services.payment_service import mark_registration_paid
from classreg.stores.interfaces import PAYMENT_RECONCILIATIONS, REGISTRATIONS, PersistenceGateway, eq

logger = logging.getLogger(__name__)


def list_open(gateway: PersistenceGateway) -> list[ReconciliationOut]:
    rows = gateway.select(
        PAYMENT_RECONCILIATIONS,
        [eq("status", ReconciliationStatus.open)],
        order_by="created_at",
    )
    return [ReconciliationOut.model_validate(r) for r in rows]


def _is_paid(gateway: PersistenceGateway, registration_id: str) -> bool:
    rows = gateway.select(REGISTRATIONS, [eq("id", registration_id)], limit=1)
    return bool(rows) and rows[0]["status"] == RegistrationStatus.paid.value


def reconcile(gateway: PersistenceGateway) -> ReconciliationReport:
    """Retry the status flip for every open row.

    A row is resolved only once its registration is actually ``paid``. Rows
    that fail again, or whose registration is gone, stay open and are listed
    under ``failed``.
    """
    report = ReconciliationReport()
    for item in list_open(gateway):
        try:
            changed = mark_registration_paid(gateway, item.registration_id)
            if changed == 0 and not _is_paid(gateway, item.registration_id):
                logger.error(
                    "Reconciliation %s: registration %s does not exist or is not pending",
                    item.id, item.registration_id,
                )
                report.failed.append(item.id)
                continue
            gateway.update(
                PAYMENT_RECONCILIATIONS,
                [eq("id", item.id)],
                {"status": ReconciliationStatus.resolved, "resolved_at": datetime.now(timezone.utc)},
            )
        except PersistenceError:
            logger.error("Reconciliation %s for registration %s still failing", item.id, item.registration_id)
            report.failed.append(item.id)
            continue
        logger.info("Reconciliation %s resolved: registration %s marked paid", item.id, item.registration_id)
        report.resolved.append(item.id)
    return report
