"""Operator routes for payments left against pending registrations."""
import logging
from fastapi import APIRouter, Depends, HTTPException

from classreg.deps import get_gateway
from classreg.errors import PersistenceError
from classreg.schemas.reconciliation import ReconciliationOut, ReconciliationReport
from classreg.services import reconciliation_service
from classreg.stores.interfaces import PersistenceGateway

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=list[ReconciliationOut])
def list_open_reconciliations(gateway: PersistenceGateway = Depends(get_gateway)):
    """List payments whose registration is still pending."""
    try:
        return reconciliation_service.list_open(gateway)
    except PersistenceError:
        raise HTTPException(status_code=503, detail="Store unavailable")


@router.post("/run", response_model=ReconciliationReport)
def run_reconciliation(gateway: PersistenceGateway = Depends(get_gateway)):
    """Retry the pending → paid flip for every open reconciliation."""
    try:
        report = reconciliation_service.reconcile(gateway)
    except PersistenceError:
        raise HTTPException(status_code=503, detail="Store unavailable")
    logger.info("Reconciliation run: %d resolved, %d failed", len(report.resolved), len(report.failed))
    return report
