"""SQLAlchemy implementation of the persistence gateway.

Each call is its own unit of work: it commits on success and rolls back
before raising ``PersistenceError``. No transaction spans two calls.
"""
import enum
import logging
from typing import Any, Optional, Sequence

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from classreg.errors import PersistenceError
from classreg.models.event import Event
from classreg.models.payment import Payment
from classreg.models.reconciliation import PaymentReconciliation
from classreg.models.registration import Registration
from classreg.stores.interfaces import (
    EVENTS,
    PAYMENT_RECONCILIATIONS,
    PAYMENTS,
    REGISTRATIONS,
    Condition,
    PersistenceGateway,
)

logger = logging.getLogger(__name__)

TABLE_MODELS = {
    EVENTS: Event,
    REGISTRATIONS: Registration,
    PAYMENTS: Payment,
    PAYMENT_RECONCILIATIONS: PaymentReconciliation,
}


def _model_for(table: str):
    try:
        return TABLE_MODELS[table]
    except KeyError:
        raise ValueError(f"Unknown table: {table}")


def _row_to_dict(obj: Any) -> dict[str, Any]:
    """Serialize an ORM row to a plain dict, enum members as their values."""
    row = {}
    for attr in inspect(obj).mapper.column_attrs:
        value = getattr(obj, attr.key)
        row[attr.key] = value.value if isinstance(value, enum.Enum) else value
    return row


def _criterion(model, condition: Condition):
    column = getattr(model, condition.field)
    if condition.op == "eq":
        return column == condition.value
    if condition.op == "gte":
        return column >= condition.value
    return column <= condition.value


class SQLAlchemyGateway(PersistenceGateway):
    """Relational store accessed through a request-scoped ORM session."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def insert(self, table: str, record: dict[str, Any]) -> dict[str, Any]:
        model = _model_for(table)
        try:
            obj = model(**record)
            self._db.add(obj)
            self._db.commit()
            self._db.refresh(obj)
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.exception("Insert into %s failed", table)
            raise PersistenceError("insert", table) from exc
        return _row_to_dict(obj)

    def update(self, table: str, where: Sequence[Condition], patch: dict[str, Any]) -> int:
        model = _model_for(table)
        try:
            query = self._db.query(model).filter(*[_criterion(model, c) for c in where])
            changed = query.update(patch, synchronize_session="fetch")
            self._db.commit()
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.exception("Update of %s failed", table)
            raise PersistenceError("update", table) from exc
        return changed

    def select(
        self,
        table: str,
        where: Sequence[Condition] = (),
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        model = _model_for(table)
        try:
            query = self._db.query(model).filter(*[_criterion(model, c) for c in where])
            if order_by:
                column = getattr(model, order_by)
                query = query.order_by(column.desc() if descending else column.asc())
            if limit is not None:
                query = query.limit(limit)
            rows = query.all()
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.exception("Select from %s failed", table)
            raise PersistenceError("select", table) from exc
        return [_row_to_dict(r) for r in rows]
