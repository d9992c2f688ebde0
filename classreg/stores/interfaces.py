"""Persistence gateway interface (repository pattern).

Workflows talk to storage only through this interface, with plain dict
records keyed by column name. Implementations must raise
``PersistenceError`` for any store failure.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Sequence

EVENTS = "events"
REGISTRATIONS = "registrations"
PAYMENTS = "payments"
PAYMENT_RECONCILIATIONS = "payment_reconciliations"

OPERATORS = ("eq", "gte", "lte")


@dataclass(frozen=True)
class Condition:
    """A single ``field <op> value`` filter; conditions in a list are ANDed."""

    field: str
    op: str
    value: Any

    def __post_init__(self) -> None:
        if self.op not in OPERATORS:
            raise ValueError(f"Unsupported operator: {self.op}")


def eq(field: str, value: Any) -> Condition:
    return Condition(field, "eq", value)


def gte(field: str, value: Any) -> Condition:
    return Condition(field, "gte", value)


def lte(field: str, value: Any) -> Condition:
    return Condition(field, "lte", value)


class PersistenceGateway(ABC):
    """Interface for row-level operations over the logical tables."""

    @abstractmethod
    def insert(self, table: str, record: dict[str, Any]) -> dict[str, Any]:
        """Insert one row and return it as stored (including generated id)."""
        ...

    @abstractmethod
    def update(self, table: str, where: Sequence[Condition], patch: dict[str, Any]) -> int:
        """Apply ``patch`` to every matching row; return the number of rows changed."""
        ...

    @abstractmethod
    def select(
        self,
        table: str,
        where: Sequence[Condition] = (),
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        """Return matching rows, optionally ordered and capped."""
        ...
