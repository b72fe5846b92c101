"""Domain models for transactions and their open balances."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Pending:
    """Externally supplied collection that is not available yet."""


@dataclass(frozen=True)
class Ready(Generic[T]):
    """Externally supplied collection that has been loaded."""

    items: tuple[T, ...] = field(default_factory=tuple)


Loadable = Pending | Ready


def is_loading(*values: Loadable) -> bool:
    """Return True when any of the values is still pending."""
    return any(isinstance(value, Pending) for value in values)


@dataclass(frozen=True)
class TransactionRecord:
    """Snapshot of the transaction being paid."""

    id: int
    total_due: Decimal
    total_paid: Decimal
    status: str = "Open"


@dataclass(frozen=True)
class OpenTransaction:
    """Previously registered transaction with an unpaid remainder."""

    id: int
    date: date
    total_due: Decimal
    total_paid: Decimal

    @property
    def leftover(self) -> Decimal:
        """Return the amount still owed on the transaction."""
        return self.total_due - self.total_paid


@dataclass(frozen=True)
class DebtRow:
    """Open transaction as seen by a debt allocation session.

    Attributes:
        transaction_id: Identifier of the open transaction.
        date: Transaction date, used for oldest-first allocation.
        total_due: Transaction total.
        total_paid: Amount already paid on the transaction.
        leftover: ``total_due - total_paid``.
        allocate: Amount of the pool assigned to this transaction.
        pay_fully: True when ``allocate`` equals ``leftover``.
    """

    transaction_id: int
    date: date
    total_due: Decimal
    total_paid: Decimal
    leftover: Decimal
    allocate: Decimal = Decimal("0")
    pay_fully: bool = False


__all__ = [
    "Pending",
    "Ready",
    "Loadable",
    "is_loading",
    "TransactionRecord",
    "OpenTransaction",
    "DebtRow",
]
