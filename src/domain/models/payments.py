"""Domain models for payment entries and debt allocations."""

from dataclasses import dataclass
from decimal import Decimal

from src.domain.constants import CASH, LOCAL_CURRENCY


@dataclass(frozen=True)
class PaymentRow:
    """Payment entry typed by the user for one transaction.

    Attributes:
        id: Identifier unique within the row set.
        amount: Amount in ``currency``.
        currency: Currency mnemonic of the amount.
        exchange_rate: Rate converting ``currency`` into local currency.
        method: Payment method name.
        reference: Optional external reference (receipt, transfer id).
    """

    id: int
    amount: Decimal = Decimal("0")
    currency: str = LOCAL_CURRENCY
    exchange_rate: Decimal = Decimal("1")
    method: str = CASH
    reference: str | None = None

    @property
    def local_amount(self) -> Decimal:
        """Return the amount converted into local currency.

        Non-finite amounts or rates contribute nothing; they are reported by
        row validation instead.
        """
        if not (self.amount.is_finite() and self.exchange_rate.is_finite()):
            return Decimal("0")
        return self.amount * self.exchange_rate


@dataclass(frozen=True)
class PaymentRecord:
    """Finalized payment row handed to the persistence layer."""

    amount: Decimal
    currency: str
    exchange_rate: Decimal
    method: str


@dataclass(frozen=True)
class DebtAllocation:
    """Part of an overpayment applied to a previously open transaction."""

    transaction_id: int
    amount: Decimal


@dataclass(frozen=True)
class TransactionPaymentRequest:
    """Payment part of a transaction creation request."""

    partner_id: int | None
    mode: str
    payments: tuple[PaymentRecord, ...]
    debt_payments: tuple[DebtAllocation, ...]
    refund_change: bool
    notes: str = ""


__all__ = [
    "PaymentRow",
    "PaymentRecord",
    "DebtAllocation",
    "TransactionPaymentRequest",
]
