"""Domain models for derived payment figures."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class PaymentSummary:
    """Figures derived from the payment rows of one transaction.

    Attributes:
        total_paid: Sum of all rows in local currency.
        overpaid: Amount paid above the total due.
        underpaid: Amount missing to cover the total due.
        debt_paid: Sum of the debt allocations.
        effective_overpaid: Overpayment not consumed by debt allocations.
        balance_after: Projected partner balance after saving.
        must_use_account_credit: An existing advance must be drawn first.
        must_allocate_debt: An overpayment must retire open debt first.
        payment_is_valid: Whether the save action may be offered.
    """

    total_paid: Decimal
    overpaid: Decimal
    underpaid: Decimal
    debt_paid: Decimal
    effective_overpaid: Decimal
    balance_after: Decimal
    must_use_account_credit: bool
    must_allocate_debt: bool
    payment_is_valid: bool


@dataclass(frozen=True)
class DebtAllocationSummary:
    """Totals of a debt allocation session."""

    total_debt: Decimal
    total_covered: Decimal
    remaining_available: Decimal
    debt_left: Decimal
    over_allocated: bool
    can_save: bool


@dataclass(frozen=True)
class TransactionPaymentPreview:
    """Effect of one additional payment on an existing transaction."""

    total_due: Decimal
    paid_previously: Decimal
    paid_local: Decimal
    leftover: Decimal
    debt: Decimal
    advance: Decimal
    is_valid: bool

    @property
    def has_advance(self) -> bool:
        """Return True when the payment leaves an advance behind."""
        return self.advance > 0


__all__ = [
    "PaymentSummary",
    "DebtAllocationSummary",
    "TransactionPaymentPreview",
]
