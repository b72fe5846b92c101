"""Domain services deriving payment totals for a transaction."""

from collections.abc import Sequence
from decimal import Decimal

from src.domain.constants import ACCOUNT_CREDIT, LOCAL_CURRENCY, SALE
from src.domain.models import (
    DebtAllocation,
    PartnerBalance,
    PaymentRow,
    PaymentSummary,
)
from src.domain.services.validation import is_payment_row_valid

ZERO = Decimal("0")


def compute_total_paid(payments: Sequence[PaymentRow]) -> Decimal:
    """Return the sum of all rows converted into local currency."""
    return sum((row.local_amount for row in payments), ZERO)


def compute_debt_paid(debt_allocations: Sequence[DebtAllocation]) -> Decimal:
    """Return the sum of the debt allocation amounts."""
    return sum((allocation.amount for allocation in debt_allocations), ZERO)


def find_account_credit_row(
    payments: Sequence[PaymentRow],
) -> PaymentRow | None:
    """Return the first row drawing on account credit, if any."""
    for row in payments:
        if row.method == ACCOUNT_CREDIT:
            return row
    return None


def compute_balance_after(
    mode: str,
    *,
    total_due: Decimal,
    total_paid: Decimal,
    debt_paid: Decimal,
    account_used: Decimal,
    refund_change: bool,
    partner_balance: PartnerBalance,
) -> Decimal:
    """Project the partner balance once the transaction is saved.

    A sale moves the balance in the partner's favour when they pay, a supply
    moves it in the business's favour, so the two modes mirror each other.

    Args:
        mode: Transaction mode (Sale or Supply).
        total_due: Amount due for the current transaction.
        total_paid: Sum of payment rows in local currency.
        debt_paid: Part of the payment allocated to older debts.
        account_used: Advance consumed through account credit.
        refund_change: Whether any change is handed back to the partner.
        partner_balance: Balance snapshot before the transaction.

    Returns:
        Decimal: Projected running balance.
    """
    paid_for_current = total_paid - debt_paid
    unpaid = max(total_due - paid_for_current, ZERO)
    extra_advance = (
        ZERO if refund_change else max(paid_for_current - total_due, ZERO)
    )
    if mode == SALE:
        return (
            partner_balance.total
            + debt_paid
            - unpaid
            + extra_advance
            - account_used
        )
    return (
        partner_balance.total
        - debt_paid
        + unpaid
        - extra_advance
        + account_used
    )


def compute_payment_summary(
    *,
    mode: str,
    total_due: Decimal,
    payments: Sequence[PaymentRow],
    debt_allocations: Sequence[DebtAllocation],
    refund_change: bool,
    partner_balance: PartnerBalance,
    local_currency: str = LOCAL_CURRENCY,
) -> PaymentSummary:
    """Derive totals and validity flags from the payment inputs.

    The function is pure: it never mutates its inputs and never raises for
    business input. Invalid states only show up in the returned flags.

    Args:
        mode: Transaction mode (Sale or Supply).
        total_due: Amount due for the current transaction.
        payments: Payment rows entered by the user.
        debt_allocations: Allocations of the overpayment to open debts.
        refund_change: Whether any change is handed back to the partner.
        partner_balance: Balance snapshot of the selected partner.
        local_currency: Mnemonic of the local currency.

    Returns:
        PaymentSummary: Derived figures for display and save gating.
    """
    total_paid = compute_total_paid(payments)
    debt_paid = compute_debt_paid(debt_allocations)

    overpaid = max(total_paid - total_due, ZERO)
    underpaid = max(total_due - total_paid, ZERO)
    effective_overpaid = max(overpaid - debt_paid, ZERO)

    account_row = find_account_credit_row(payments)
    account_used = ZERO
    if account_row is not None and account_row.amount.is_finite():
        account_used = account_row.amount
    account_credit_used = account_used > 0

    balance_after = compute_balance_after(
        mode,
        total_due=total_due,
        total_paid=total_paid,
        debt_paid=debt_paid,
        account_used=account_used,
        refund_change=refund_change,
        partner_balance=partner_balance,
    )

    advance = partner_balance.advance_for(mode)
    must_use_account_credit = (
        advance > 0 and total_paid < total_due and not account_credit_used
    )
    must_allocate_debt = (
        partner_balance.debt_for(mode) > 0
        and overpaid > 0
        and debt_paid == 0
    )

    rows_valid = all(
        is_payment_row_valid(
            row,
            advance=advance,
            local_currency=local_currency,
        )
        for row in payments
    )
    payment_is_valid = (
        rows_valid and not must_use_account_credit and not must_allocate_debt
    )

    return PaymentSummary(
        total_paid=total_paid,
        overpaid=overpaid,
        underpaid=underpaid,
        debt_paid=debt_paid,
        effective_overpaid=effective_overpaid,
        balance_after=balance_after,
        must_use_account_credit=must_use_account_credit,
        must_allocate_debt=must_allocate_debt,
        payment_is_valid=payment_is_valid,
    )


__all__ = [
    "compute_total_paid",
    "compute_debt_paid",
    "find_account_credit_row",
    "compute_balance_after",
    "compute_payment_summary",
]
