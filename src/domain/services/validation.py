"""Domain validation helpers for payment rows."""

from decimal import Decimal

from src.domain.constants import ACCOUNT_CREDIT, LOCAL_CURRENCY
from src.domain.models import PaymentRow

NON_POSITIVE_AMOUNT = "non_positive_amount"
NON_FINITE_AMOUNT = "non_finite_amount"
NON_POSITIVE_RATE = "non_positive_rate"
LOCAL_RATE_NOT_ONE = "local_rate_not_one"
FOREIGN_RATE_IS_ONE = "foreign_rate_is_one"
ACCOUNT_CREDIT_EXCEEDS_ADVANCE = "account_credit_exceeds_advance"
ACCOUNT_CREDIT_NOT_LOCAL = "account_credit_not_local"


def payment_row_issues(
    row: PaymentRow,
    *,
    advance: Decimal,
    local_currency: str = LOCAL_CURRENCY,
) -> tuple[str, ...]:
    """Return the rule violations of a payment row.

    Args:
        row: Payment row to check.
        advance: Advance usable for the transaction mode.
        local_currency: Mnemonic of the local currency.

    Returns:
        tuple[str, ...]: Issue codes, empty when the row is valid.
    """
    issues: list[str] = []
    amount_finite = row.amount.is_finite()
    rate_finite = row.exchange_rate.is_finite()

    if not amount_finite:
        issues.append(NON_FINITE_AMOUNT)
    elif row.amount <= 0:
        issues.append(NON_POSITIVE_AMOUNT)
    if not rate_finite or row.exchange_rate <= 0:
        issues.append(NON_POSITIVE_RATE)

    # A foreign row at rate 1 is rejected even when 1 is the market rate.
    if row.currency == local_currency:
        if row.exchange_rate != 1:
            issues.append(LOCAL_RATE_NOT_ONE)
    elif row.exchange_rate == 1:
        issues.append(FOREIGN_RATE_IS_ONE)

    if row.method == ACCOUNT_CREDIT:
        if amount_finite and row.amount > abs(advance):
            issues.append(ACCOUNT_CREDIT_EXCEEDS_ADVANCE)
        if row.currency != local_currency:
            issues.append(ACCOUNT_CREDIT_NOT_LOCAL)

    return tuple(issues)


def is_payment_row_valid(
    row: PaymentRow,
    *,
    advance: Decimal,
    local_currency: str = LOCAL_CURRENCY,
) -> bool:
    """Return True when the row satisfies every payment rule."""
    return not payment_row_issues(
        row,
        advance=advance,
        local_currency=local_currency,
    )


__all__ = [
    "NON_POSITIVE_AMOUNT",
    "NON_FINITE_AMOUNT",
    "NON_POSITIVE_RATE",
    "LOCAL_RATE_NOT_ONE",
    "FOREIGN_RATE_IS_ONE",
    "ACCOUNT_CREDIT_EXCEEDS_ADVANCE",
    "ACCOUNT_CREDIT_NOT_LOCAL",
    "payment_row_issues",
    "is_payment_row_valid",
]
