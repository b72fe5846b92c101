"""Domain service previewing a payment on an existing transaction."""

from decimal import Decimal

from src.domain.constants import LOCAL_CURRENCY
from src.domain.models import TransactionPaymentPreview, TransactionRecord

ZERO = Decimal("0")


def preview_transaction_payment(
    record: TransactionRecord,
    *,
    amount: Decimal,
    currency: str = LOCAL_CURRENCY,
    exchange_rate: Decimal = Decimal("1"),
    local_currency: str = LOCAL_CURRENCY,
) -> TransactionPaymentPreview:
    """Compute the effect of one more payment on a registered transaction.

    Args:
        record: Transaction receiving the payment.
        amount: Entered amount in ``currency``.
        currency: Currency of the entered amount.
        exchange_rate: Rate to local currency, ignored for local payments.
        local_currency: Mnemonic of the local currency.

    Returns:
        TransactionPaymentPreview: Leftover, resulting debt and advance.
    """
    is_local = currency == local_currency
    finite = amount.is_finite() and exchange_rate.is_finite()
    if not finite:
        paid_local = ZERO
    elif is_local:
        paid_local = amount
    else:
        paid_local = amount * exchange_rate
    leftover = record.total_due - (record.total_paid + paid_local)
    debt = max(leftover, ZERO)
    is_valid = finite and amount > 0 and (is_local or exchange_rate > 0)
    return TransactionPaymentPreview(
        total_due=record.total_due,
        paid_previously=record.total_paid,
        paid_local=paid_local,
        leftover=leftover,
        debt=debt,
        advance=paid_local - debt,
        is_valid=is_valid,
    )


__all__ = ["preview_transaction_payment"]
