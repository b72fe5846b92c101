"""Domain package for payment reconciliation rules and core models."""

from .constants import (
    ACCOUNT_CREDIT,
    LOCAL_CURRENCY,
    PAYMENT_METHODS,
    SALE,
    SUPPLY,
    SUPPORTED_CURRENCIES,
)
from .models import (
    DebtAllocation,
    DebtAllocationSummary,
    DebtRow,
    OpenTransaction,
    PartnerBalance,
    PaymentRecord,
    PaymentRow,
    PaymentSummary,
    Pending,
    Ready,
    TransactionRecord,
)
from .services import (
    compute_payment_summary,
    payment_row_issues,
    preview_transaction_payment,
    summarize_debt_rows,
)

__all__ = [
    "ACCOUNT_CREDIT",
    "LOCAL_CURRENCY",
    "PAYMENT_METHODS",
    "SALE",
    "SUPPLY",
    "SUPPORTED_CURRENCIES",
    "DebtAllocation",
    "DebtAllocationSummary",
    "DebtRow",
    "OpenTransaction",
    "PartnerBalance",
    "PaymentRecord",
    "PaymentRow",
    "PaymentSummary",
    "Pending",
    "Ready",
    "TransactionRecord",
    "compute_payment_summary",
    "payment_row_issues",
    "preview_transaction_payment",
    "summarize_debt_rows",
]
