"""Domain services package."""

from .debt_allocation import (
    auto_allocate_oldest,
    build_debt_rows,
    can_pay_fully,
    change_allocate,
    reset_allocations,
    summarize_debt_rows,
    to_debt_allocations,
    toggle_pay_fully,
)
from .normalization import normalize_currency, normalize_method
from .payment_summary import (
    compute_balance_after,
    compute_payment_summary,
    compute_total_paid,
)
from .transaction_payment import preview_transaction_payment
from .validation import is_payment_row_valid, payment_row_issues

__all__ = [
    "auto_allocate_oldest",
    "build_debt_rows",
    "can_pay_fully",
    "change_allocate",
    "reset_allocations",
    "summarize_debt_rows",
    "to_debt_allocations",
    "toggle_pay_fully",
    "normalize_currency",
    "normalize_method",
    "compute_balance_after",
    "compute_payment_summary",
    "compute_total_paid",
    "preview_transaction_payment",
    "is_payment_row_valid",
    "payment_row_issues",
]
