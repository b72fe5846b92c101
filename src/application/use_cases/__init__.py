"""Application use cases package."""

from .debt_allocator import DebtAllocator
from .payment_rows import PaymentRowSet
from .transaction_payment import TransactionPaymentSession

__all__ = [
    "DebtAllocator",
    "PaymentRowSet",
    "TransactionPaymentSession",
]
