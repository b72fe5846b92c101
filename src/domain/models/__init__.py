"""Domain models package."""

from .partners import PartnerBalance
from .payments import (
    DebtAllocation,
    PaymentRecord,
    PaymentRow,
    TransactionPaymentRequest,
)
from .summary import (
    DebtAllocationSummary,
    PaymentSummary,
    TransactionPaymentPreview,
)
from .transactions import (
    DebtRow,
    Loadable,
    OpenTransaction,
    Pending,
    Ready,
    TransactionRecord,
    is_loading,
)

__all__ = [
    "PartnerBalance",
    "PaymentRow",
    "PaymentRecord",
    "DebtAllocation",
    "TransactionPaymentRequest",
    "PaymentSummary",
    "DebtAllocationSummary",
    "TransactionPaymentPreview",
    "TransactionRecord",
    "OpenTransaction",
    "DebtRow",
    "Pending",
    "Ready",
    "Loadable",
    "is_loading",
]
