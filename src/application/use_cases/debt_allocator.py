"""Use case for one debt allocation session.

A session distributes a pool (the current overpayment plus what is already
allocated) over the open transactions of the selected partner. While the
open transactions are still loading the session has no rows and every
action is a no-op.
"""

from decimal import Decimal

from src.domain.models import (
    DebtAllocation,
    DebtAllocationSummary,
    DebtRow,
    Loadable,
    Pending,
    Ready,
    is_loading,
)
from src.domain.services import debt_allocation
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal

ZERO = Decimal("0")


class DebtAllocator:
    """Allocate an available amount to a partner's open transactions."""

    def __init__(
        self,
        open_transactions: Loadable,
        available_amount,
        initial_allocations=(),
        logger=None,
    ) -> None:
        """Initialize the session.

        Args:
            open_transactions: ``Ready`` open transactions or ``Pending``.
            available_amount: Pool that may be allocated in this session.
            initial_allocations: Allocations applied in an earlier session.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._logger = logger or get_app_logger()
        self._available_amount = self._coerce_pool(available_amount)
        self._initial_allocations = tuple(initial_allocations)
        self._open_transactions: Loadable = Pending()
        self._rows: tuple[DebtRow, ...] = ()
        self.load(open_transactions)

    @property
    def available_amount(self) -> Decimal:
        return self._available_amount

    @property
    def is_loading(self) -> bool:
        return is_loading(self._open_transactions)

    @property
    def rows(self) -> tuple[DebtRow, ...]:
        return self._rows

    def load(self, open_transactions: Loadable) -> None:
        """Rebuild the session rows from freshly supplied transactions.

        Args:
            open_transactions: ``Ready`` open transactions or ``Pending``.
        """
        self._open_transactions = open_transactions
        if isinstance(open_transactions, Ready):
            self._rows = debt_allocation.build_debt_rows(
                open_transactions.items,
                self._initial_allocations,
            )
            self._logger.debug(
                f"Debt allocation session loaded {len(self._rows)} debts"
            )
        else:
            self._rows = ()

    def summary(self) -> DebtAllocationSummary:
        """Return the session totals and the apply gate."""
        return debt_allocation.summarize_debt_rows(
            self._rows,
            self._available_amount,
        )

    @property
    def can_save(self) -> bool:
        return self.summary().can_save

    def can_pay_fully(self, index: int) -> bool:
        return debt_allocation.can_pay_fully(
            self._rows,
            index,
            self._available_amount,
        )

    def change_allocate(self, index: int, value) -> None:
        """Set the allocation of a row, clamped to the pool and its leftover.

        Args:
            index: Position of the row in display order.
            value: Requested allocation.
        """
        amount = coerce_decimal(value)
        if not amount.is_finite():
            amount = ZERO
        self._rows = debt_allocation.change_allocate(
            self._rows,
            index,
            amount,
            self._available_amount,
        )

    def toggle_pay_fully(self, index: int) -> None:
        self._rows = debt_allocation.toggle_pay_fully(
            self._rows,
            index,
            self._available_amount,
        )

    def auto_allocate_oldest(self) -> None:
        """Spread the remaining pool over the oldest debts first."""
        self._rows = debt_allocation.auto_allocate_oldest(
            self._rows,
            self._available_amount,
        )
        self._logger.info(
            "Auto-allocated "
            f"{debt_allocation.total_covered(self._rows)} "
            f"of {self._available_amount} to open debts"
        )

    def reset(self) -> None:
        self._rows = debt_allocation.reset_allocations(self._rows)

    def apply(self) -> tuple[DebtAllocation, ...] | None:
        """Return the allocations to store on the payment.

        Returns:
            tuple[DebtAllocation, ...] | None: Allocations of rows with a
            positive amount, or None when the session may not be saved.
        """
        summary = self.summary()
        if not summary.can_save:
            self._logger.warning(
                "Debt allocation rejected: "
                f"remaining={summary.remaining_available}, "
                f"debt_left={summary.debt_left}"
            )
            return None
        return debt_allocation.to_debt_allocations(self._rows)

    def _coerce_pool(self, available_amount) -> Decimal:
        value = coerce_decimal(available_amount)
        if not value.is_finite():
            self._logger.warning(
                f"Invalid available amount {available_amount!r}, using 0"
            )
            return ZERO
        return value


__all__ = ["DebtAllocator"]
