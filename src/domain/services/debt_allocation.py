"""Domain services for allocating an overpayment to open debts.

Every function takes the current session rows and returns a new tuple of
rows; nothing is mutated in place. Out-of-range indexes leave the rows
unchanged.
"""

from collections.abc import Iterable, Sequence
from dataclasses import replace
from decimal import Decimal

from src.domain.models import (
    DebtAllocation,
    DebtAllocationSummary,
    DebtRow,
    OpenTransaction,
)

ZERO = Decimal("0")


def build_debt_rows(
    open_transactions: Iterable[OpenTransaction],
    initial_allocations: Sequence[DebtAllocation] = (),
) -> tuple[DebtRow, ...]:
    """Create session rows, merging previously applied allocations.

    Args:
        open_transactions: Open transactions of the selected partner.
        initial_allocations: Allocations applied in an earlier session.

    Returns:
        tuple[DebtRow, ...]: Rows in the order of ``open_transactions``.
    """
    previous = {
        allocation.transaction_id: allocation.amount
        for allocation in initial_allocations
    }
    rows = []
    for transaction in open_transactions:
        leftover = transaction.leftover
        allocate = previous.get(transaction.id, ZERO)
        rows.append(
            DebtRow(
                transaction_id=transaction.id,
                date=transaction.date,
                total_due=transaction.total_due,
                total_paid=transaction.total_paid,
                leftover=leftover,
                allocate=allocate,
                pay_fully=transaction.id in previous and allocate == leftover,
            )
        )
    return tuple(rows)


def total_covered(rows: Sequence[DebtRow]) -> Decimal:
    """Return the sum allocated over all rows."""
    return sum((row.allocate for row in rows), ZERO)


def total_debt(rows: Sequence[DebtRow]) -> Decimal:
    """Return the sum of the leftovers over all rows."""
    return sum((row.leftover for row in rows), ZERO)


def remaining_available(
    rows: Sequence[DebtRow],
    available_amount: Decimal,
) -> Decimal:
    """Return the part of the pool not allocated yet (may be negative)."""
    return available_amount - total_covered(rows)


def summarize_debt_rows(
    rows: Sequence[DebtRow],
    available_amount: Decimal,
) -> DebtAllocationSummary:
    """Compute session totals and the apply gate.

    A session may be applied when it allocates nothing, or when it is not
    over-allocated and either exhausts the pool or clears every debt.

    Args:
        rows: Current session rows.
        available_amount: Pool that can be allocated in this session.

    Returns:
        DebtAllocationSummary: Totals and the ``can_save`` gate.
    """
    covered = total_covered(rows)
    debt = total_debt(rows)
    remaining = available_amount - covered
    over_allocated = remaining < 0
    debt_left = max(debt - covered, ZERO)
    can_save = covered == 0 or (
        not over_allocated and (remaining == 0 or debt_left == 0)
    )
    return DebtAllocationSummary(
        total_debt=debt,
        total_covered=covered,
        remaining_available=remaining,
        debt_left=debt_left,
        over_allocated=over_allocated,
        can_save=can_save,
    )


def row_capacity(
    rows: Sequence[DebtRow],
    index: int,
    available_amount: Decimal,
) -> Decimal:
    """Return the most the row at ``index`` may receive."""
    row = rows[index]
    return min(
        row.leftover,
        remaining_available(rows, available_amount) + row.allocate,
    )


def can_pay_fully(
    rows: Sequence[DebtRow],
    index: int,
    available_amount: Decimal,
) -> bool:
    """Return True when the pool can cover the whole leftover of a row."""
    if not _in_range(rows, index):
        return False
    row = rows[index]
    return row.leftover <= (
        remaining_available(rows, available_amount) + row.allocate
    )


def change_allocate(
    rows: Sequence[DebtRow],
    index: int,
    value: Decimal,
    available_amount: Decimal,
) -> tuple[DebtRow, ...]:
    """Set the allocation of one row, clamped to what the pool allows.

    Args:
        rows: Current session rows.
        index: Position of the row to change.
        value: Requested allocation.
        available_amount: Pool that can be allocated in this session.

    Returns:
        tuple[DebtRow, ...]: Updated rows.
    """
    if not _in_range(rows, index):
        return tuple(rows)
    row = rows[index]
    clamped = max(
        ZERO,
        min(value, row_capacity(rows, index, available_amount)),
    )
    return _replace_at(
        rows,
        index,
        replace(row, allocate=clamped, pay_fully=clamped == row.leftover),
    )


def toggle_pay_fully(
    rows: Sequence[DebtRow],
    index: int,
    available_amount: Decimal,
) -> tuple[DebtRow, ...]:
    """Switch a row between fully paid and unallocated.

    Turning the flag on is refused when the pool cannot cover the leftover.

    Args:
        rows: Current session rows.
        index: Position of the row to toggle.
        available_amount: Pool that can be allocated in this session.

    Returns:
        tuple[DebtRow, ...]: Updated rows.
    """
    if not _in_range(rows, index):
        return tuple(rows)
    row = rows[index]
    if row.pay_fully:
        updated = replace(row, allocate=ZERO, pay_fully=False)
    elif can_pay_fully(rows, index, available_amount):
        updated = replace(
            row,
            allocate=row_capacity(rows, index, available_amount),
            pay_fully=True,
        )
    else:
        return tuple(rows)
    return _replace_at(rows, index, updated)


def auto_allocate_oldest(
    rows: Sequence[DebtRow],
    available_amount: Decimal,
) -> tuple[DebtRow, ...]:
    """Spread the remaining pool over the oldest debts first.

    Rows keep their display order; only the allocation values change.

    Args:
        rows: Current session rows.
        available_amount: Pool that can be allocated in this session.

    Returns:
        tuple[DebtRow, ...]: Updated rows.
    """
    budget = remaining_available(rows, available_amount)
    oldest_first = sorted(range(len(rows)), key=lambda i: rows[i].date)
    allocated: dict[int, DebtRow] = {}
    for index in oldest_first:
        row = rows[index]
        allocate = max(min(row.leftover, budget), ZERO)
        budget -= allocate
        allocated[index] = replace(
            row,
            allocate=allocate,
            pay_fully=allocate == row.leftover,
        )
    return tuple(allocated[index] for index in range(len(rows)))


def reset_allocations(rows: Sequence[DebtRow]) -> tuple[DebtRow, ...]:
    """Clear every allocation of the session."""
    return tuple(
        replace(row, allocate=ZERO, pay_fully=False) for row in rows
    )


def to_debt_allocations(
    rows: Sequence[DebtRow],
) -> tuple[DebtAllocation, ...]:
    """Return the allocations of rows that received part of the pool."""
    return tuple(
        DebtAllocation(transaction_id=row.transaction_id, amount=row.allocate)
        for row in rows
        if row.allocate > 0
    )


def _in_range(rows: Sequence[DebtRow], index: int) -> bool:
    return 0 <= index < len(rows)


def _replace_at(
    rows: Sequence[DebtRow],
    index: int,
    row: DebtRow,
) -> tuple[DebtRow, ...]:
    updated = list(rows)
    updated[index] = row
    return tuple(updated)


__all__ = [
    "build_debt_rows",
    "total_covered",
    "total_debt",
    "remaining_available",
    "summarize_debt_rows",
    "row_capacity",
    "can_pay_fully",
    "change_allocate",
    "toggle_pay_fully",
    "auto_allocate_oldest",
    "reset_allocations",
    "to_debt_allocations",
]
