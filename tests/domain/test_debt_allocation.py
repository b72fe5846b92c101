"""Tests for the debt allocation domain service."""

from datetime import date
from decimal import Decimal

from src.domain.models import DebtAllocation, OpenTransaction
from src.domain.services import debt_allocation


def _open_transactions():
    # listed newest first to check that display order is kept
    return (
        OpenTransaction(
            id=2,
            date=date(2024, 3, 1),
            total_due=Decimal("250"),
            total_paid=Decimal("50"),
        ),
        OpenTransaction(
            id=1,
            date=date(2024, 1, 10),
            total_due=Decimal("100"),
            total_paid=Decimal("0"),
        ),
    )


def _rows(initial=()):
    return debt_allocation.build_debt_rows(_open_transactions(), initial)


def test_build_debt_rows_computes_leftover_and_merges_allocations() -> None:
    """Rows should carry leftovers and earlier allocations."""
    rows = _rows(initial=(DebtAllocation(1, Decimal("100")),))

    assert [row.transaction_id for row in rows] == [2, 1]
    assert rows[0].leftover == Decimal("200")
    assert rows[0].allocate == Decimal("0")
    assert rows[0].pay_fully is False
    assert rows[1].allocate == Decimal("100")
    assert rows[1].pay_fully is True


def test_auto_allocate_oldest_fills_oldest_first() -> None:
    """A pool of 250 should pay 100 fully and 150 of the next debt."""
    rows = debt_allocation.auto_allocate_oldest(_rows(), Decimal("250"))

    assert [row.transaction_id for row in rows] == [2, 1]
    assert rows[1].allocate == Decimal("100")
    assert rows[1].pay_fully is True
    assert rows[0].allocate == Decimal("150")
    assert rows[0].pay_fully is False
    assert debt_allocation.total_covered(rows) == Decimal("250")


def test_auto_allocate_oldest_never_goes_negative() -> None:
    """An exhausted pool should leave zero allocations."""
    rows = debt_allocation.auto_allocate_oldest(_rows(), Decimal("0"))

    assert all(row.allocate == 0 for row in rows)


def test_summary_blocks_partial_allocation_with_pool_left() -> None:
    """Covered 150 of 300 debt with 50 unused may not be saved."""
    transactions = (
        OpenTransaction(
            id=9,
            date=date(2024, 2, 1),
            total_due=Decimal("300"),
            total_paid=Decimal("0"),
        ),
    )
    rows = debt_allocation.build_debt_rows(
        transactions,
        (DebtAllocation(9, Decimal("150")),),
    )

    summary = debt_allocation.summarize_debt_rows(rows, Decimal("200"))

    assert summary.total_covered == Decimal("150")
    assert summary.total_debt == Decimal("300")
    assert summary.remaining_available == Decimal("50")
    assert summary.debt_left == Decimal("150")
    assert summary.can_save is False


def test_summary_allows_empty_exhausted_or_cleared_sessions() -> None:
    """Nothing allocated, pool exhausted, or debt cleared may be saved."""
    empty = debt_allocation.summarize_debt_rows(_rows(), Decimal("500"))
    exhausted = debt_allocation.summarize_debt_rows(
        debt_allocation.auto_allocate_oldest(_rows(), Decimal("250")),
        Decimal("250"),
    )
    cleared = debt_allocation.summarize_debt_rows(
        debt_allocation.auto_allocate_oldest(_rows(), Decimal("500")),
        Decimal("500"),
    )

    assert empty.can_save is True
    assert exhausted.can_save is True
    assert cleared.remaining_available == Decimal("200")
    assert cleared.debt_left == Decimal("0")
    assert cleared.can_save is True


def test_summary_flags_over_allocation() -> None:
    """Allocations above the pool should close the gate."""
    rows = _rows(initial=(DebtAllocation(1, Decimal("100")),))

    summary = debt_allocation.summarize_debt_rows(rows, Decimal("50"))

    assert summary.over_allocated is True
    assert summary.can_save is False


def test_change_allocate_clamps_to_capacity() -> None:
    """Requested values should be clamped to pool and leftover."""
    rows = _rows()
    pool = Decimal("120")

    too_much = debt_allocation.change_allocate(rows, 0, Decimal("500"), pool)
    negative = debt_allocation.change_allocate(rows, 0, Decimal("-5"), pool)
    exact = debt_allocation.change_allocate(rows, 1, Decimal("100"), pool)

    assert too_much[0].allocate == Decimal("120")
    assert too_much[0].pay_fully is False
    assert negative[0].allocate == Decimal("0")
    assert exact[1].allocate == Decimal("100")
    assert exact[1].pay_fully is True


def test_change_allocate_ignores_unknown_index() -> None:
    rows = _rows()

    result = debt_allocation.change_allocate(
        rows, 5, Decimal("1"), Decimal("10")
    )

    assert result == rows


def test_can_pay_fully_counts_own_allocation() -> None:
    """A row's own allocation is part of what it can reach."""
    rows = debt_allocation.change_allocate(
        _rows(), 1, Decimal("60"), Decimal("100")
    )

    assert debt_allocation.can_pay_fully(rows, 1, Decimal("100")) is True
    assert debt_allocation.can_pay_fully(rows, 0, Decimal("100")) is False
    assert debt_allocation.can_pay_fully(rows, 7, Decimal("100")) is False


def test_toggle_pay_fully_round_trips() -> None:
    """Toggling twice should restore the initial row."""
    rows = _rows()

    toggled = debt_allocation.toggle_pay_fully(rows, 1, Decimal("300"))
    restored = debt_allocation.toggle_pay_fully(toggled, 1, Decimal("300"))

    assert toggled[1].allocate == Decimal("100")
    assert toggled[1].pay_fully is True
    assert restored == rows


def test_toggle_pay_fully_refused_without_capacity() -> None:
    """The flag stays off when the pool cannot cover the leftover."""
    rows = _rows()

    result = debt_allocation.toggle_pay_fully(rows, 0, Decimal("150"))

    assert result == rows


def test_reset_and_export_allocations() -> None:
    """Only rows with a positive allocation are exported."""
    rows = debt_allocation.auto_allocate_oldest(_rows(), Decimal("100"))

    allocations = debt_allocation.to_debt_allocations(rows)
    reset = debt_allocation.reset_allocations(rows)

    assert allocations == (DebtAllocation(1, Decimal("100")),)
    assert debt_allocation.total_covered(reset) == Decimal("0")
    assert not any(row.pay_fully for row in reset)
