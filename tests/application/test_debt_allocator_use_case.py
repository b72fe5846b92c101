"""Tests for the DebtAllocator use case."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from src.application.use_cases.debt_allocator import DebtAllocator
from src.domain.models import DebtAllocation, OpenTransaction, Pending, Ready


def _open_transactions():
    return Ready(
        (
            OpenTransaction(
                id=10,
                date=date(2024, 1, 5),
                total_due=Decimal("100"),
                total_paid=Decimal("0"),
            ),
            OpenTransaction(
                id=11,
                date=date(2024, 2, 5),
                total_due=Decimal("200"),
                total_paid=Decimal("0"),
            ),
        )
    )


def test_pending_transactions_disable_actions() -> None:
    """A loading session should expose no rows and ignore actions."""
    allocator = DebtAllocator(Pending(), Decimal("100"), logger=MagicMock())

    allocator.change_allocate(0, "50")
    allocator.toggle_pay_fully(0)
    allocator.auto_allocate_oldest()

    assert allocator.is_loading is True
    assert allocator.rows == ()
    assert allocator.can_pay_fully(0) is False
    assert allocator.apply() == ()


def test_load_replaces_pending_with_rows() -> None:
    allocator = DebtAllocator(Pending(), Decimal("100"), logger=MagicMock())

    allocator.load(_open_transactions())

    assert allocator.is_loading is False
    assert [row.transaction_id for row in allocator.rows] == [10, 11]


def test_auto_allocate_and_apply() -> None:
    """Auto allocation over 250 should pay 100 and 150."""
    logger = MagicMock()
    allocator = DebtAllocator(_open_transactions(), "250", logger=logger)

    allocator.auto_allocate_oldest()

    assert allocator.apply() == (
        DebtAllocation(10, Decimal("100")),
        DebtAllocation(11, Decimal("150")),
    )
    logger.info.assert_called_once()


def test_apply_refused_when_pool_left_and_debt_open() -> None:
    """A partial allocation leaving pool and debt should be rejected."""
    logger = MagicMock()
    allocator = DebtAllocator(_open_transactions(), "250", logger=logger)

    allocator.change_allocate(1, "150")

    assert allocator.can_save is False
    assert allocator.apply() is None
    logger.warning.assert_called_once()


def test_change_allocate_treats_non_numbers_as_zero() -> None:
    allocator = DebtAllocator(
        _open_transactions(),
        "250",
        initial_allocations=[DebtAllocation(10, Decimal("100"))],
        logger=MagicMock(),
    )

    allocator.change_allocate(0, "abc")

    assert allocator.rows[0].allocate == Decimal("0")


def test_initial_allocations_are_restored() -> None:
    """Earlier allocations should be visible when reopening a session."""
    allocator = DebtAllocator(
        _open_transactions(),
        "300",
        initial_allocations=[DebtAllocation(10, Decimal("100"))],
        logger=MagicMock(),
    )

    assert allocator.rows[0].allocate == Decimal("100")
    assert allocator.rows[0].pay_fully is True
    assert allocator.summary().remaining_available == Decimal("200")
    assert allocator.can_pay_fully(1) is True


def test_toggle_and_reset() -> None:
    allocator = DebtAllocator(_open_transactions(), "300", logger=MagicMock())

    allocator.toggle_pay_fully(1)
    assert allocator.rows[1].allocate == Decimal("200")

    allocator.reset()
    assert allocator.summary().total_covered == Decimal("0")
    assert allocator.apply() == ()


def test_over_allocation_never_survives_apply() -> None:
    """Earlier allocations above a shrunken pool should be rejected."""
    allocator = DebtAllocator(
        _open_transactions(),
        "50",
        initial_allocations=[DebtAllocation(10, Decimal("100"))],
        logger=MagicMock(),
    )

    assert allocator.summary().over_allocated is True
    assert allocator.apply() is None

    allocator.change_allocate(0, "100")

    assert allocator.apply() == (DebtAllocation(10, Decimal("50")),)


def test_non_finite_pool_falls_back_to_zero() -> None:
    """Unusable pools should allocate nothing instead of raising."""
    for raw in ("abc", "NaN", "Infinity", Decimal("sNaN")):
        logger = MagicMock()
        allocator = DebtAllocator(_open_transactions(), raw, logger=logger)

        allocator.change_allocate(0, "50")
        allocator.toggle_pay_fully(1)
        allocator.auto_allocate_oldest()

        assert allocator.available_amount == Decimal("0")
        assert allocator.summary().total_covered == Decimal("0")
        assert allocator.can_pay_fully(0) is False
        assert allocator.apply() == ()
        logger.warning.assert_called_once()
