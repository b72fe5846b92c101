"""CLI adapter printing an oldest-first debt allocation plan.

The partner, transaction mode and amount to distribute are read from the
``DEBT_PLAN_PARTNER_ID``, ``DEBT_PLAN_MODE`` and ``DEBT_PLAN_AMOUNT``
environment variables.
"""

import os

from src.application.use_cases.debt_allocator import DebtAllocator
from src.domain.constants import SALE, TRANSACTION_MODES
from src.infrastructure.container import build_partner_ledger_repository
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal


def _parse_partner_id(value: str | None, logger) -> int | None:
    """Parse the partner identifier.

    Args:
        value: Raw identifier string.
        logger: Logger used for warnings.

    Returns:
        int | None: Parsed identifier or None when invalid.
    """
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid partner id '{value}'. Expected an integer.")
        return None


def main() -> None:
    """Print how an amount would retire a partner's oldest debts."""
    logger = get_app_logger()
    partner_id = _parse_partner_id(os.getenv("DEBT_PLAN_PARTNER_ID"), logger)
    if partner_id is None:
        logger.warning("DEBT_PLAN_PARTNER_ID is required to plan debts.")
        return
    mode = os.getenv("DEBT_PLAN_MODE", SALE)
    if mode not in TRANSACTION_MODES:
        logger.warning(f"Unknown transaction mode '{mode}'.")
        return
    amount = coerce_decimal(os.getenv("DEBT_PLAN_AMOUNT", "0"))
    if not amount.is_finite() or amount < 0:
        logger.warning("DEBT_PLAN_AMOUNT must be a non-negative number.")
        return

    repository = build_partner_ledger_repository()
    allocator = DebtAllocator(
        repository.fetch_open_transactions(partner_id, mode),
        available_amount=amount,
        logger=logger,
    )
    if allocator.is_loading:
        logger.error("Open transactions are not available.")
        return

    allocator.auto_allocate_oldest()
    for row in allocator.rows:
        marker = "full" if row.pay_fully else "part"
        print(
            f"{row.date} #{row.transaction_id}: "
            f"{row.allocate} / {row.leftover} ({marker})"
        )
    summary = allocator.summary()
    print(
        f"Allocated {summary.total_covered} of {amount}; "
        f"debt left {summary.debt_left}."
    )


if __name__ == "__main__":  # pragma: no cover
    main()
