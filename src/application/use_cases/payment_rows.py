"""Use case holding the payment rows typed for one transaction.

``PaymentRowSet`` owns the mutable editing state (rows, debt allocations,
refund flag, partner balance). Every read of ``summary()`` re-derives the
figures from scratch through the pure domain calculator; results are
memoized on the immutable inputs.
"""

from dataclasses import replace
from decimal import Decimal
from functools import lru_cache

from src.domain.constants import (
    ACCOUNT_CREDIT,
    DEFAULT_REFUND_CHANGE,
    FUNDING_METHODS,
    LOCAL_CURRENCY,
    SALE,
)
from src.domain.models import (
    DebtAllocation,
    PartnerBalance,
    PaymentRecord,
    PaymentRow,
    PaymentSummary,
)
from src.domain.services.normalization import (
    normalize_currency,
    normalize_method,
)
from src.domain.services.payment_summary import (
    compute_payment_summary,
    compute_total_paid,
)
from src.domain.services.validation import payment_row_issues
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal

ZERO = Decimal("0")

_summarize = lru_cache(maxsize=128)(compute_payment_summary)


class PaymentRowSet:
    """Payment rows and debt allocations of a transaction being saved.

    The set always holds at least one row. Debt allocations are replaced
    wholesale and are dropped whenever the overpayment falls to zero or a
    different partner is selected.
    """

    def __init__(
        self,
        mode: str,
        total_due,
        partner_balance: PartnerBalance | None = None,
        *,
        refund_change: bool = DEFAULT_REFUND_CHANGE,
        local_currency: str = LOCAL_CURRENCY,
        logger=None,
    ) -> None:
        """Initialize the row set with one default cash row.

        Args:
            mode: Transaction mode (Sale or Supply).
            total_due: Amount due for the transaction.
            partner_balance: Balance of the selected partner, if any.
            refund_change: Whether change is handed back to the partner.
            local_currency: Mnemonic of the local currency.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._logger = logger or get_app_logger()
        self._mode = mode
        self._total_due = self._coerce_total(total_due)
        self._partner_balance = partner_balance or PartnerBalance.empty()
        self._refund_change = refund_change
        self._local_currency = local_currency
        self._payments: tuple[PaymentRow, ...] = (
            self._default_row(1),
        )
        self._next_id = 2
        self._debt_allocations: tuple[DebtAllocation, ...] = ()

    @property
    def mode(self) -> str:
        return self._mode

    @property
    def total_due(self) -> Decimal:
        return self._total_due

    @property
    def partner_balance(self) -> PartnerBalance:
        return self._partner_balance

    @property
    def local_currency(self) -> str:
        return self._local_currency

    @property
    def payments(self) -> tuple[PaymentRow, ...]:
        return self._payments

    @property
    def debt_allocations(self) -> tuple[DebtAllocation, ...]:
        return self._debt_allocations

    @property
    def refund_change(self) -> bool:
        return self._refund_change

    @property
    def advance(self) -> Decimal:
        """Advance usable toward this transaction's mode."""
        return self._partner_balance.advance_for(self._mode)

    def summary(self) -> PaymentSummary:
        """Return the figures derived from the current inputs."""
        return _summarize(
            mode=self._mode,
            total_due=self._total_due,
            payments=self._payments,
            debt_allocations=self._debt_allocations,
            refund_change=self._refund_change,
            partner_balance=self._partner_balance,
            local_currency=self._local_currency,
        )

    @property
    def has_account_credit_row(self) -> bool:
        """True when a row already draws a positive amount of credit."""
        return any(
            row.method == ACCOUNT_CREDIT and row.amount > 0
            for row in self._payments
            if row.amount.is_finite()
        )

    @property
    def open_debt_exists(self) -> bool:
        return self._partner_balance.debt_for(self._mode) > 0

    @property
    def debt_allocation_pool(self) -> Decimal:
        """Amount a debt allocation session may distribute."""
        summary = self.summary()
        return summary.overpaid + summary.debt_paid

    @property
    def can_save(self) -> bool:
        return self.summary().payment_is_valid

    def available_payment_methods(self) -> tuple[str, ...]:
        """Return the methods a row may choose from.

        Account credit is offered only while an advance exists and no row
        uses it yet.
        """
        if self.advance > 0 and not self._uses_account_credit():
            return FUNDING_METHODS + (ACCOUNT_CREDIT,)
        return FUNDING_METHODS

    def row_issues(self, payment_id: int) -> tuple[str, ...]:
        """Return the rule violations of one row (empty when unknown)."""
        row = self._find(payment_id)
        if row is None:
            return ()
        return payment_row_issues(
            row,
            advance=self.advance,
            local_currency=self._local_currency,
        )

    def add_payment(self) -> PaymentRow:
        """Append a row, pre-filled with account credit when it applies.

        On a sale with an available advance, an unpaid remainder, and no
        credit row yet, the new row draws ``min(remainder, |advance|)`` of
        credit. Otherwise it is an empty cash row.

        Returns:
            PaymentRow: The appended row.
        """
        remaining = max(
            self._total_due - compute_total_paid(self._payments),
            ZERO,
        )
        auto_credit = (
            self._mode == SALE
            and self.advance > 0
            and remaining > 0
            and not self._uses_account_credit()
        )
        if auto_credit:
            row = PaymentRow(
                id=self._next_id,
                amount=min(remaining, abs(self.advance)),
                currency=self._local_currency,
                exchange_rate=Decimal("1"),
                method=ACCOUNT_CREDIT,
            )
        else:
            row = self._default_row(self._next_id)
        self._next_id += 1
        self._payments = self._payments + (row,)
        self._logger.debug(
            f"Added payment row {row.id} with method {row.method}"
        )
        self._after_change()
        return row

    def update_payment(self, payment_id: int, **patch) -> PaymentRow | None:
        """Merge ``patch`` into the row with ``payment_id``.

        Switching a row to account credit forces local currency at rate 1
        and clamps the amount to ``min(remainder, |advance|)``, where the
        remainder ignores the row itself.

        Args:
            payment_id: Identifier of the row to update.
            **patch: Row fields to overwrite (amount, currency,
                exchange_rate, method, reference).

        Returns:
            PaymentRow | None: Updated row, or None when the id is unknown.
        """
        current = self._find(payment_id)
        if current is None:
            self._logger.warning(
                f"Ignoring update of unknown row {payment_id}"
            )
            return None

        updated = replace(current, **self._normalize_patch(patch, current))
        if updated.method == ACCOUNT_CREDIT:
            others = compute_total_paid(
                [row for row in self._payments if row.id != payment_id]
            )
            remaining = max(self._total_due - others, ZERO)
            updated = replace(
                updated,
                currency=self._local_currency,
                exchange_rate=Decimal("1"),
                amount=min(remaining, abs(self.advance)),
            )

        self._payments = tuple(
            updated if row.id == payment_id else row for row in self._payments
        )
        self._after_change()
        return updated

    def remove_payment(self, payment_id: int) -> bool:
        """Remove a row unless it is the last one.

        Returns:
            bool: True when a row was removed.
        """
        if len(self._payments) <= 1:
            return False
        remaining = tuple(
            row for row in self._payments if row.id != payment_id
        )
        if len(remaining) == len(self._payments):
            return False
        self._payments = remaining
        self._after_change()
        return True

    def set_debt_allocations(self, allocations) -> None:
        """Replace every debt allocation with ``allocations``."""
        self._debt_allocations = tuple(
            DebtAllocation(
                transaction_id=allocation.transaction_id,
                amount=coerce_decimal(allocation.amount),
            )
            for allocation in allocations
        )
        self._after_change()

    def set_refund_change(self, flag: bool) -> None:
        self._refund_change = flag
        self._after_change()

    def set_total_due(self, total_due) -> None:
        self._total_due = self._coerce_total(total_due)
        self._after_change()

    def select_partner(self, partner_balance: PartnerBalance | None) -> None:
        """Switch to another partner and drop every debt allocation."""
        self._partner_balance = partner_balance or PartnerBalance.empty()
        if self._debt_allocations:
            self._logger.info(
                "Partner changed, clearing "
                f"{len(self._debt_allocations)} debt allocations"
            )
        self._debt_allocations = ()

    def build_payment_payload(self) -> list[PaymentRecord]:
        """Return the rows in the shape expected by persistence."""
        return [
            PaymentRecord(
                amount=row.amount,
                currency=row.currency,
                exchange_rate=row.exchange_rate,
                method=row.method,
            )
            for row in self._payments
        ]

    def build_debt_allocation_payload(self) -> list[DebtAllocation]:
        return list(self._debt_allocations)

    def _after_change(self) -> None:
        if self._debt_allocations and self.summary().overpaid == 0:
            self._logger.info(
                "Overpayment dropped to zero, clearing debt allocations"
            )
            self._debt_allocations = ()

    def _uses_account_credit(self) -> bool:
        return any(row.method == ACCOUNT_CREDIT for row in self._payments)

    def _find(self, payment_id: int) -> PaymentRow | None:
        for row in self._payments:
            if row.id == payment_id:
                return row
        return None

    def _coerce_total(self, total_due) -> Decimal:
        value = coerce_decimal(total_due)
        if not value.is_finite():
            self._logger.warning(f"Invalid total due {total_due!r}, using 0")
            return ZERO
        return value

    def _default_row(self, payment_id: int) -> PaymentRow:
        return PaymentRow(id=payment_id, currency=self._local_currency)

    def _normalize_patch(self, patch: dict, current: PaymentRow) -> dict:
        normalized = dict(patch)
        normalized.pop("id", None)
        if "amount" in normalized:
            normalized["amount"] = coerce_decimal(normalized["amount"])
        if "exchange_rate" in normalized:
            normalized["exchange_rate"] = coerce_decimal(
                normalized["exchange_rate"]
            )
        if "currency" in normalized:
            normalized["currency"] = normalize_currency(
                normalized["currency"],
                self._local_currency,
            )
        if "method" in normalized:
            normalized["method"] = normalize_method(
                normalized["method"],
                current.method,
            )
        return normalized


__all__ = ["PaymentRowSet"]
