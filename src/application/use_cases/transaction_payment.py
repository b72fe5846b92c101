"""Use case wiring payment entry to partner data for one transaction."""

from src.application.ports.partner_ledger import (
    OpenTransactionsPort,
    PartnerBalancePort,
)
from src.application.use_cases.debt_allocator import DebtAllocator
from src.application.use_cases.payment_rows import PaymentRowSet
from src.domain.constants import DEFAULT_REFUND_CHANGE, LOCAL_CURRENCY
from src.domain.models import (
    PartnerBalance,
    Pending,
    TransactionPaymentRequest,
)
from src.infrastructure.logging.logger import get_app_logger


class TransactionPaymentSession:
    """Payment step of a sale or supply being created.

    The session owns a ``PaymentRowSet`` and reaches partner balances and
    open transactions only through the ports passed to it.
    """

    def __init__(
        self,
        mode: str,
        total_due,
        balance_port: PartnerBalancePort,
        open_transactions_port: OpenTransactionsPort,
        *,
        refund_change: bool = DEFAULT_REFUND_CHANGE,
        local_currency: str = LOCAL_CURRENCY,
        logger=None,
    ) -> None:
        """Initialize the session without a selected partner.

        Args:
            mode: Transaction mode (Sale or Supply).
            total_due: Amount due for the transaction.
            balance_port: Port returning partner balances.
            open_transactions_port: Port returning open transactions.
            refund_change: Whether change is handed back by default.
            local_currency: Mnemonic of the local currency.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._logger = logger or get_app_logger()
        self._balance_port = balance_port
        self._open_transactions_port = open_transactions_port
        self._partner_id: int | None = None
        self.rows = PaymentRowSet(
            mode,
            total_due,
            refund_change=refund_change,
            local_currency=local_currency,
            logger=self._logger,
        )

    @property
    def partner_id(self) -> int | None:
        return self._partner_id

    def select_partner(self, partner_id: int | None) -> PartnerBalance:
        """Select a partner, load its balance and drop debt allocations.

        Args:
            partner_id: Identifier of the partner, or None to clear it.

        Returns:
            PartnerBalance: Balance now used by the payment rows.
        """
        self._partner_id = partner_id
        if partner_id is None:
            balance = PartnerBalance.empty()
        else:
            balance = self._balance_port.fetch_partner_balance(partner_id)
        self.rows.select_partner(balance)
        self._logger.info(
            f"Selected partner {partner_id} with balance {balance.total}"
        )
        return balance

    def open_debt_allocator(self) -> DebtAllocator:
        """Start a debt allocation session for the selected partner.

        Returns:
            DebtAllocator: Session over the partner's open transactions,
            empty and loading when no partner is selected.
        """
        if self._partner_id is None:
            open_transactions = Pending()
        else:
            open_transactions = (
                self._open_transactions_port.fetch_open_transactions(
                    self._partner_id,
                    self.rows.mode,
                )
            )
        return DebtAllocator(
            open_transactions,
            available_amount=self.rows.debt_allocation_pool,
            initial_allocations=self.rows.debt_allocations,
            logger=self._logger,
        )

    def apply_debt_allocator(self, allocator: DebtAllocator) -> bool:
        """Store the allocations of a session when it may be saved.

        Returns:
            bool: True when the allocations were stored.
        """
        allocations = allocator.apply()
        if allocations is None:
            return False
        self.rows.set_debt_allocations(allocations)
        return True

    def build_request(
        self,
        notes: str | None = None,
    ) -> TransactionPaymentRequest:
        """Return the payment part of the transaction creation request.

        Args:
            notes: Free-text comment stored with the payment.
        """
        return TransactionPaymentRequest(
            partner_id=self._partner_id,
            mode=self.rows.mode,
            payments=tuple(self.rows.build_payment_payload()),
            debt_payments=tuple(self.rows.build_debt_allocation_payload()),
            refund_change=self.rows.refund_change,
            notes=(notes or "").strip(),
        )


__all__ = ["TransactionPaymentSession"]
