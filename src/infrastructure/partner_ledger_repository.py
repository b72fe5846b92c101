"""SQLAlchemy-backed repository for partner balances and open debts."""

from sqlalchemy import bindparam, text
from sqlalchemy.exc import SQLAlchemyError

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.partner_ledger import (
    OpenTransactionsPort,
    PartnerBalancePort,
)
from src.domain.constants import OPEN_TRANSACTION_STATUSES
from src.domain.models import (
    Loadable,
    OpenTransaction,
    PartnerBalance,
    Pending,
    Ready,
)
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal

PARTNER_BALANCE_SQL = text(
    """
    SELECT total,
           partner_advance,
           company_advance,
           payable_debt,
           receivable_debt
    FROM partner_balances
    WHERE partner_id = :partner_id
    """
)

OPEN_TRANSACTIONS_SQL = text(
    """
    SELECT id, date, total_due, total_paid
    FROM transactions
    WHERE partner_id = :partner_id
      AND type = :type
      AND status IN :statuses
    ORDER BY date, id
    """
).bindparams(bindparam("statuses", expanding=True))


class SqlAlchemyPartnerLedgerRepository(
    PartnerBalancePort,
    OpenTransactionsPort,
):
    """Read partner balances and open transactions with SQLAlchemy.

    Database failures are logged and surfaced the way the payment engine
    expects unavailable data: an empty balance and a ``Pending`` collection.
    """

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the business engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    def fetch_partner_balance(self, partner_id: int) -> PartnerBalance:
        try:
            engine = self._db_port.get_business_engine()
            with engine.connect() as conn:
                row = conn.execute(
                    PARTNER_BALANCE_SQL,
                    {"partner_id": partner_id},
                ).first()
        except SQLAlchemyError as exc:
            self._logger.error(
                f"Failed to load balance of partner {partner_id}: {exc}"
            )
            return PartnerBalance.empty()
        if row is None:
            self._logger.warning(f"No balance found for partner {partner_id}")
            return PartnerBalance.empty()
        return PartnerBalance(
            total=coerce_decimal(row.total),
            partner_advance=coerce_decimal(row.partner_advance),
            company_advance=coerce_decimal(row.company_advance),
            payable_debt=coerce_decimal(row.payable_debt),
            receivable_debt=coerce_decimal(row.receivable_debt),
        )

    def fetch_open_transactions(
        self,
        partner_id: int,
        mode: str,
    ) -> Loadable:
        params = {
            "partner_id": partner_id,
            "type": mode,
            "statuses": OPEN_TRANSACTION_STATUSES,
        }
        try:
            engine = self._db_port.get_business_engine()
            with engine.connect() as conn:
                rows = conn.execute(OPEN_TRANSACTIONS_SQL, params).all()
        except SQLAlchemyError as exc:
            self._logger.error(
                f"Failed to load open transactions of partner {partner_id}: "
                f"{exc}"
            )
            return Pending()
        transactions = tuple(
            OpenTransaction(
                id=row.id,
                date=row.date,
                total_due=coerce_decimal(row.total_due),
                total_paid=coerce_decimal(row.total_paid),
            )
            for row in rows
        )
        self._logger.info(
            f"Fetched {len(transactions)} open {mode} transactions "
            f"for partner {partner_id}"
        )
        return Ready(transactions)


__all__ = ["SqlAlchemyPartnerLedgerRepository"]
