"""Composition root for wiring infrastructure adapters."""

from src.application.ports.database import DatabaseEnginePort
from src.application.use_cases.transaction_payment import (
    TransactionPaymentSession,
)
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.partner_ledger_repository import (
    SqlAlchemyPartnerLedgerRepository,
)
from src.infrastructure.settings import PaymentSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_partner_ledger_repository(
    db_port: DatabaseEnginePort | None = None,
) -> SqlAlchemyPartnerLedgerRepository:
    """Return the repository serving balances and open transactions."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyPartnerLedgerRepository(
        resolved_db,
        logger=get_app_logger(),
    )


def build_transaction_payment_session(
    mode: str,
    total_due,
    db_port: DatabaseEnginePort | None = None,
    settings: PaymentSettings | None = None,
) -> TransactionPaymentSession:
    """Return a payment session wired to the configured repository."""
    resolved_settings = settings or PaymentSettings.from_env()
    repository = build_partner_ledger_repository(db_port)
    return TransactionPaymentSession(
        mode,
        total_due,
        balance_port=repository,
        open_transactions_port=repository,
        refund_change=resolved_settings.refund_change_default,
        local_currency=resolved_settings.local_currency,
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_partner_ledger_repository",
    "build_transaction_payment_session",
]
