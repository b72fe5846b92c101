"""Application ports for partner balances and open transactions."""

from typing import Protocol

from src.domain.models import Loadable, PartnerBalance


class PartnerBalancePort(Protocol):
    """Port exposing the running balance of a partner."""

    def fetch_partner_balance(self, partner_id: int) -> PartnerBalance:
        """Return the balance snapshot of a partner."""


class OpenTransactionsPort(Protocol):
    """Port exposing the open transactions of a partner."""

    def fetch_open_transactions(
        self,
        partner_id: int,
        mode: str,
    ) -> Loadable:
        """Return ``Ready`` open transactions, ``Pending`` if unavailable."""


__all__ = ["PartnerBalancePort", "OpenTransactionsPort"]
