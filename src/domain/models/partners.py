"""Domain models for partner balances."""

from dataclasses import dataclass
from decimal import Decimal

from src.domain.constants import SALE


@dataclass(frozen=True)
class PartnerBalance:
    """Read-only snapshot of a partner's running balance.

    Attributes:
        total: Signed running balance of the partner.
        partner_advance: Credit the partner holds with the business.
        company_advance: Credit the business holds with the partner.
        payable_debt: Open debt the partner owes (sales side).
        receivable_debt: Open debt the business owes (supply side).
    """

    total: Decimal = Decimal("0")
    partner_advance: Decimal = Decimal("0")
    company_advance: Decimal = Decimal("0")
    payable_debt: Decimal = Decimal("0")
    receivable_debt: Decimal = Decimal("0")

    @classmethod
    def empty(cls) -> "PartnerBalance":
        """Return the zero balance used when no partner is selected."""
        return cls()

    def advance_for(self, mode: str) -> Decimal:
        """Return the advance usable toward a transaction of ``mode``."""
        return self.partner_advance if mode == SALE else self.company_advance

    def debt_for(self, mode: str) -> Decimal:
        """Return the open debt relevant to a transaction of ``mode``."""
        return self.payable_debt if mode == SALE else self.receivable_debt


__all__ = ["PartnerBalance"]
