"""Application ports package."""

from .database import DatabaseEnginePort
from .partner_ledger import OpenTransactionsPort, PartnerBalancePort

__all__ = [
    "DatabaseEnginePort",
    "OpenTransactionsPort",
    "PartnerBalancePort",
]
