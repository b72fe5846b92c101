"""Domain constants for transaction payments."""

SALE = "Sale"
SUPPLY = "Supply"
TRANSACTION_MODES = (SALE, SUPPLY)

LOCAL_CURRENCY = "UZS"
SUPPORTED_CURRENCIES = (
    "UZS",
    "USD",
    "RUB",
)

CASH = "Cash"
CARD = "Card"
BANK_TRANSFER = "BankTransfer"
ACCOUNT_CREDIT = "AccountCredit"

# Methods that collect new funds; AccountCredit draws on an existing advance.
FUNDING_METHODS = (
    CASH,
    CARD,
    BANK_TRANSFER,
)
PAYMENT_METHODS = FUNDING_METHODS + (ACCOUNT_CREDIT,)

OPEN_TRANSACTION_STATUSES = (
    "Open",
    "PartiallyPaid",
)

DEFAULT_REFUND_CHANGE = True


__all__ = [
    "SALE",
    "SUPPLY",
    "TRANSACTION_MODES",
    "LOCAL_CURRENCY",
    "SUPPORTED_CURRENCIES",
    "CASH",
    "CARD",
    "BANK_TRANSFER",
    "ACCOUNT_CREDIT",
    "FUNDING_METHODS",
    "PAYMENT_METHODS",
    "OPEN_TRANSACTION_STATUSES",
    "DEFAULT_REFUND_CHANGE",
]
