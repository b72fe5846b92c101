"""Settings helpers for the payment engine and its adapters."""

from dataclasses import dataclass
import os

from src.domain.constants import (
    DEFAULT_REFUND_CHANGE,
    LOCAL_CURRENCY,
    SUPPORTED_CURRENCIES,
)
from src.domain.services.normalization import normalize_currency
from src.infrastructure.logging.logger import get_app_logger

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass(frozen=True)
class PaymentSettings:
    """Settings for payment entry.

    Attributes:
        local_currency: Mnemonic of the home currency.
        currencies: Currencies offered for payment rows, local first.
        refund_change_default: Whether change is refunded by default.
    """

    local_currency: str = LOCAL_CURRENCY
    currencies: tuple[str, ...] = SUPPORTED_CURRENCIES
    refund_change_default: bool = DEFAULT_REFUND_CHANGE

    @classmethod
    def from_env(cls) -> "PaymentSettings":
        """Build settings from environment variables.

        Returns:
            PaymentSettings: Settings sourced from environment variables.
        """
        logger = get_app_logger()
        local_currency = normalize_currency(
            os.getenv("PAYMENTS_LOCAL_CURRENCY", LOCAL_CURRENCY)
        )
        currencies = cls._parse_currencies(
            os.getenv("PAYMENTS_CURRENCIES"),
            local_currency,
        )
        refund_change = cls._parse_flag(
            os.getenv("PAYMENTS_REFUND_CHANGE"),
            default=DEFAULT_REFUND_CHANGE,
            logger=logger,
        )
        return cls(
            local_currency=local_currency,
            currencies=currencies,
            refund_change_default=refund_change,
        )

    @staticmethod
    def _parse_currencies(
        raw_value: str | None,
        local_currency: str,
    ) -> tuple[str, ...]:
        """Parse a comma separated currency list.

        Args:
            raw_value: Raw list such as ``"UZS,USD"``.
            local_currency: Currency always offered first.

        Returns:
            tuple[str, ...]: Deduplicated mnemonics, local currency first.
        """
        if not raw_value:
            parsed = list(SUPPORTED_CURRENCIES)
        else:
            parsed = [
                normalize_currency(item)
                for item in raw_value.split(",")
                if item.strip()
            ]
        ordered = [local_currency]
        for currency in parsed:
            if currency not in ordered:
                ordered.append(currency)
        return tuple(ordered)

    @staticmethod
    def _parse_flag(raw_value: str | None, default: bool, logger) -> bool:
        """Parse a boolean environment flag.

        Args:
            raw_value: Raw flag value.
            default: Value used when the flag is missing or invalid.
            logger: Logger used for warnings.

        Returns:
            bool: Parsed flag.
        """
        if raw_value is None or not raw_value.strip():
            return default
        cleaned = raw_value.strip().lower()
        if cleaned in _TRUE_VALUES:
            return True
        if cleaned in _FALSE_VALUES:
            return False
        logger.warning(
            f"Invalid boolean flag '{raw_value}', using default {default}"
        )
        return default


__all__ = ["PaymentSettings"]
