"""Domain normalization helpers."""

from src.domain.constants import LOCAL_CURRENCY


def normalize_currency(
    currency: str | None,
    default: str = LOCAL_CURRENCY,
) -> str:
    """Normalize currency mnemonics.

    Args:
        currency: Raw currency value from a form or repository.
        default: Currency used when the value is blank.

    Returns:
        str: Upper-case mnemonic, or ``default`` when blank.
    """
    if not currency:
        return default
    cleaned = currency.strip()
    return cleaned.upper() if cleaned else default


def normalize_method(method: str | None, default: str) -> str:
    """Normalize payment method names.

    Args:
        method: Raw method value.
        default: Method used when the value is blank.

    Returns:
        str: Stripped method name.
    """
    if not method:
        return default
    cleaned = method.strip()
    return cleaned or default


__all__ = ["normalize_currency", "normalize_method"]
