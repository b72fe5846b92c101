"""Tests for domain models and shared value helpers."""

from decimal import Decimal

from src.domain.constants import SALE, SUPPLY
from src.domain.models import (
    PartnerBalance,
    PaymentRow,
    Pending,
    Ready,
    is_loading,
)
from src.domain.services.normalization import (
    normalize_currency,
    normalize_method,
)
from src.utils.decimal_utils import coerce_decimal


def test_partner_balance_selects_fields_by_mode() -> None:
    """Sales use the partner side, supplies the company side."""
    balance = PartnerBalance(
        partner_advance=Decimal("1"),
        company_advance=Decimal("2"),
        payable_debt=Decimal("3"),
        receivable_debt=Decimal("4"),
    )

    assert balance.advance_for(SALE) == Decimal("1")
    assert balance.advance_for(SUPPLY) == Decimal("2")
    assert balance.debt_for(SALE) == Decimal("3")
    assert balance.debt_for(SUPPLY) == Decimal("4")
    assert PartnerBalance.empty().total == Decimal("0")


def test_payment_row_local_amount() -> None:
    row = PaymentRow(
        id=1,
        amount=Decimal("3"),
        currency="USD",
        exchange_rate=Decimal("12000.5"),
    )
    broken = PaymentRow(
        id=2,
        amount=Decimal("3"),
        exchange_rate=Decimal("NaN"),
    )

    assert row.local_amount == Decimal("36001.5")
    assert broken.local_amount == Decimal("0")


def test_is_loading_reports_any_pending_value() -> None:
    assert is_loading(Pending()) is True
    assert is_loading(Ready(()), Pending()) is True
    assert is_loading(Ready(()), Ready((1,))) is False


def test_coerce_decimal_normalizes_inputs() -> None:
    """Raw values should become Decimals, bad input becomes NaN."""
    assert coerce_decimal(None) == Decimal("0")
    assert coerce_decimal(" 12.50 ") == Decimal("12.50")
    assert coerce_decimal(0.1) == Decimal("0.1")
    assert coerce_decimal(True) == Decimal("1")
    assert coerce_decimal("abc").is_nan()
    assert coerce_decimal("sNaN").is_qnan()
    assert coerce_decimal(Decimal("-sNaN")).is_qnan()


def test_normalization_helpers() -> None:
    assert normalize_currency(" rub ") == "RUB"
    assert normalize_currency("", "USD") == "USD"
    assert normalize_currency(None) == "UZS"
    assert normalize_method("  ", "Cash") == "Cash"
    assert normalize_method(" Card ", "Cash") == "Card"
