from decimal import Decimal

from src.domain.constants import ACCOUNT_CREDIT, CARD
from src.domain.models import PaymentRow
from src.domain.services import validation


def _issues(row, advance="0"):
    return validation.payment_row_issues(row, advance=Decimal(advance))


def test_valid_local_row_has_no_issues() -> None:
    """A positive local row at rate 1 should pass every rule."""
    row = PaymentRow(id=1, amount=Decimal("100"), method=CARD)

    assert _issues(row) == ()
    assert validation.is_payment_row_valid(row, advance=Decimal("0"))


def test_non_positive_amount_is_flagged() -> None:
    """Zero and negative amounts should be rejected."""
    zero = PaymentRow(id=1, amount=Decimal("0"))
    negative = PaymentRow(id=2, amount=Decimal("-5"))

    assert validation.NON_POSITIVE_AMOUNT in _issues(zero)
    assert validation.NON_POSITIVE_AMOUNT in _issues(negative)


def test_non_finite_amount_is_flagged() -> None:
    """NaN and infinite amounts should be reported, not compared."""
    for raw in ("NaN", "Infinity"):
        row = PaymentRow(id=1, amount=Decimal(raw))
        issues = _issues(row)
        assert validation.NON_FINITE_AMOUNT in issues
        assert validation.NON_POSITIVE_AMOUNT not in issues


def test_local_currency_requires_rate_one() -> None:
    """A local row with another rate should be rejected."""
    row = PaymentRow(id=1, amount=Decimal("10"), exchange_rate=Decimal("2"))

    assert _issues(row) == (validation.LOCAL_RATE_NOT_ONE,)


def test_foreign_currency_at_rate_one_is_flagged() -> None:
    """A foreign row left at rate 1 should be treated as missing its rate."""
    row = PaymentRow(id=1, amount=Decimal("10"), currency="USD")

    assert _issues(row) == (validation.FOREIGN_RATE_IS_ONE,)


def test_foreign_currency_with_rate_is_valid() -> None:
    row = PaymentRow(
        id=1,
        amount=Decimal("10"),
        currency="USD",
        exchange_rate=Decimal("12500"),
    )

    assert _issues(row) == ()


def test_non_positive_rate_is_flagged() -> None:
    """Rates must be strictly positive and finite."""
    zero = PaymentRow(
        id=1,
        amount=Decimal("10"),
        currency="USD",
        exchange_rate=Decimal("0"),
    )
    nan = PaymentRow(
        id=2,
        amount=Decimal("10"),
        currency="USD",
        exchange_rate=Decimal("NaN"),
    )

    assert validation.NON_POSITIVE_RATE in _issues(zero)
    assert validation.NON_POSITIVE_RATE in _issues(nan)


def test_account_credit_limited_by_advance() -> None:
    """Account credit may not exceed the absolute advance."""
    within = PaymentRow(id=1, amount=Decimal("200"), method=ACCOUNT_CREDIT)
    above = PaymentRow(id=2, amount=Decimal("201"), method=ACCOUNT_CREDIT)

    assert _issues(within, advance="200") == ()
    assert _issues(above, advance="200") == (
        validation.ACCOUNT_CREDIT_EXCEEDS_ADVANCE,
    )


def test_account_credit_must_be_local() -> None:
    """Account credit rows in a foreign currency should be rejected."""
    row = PaymentRow(
        id=1,
        amount=Decimal("1"),
        currency="USD",
        exchange_rate=Decimal("12500"),
        method=ACCOUNT_CREDIT,
    )

    assert validation.ACCOUNT_CREDIT_NOT_LOCAL in _issues(row, advance="99999")


def test_configured_local_currency_is_respected() -> None:
    """Rate rules should follow the configured local currency."""
    row = PaymentRow(id=1, amount=Decimal("10"), currency="USD")

    issues = validation.payment_row_issues(
        row,
        advance=Decimal("0"),
        local_currency="USD",
    )

    assert issues == ()
