"""Tests for infrastructure settings."""

from unittest.mock import MagicMock

import pytest

from src.infrastructure import settings as settings_module
from src.infrastructure.settings import PaymentSettings


@pytest.fixture(autouse=True)
def _quiet_logger(monkeypatch):
    logger = MagicMock()
    monkeypatch.setattr(settings_module, "get_app_logger", lambda: logger)
    for name in (
        "PAYMENTS_LOCAL_CURRENCY",
        "PAYMENTS_CURRENCIES",
        "PAYMENTS_REFUND_CHANGE",
    ):
        monkeypatch.delenv(name, raising=False)
    return logger


def test_from_env_defaults() -> None:
    """Missing variables should fall back to the built-in defaults."""
    settings = PaymentSettings.from_env()

    assert settings.local_currency == "UZS"
    assert settings.currencies == ("UZS", "USD", "RUB")
    assert settings.refund_change_default is True


def test_from_env_puts_local_currency_first(monkeypatch) -> None:
    """Currency lists should be normalized with the local one first."""
    monkeypatch.setenv("PAYMENTS_LOCAL_CURRENCY", " usd ")
    monkeypatch.setenv("PAYMENTS_CURRENCIES", "uzs, usd,,eur,UZS")

    settings = PaymentSettings.from_env()

    assert settings.local_currency == "USD"
    assert settings.currencies == ("USD", "UZS", "EUR")


def test_from_env_parses_refund_flag(monkeypatch) -> None:
    monkeypatch.setenv("PAYMENTS_REFUND_CHANGE", "No")

    settings = PaymentSettings.from_env()

    assert settings.refund_change_default is False


def test_invalid_refund_flag_warns_and_uses_default(
    monkeypatch,
    _quiet_logger,
) -> None:
    """Unknown flag values should log a warning."""
    monkeypatch.setenv("PAYMENTS_REFUND_CHANGE", "maybe")

    settings = PaymentSettings.from_env()

    assert settings.refund_change_default is True
    _quiet_logger.warning.assert_called_once()
