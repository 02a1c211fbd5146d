"""Tests for stored-amount normalization and currency formatting."""
from __future__ import annotations

from decimal import Decimal

import pytest

from legate.app.core.money import (
    format_money,
    invoice_amount,
    normalize_money_from_db,
    resolve_currency,
    to_cents,
)
from legate.app.models.invoice import Invoice


class TestToCents:
    @pytest.mark.parametrize(
        "raw",
        [None, float("nan"), float("inf"), float("-inf"), Decimal("NaN"), "5000", True],
    )
    def test_absent_or_not_a_number_is_zero(self, raw: object) -> None:
        assert to_cents(raw) == 0

    def test_integer_cents_pass_through(self) -> None:
        assert to_cents(50_000) == 50_000
        assert to_cents(Decimal("50000.0000")) == 50_000

    def test_fractions_round_half_up(self) -> None:
        assert to_cents(1234.5) == 1235
        assert to_cents(Decimal("10.49")) == 10

    def test_idempotent_above_threshold(self) -> None:
        once = to_cents(123_456)
        assert to_cents(once) == once == 123_456

    def test_small_legacy_dollar_value_is_read_as_cents(self) -> None:
        # $250.00 stored before the cents migration reads back as 250 cents.
        assert to_cents(250) == 250
        assert to_cents(to_cents(250)) == 250


class TestNormalizeMoneyFromDb:
    def test_above_threshold_is_cents(self) -> None:
        assert normalize_money_from_db(50_000) == Decimal("500")

    def test_at_or_below_threshold_is_dollars(self) -> None:
        assert normalize_money_from_db(10_000) == Decimal("10000")
        assert normalize_money_from_db(Decimal("99.95")) == Decimal("99.95")

    def test_absent_is_zero(self) -> None:
        assert normalize_money_from_db(None) == Decimal("0")
        assert normalize_money_from_db(float("nan")) == Decimal("0")

    def test_policies_disagree_on_small_values(self) -> None:
        # The list reads 250 as $250.00, the aging report as $2.50.
        assert normalize_money_from_db(250) == Decimal("250")
        assert to_cents(250) / 100 == 2.5


def test_invoice_amount_prefers_total_then_subtotal() -> None:
    assert invoice_amount(Invoice(total_amount=Decimal("10"), subtotal=Decimal("8"))) == Decimal("10")
    assert invoice_amount(Invoice(total_amount=None, subtotal=Decimal("8"))) == Decimal("8")
    assert invoice_amount(Invoice(total_amount=None, subtotal=None)) is None


class TestFormatMoney:
    def test_usd(self) -> None:
        assert format_money(123_456) == "$1,234.56"

    def test_known_symbols(self) -> None:
        assert format_money(1_000, "EUR") == "€10.00"
        assert format_money(1_000, "gbp") == "£10.00"

    def test_unknown_currency_uses_code(self) -> None:
        assert format_money(500, "CHF") == "CHF 5.00"

    def test_negative_and_non_finite(self) -> None:
        assert format_money(-250) == "-$2.50"
        assert format_money(float("nan")) == "$0.00"


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, "USD"), ("", "USD"), ("   ", "USD"), (" eur ", "EUR"), ("GBP", "GBP"), (42, "USD")],
)
def test_resolve_currency(value: object, expected: str) -> None:
    assert resolve_currency(value) == expected
