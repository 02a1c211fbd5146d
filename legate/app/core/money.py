"""Money helpers for stored invoice amounts.

Invoices written before the cents migration hold decimal dollars in the same
columns that newer invoices use for integer cents. Nothing on the row says
which one it is, so two policies exist:

* the aging report reads every stored amount as cents (``to_cents``);
* the estate invoice list guesses by magnitude: above
  ``LEGACY_CENTS_THRESHOLD`` it is cents, otherwise dollars
  (``normalize_money_from_db``).

A legacy dollar value above the threshold, or a small cents value at or
below it, is misread by one of the two without any visible failure.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

from legate.app.core.config import settings

if TYPE_CHECKING:
    from legate.app.models.invoice import Invoice

ZERO = Decimal("0")
HUNDRED = Decimal("100")
_WHOLE = Decimal("1")
_CENT = Decimal("0.01")

_CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "CAD": "CA$",
    "AUD": "A$",
    "JPY": "¥",
    "INR": "₹",
}


def _as_decimal(raw: object) -> Decimal | None:
    """Return *raw* as a finite Decimal, or None when it is not a number."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, Decimal):
        value = raw
    elif isinstance(raw, int):
        value = Decimal(raw)
    elif isinstance(raw, float):
        if not math.isfinite(raw):
            return None
        value = Decimal(str(raw))
    else:
        return None
    if not value.is_finite():
        return None
    return value


def to_cents(raw: object) -> int:
    """Canonical integer cents for a stored amount, as the aging report reads it.

    Absent or non-finite input is 0. Above the legacy threshold the value is
    cents by construction; at or below it the value is ambiguous and is still
    taken as cents. Fractions round half up. Applying this twice is a no-op.
    """
    value = _as_decimal(raw)
    if value is None:
        return 0
    return int(value.quantize(_WHOLE, rounding=ROUND_HALF_UP))


def normalize_money_from_db(raw: object) -> Decimal:
    """Dollar amount for a stored value, as the invoice list reads it."""
    value = _as_decimal(raw)
    if value is None:
        return ZERO
    if value > settings.LEGACY_CENTS_THRESHOLD:
        return value / HUNDRED
    return value


def invoice_amount(invoice: Invoice) -> Decimal | None:
    """Stored amount of an invoice: ``total_amount``, else ``subtotal``."""
    for raw in (invoice.total_amount, invoice.subtotal):
        if raw is not None:
            return raw
    return None


def resolve_currency(value: object) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip().upper()
    return settings.DEFAULT_CURRENCY


def format_money(cents: object, currency: str = "USD") -> str:
    """Render integer cents like ``$1,234.56`` for *currency*."""
    value = _as_decimal(cents)
    if value is None:
        value = ZERO
    amount = (value / HUNDRED).quantize(_CENT, rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    code = currency.upper()
    symbol = _CURRENCY_SYMBOLS.get(code)
    digits = f"{abs(amount):,.2f}"
    if symbol is None:
        return f"{sign}{code} {digits}"
    return f"{sign}{symbol}{digits}"
