"""Quotation totals and currency formatting."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Final

_MONEY_PLACES: Final = Decimal("0.01")
VAT_RATE: Final = Decimal("0.16")
CURRENCY: Final = "KES"


def to_money(value: Decimal | float | int | str | None) -> Decimal:
    """Normalize numeric values to a money-safe decimal."""

    if value is None:
        return Decimal("0.00")
    if isinstance(value, float):
        value = str(value)
    return Decimal(value).quantize(_MONEY_PLACES, rounding=ROUND_HALF_UP)


@dataclass(slots=True, frozen=True)
class QuotationTotals:
    """Computed totals persisted on a quotation."""

    subtotal: Decimal
    tax: Decimal
    total: Decimal


def _field(item: Any, *names: str) -> Any:
    if isinstance(item, dict):
        for name in names:
            if name in item:
                return item[name]
        return None
    for name in names:
        if hasattr(item, name):
            return getattr(item, name)
    return None


def _raw_line_total(item: Any) -> Decimal:
    quantity = _field(item, "quantity") or 0
    unit_price = _field(item, "unit_price", "unitPrice") or 0
    if isinstance(unit_price, float):
        unit_price = str(unit_price)
    return Decimal(quantity) * Decimal(unit_price)


def line_total(item: Any) -> Decimal:
    """Return ``quantity * unit_price`` for a line item model or dict."""

    return to_money(_raw_line_total(item))


def compute_totals(
    line_items: Iterable[Any], discount: Decimal | float | int | str | None = None
) -> QuotationTotals:
    """Compute subtotal, 16% VAT and total for a set of line items.

    The total is not clamped: a discount larger than ``subtotal + tax`` yields
    a negative total.
    """

    subtotal = to_money(sum((_raw_line_total(item) for item in line_items), Decimal("0")))
    tax = to_money(subtotal * VAT_RATE)
    total = subtotal + tax - to_money(discount)
    return QuotationTotals(subtotal=subtotal, tax=tax, total=total)


def format_kes(value: Decimal | float | int | str | None) -> str:
    """Format an amount as ``KES 1,234.50``."""

    amount = to_money(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}{CURRENCY} {abs(amount):,.2f}"


def format_plain_kes(value: Decimal | float | int | str | None) -> str:
    """Format an amount as ``KES 1234.50`` without grouping."""

    amount = to_money(value)
    return f"{CURRENCY} {amount:.2f}"
