"""Утилиты денежной арифметики и форматирования сумм."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

_TWO_PLACES = Decimal("0.01")
_HUNDRED = Decimal("100")
ZERO = Decimal("0.00")


def to_decimal(value: Any) -> Decimal:
    """Привести значение к ``Decimal`` без потерь через строковое представление."""
    if isinstance(value, Decimal):
        return value
    if value is None:
        return Decimal("0")
    if isinstance(value, bool):
        raise InvalidOperation(f"Недопустимая сумма: {value!r}")
    return Decimal(str(value))


def quantize(value: Any) -> Decimal:
    """Округлить сумму до копеек (ROUND_HALF_UP)."""
    return to_decimal(value).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)


def apply_discount(price: Any, discount_percent: Any) -> Decimal:
    """Цена со скидкой ``price × (1 − discount/100)``."""
    price = to_decimal(price)
    discount = to_decimal(discount_percent)
    return quantize(price * (_HUNDRED - discount) / _HUNDRED)


def format_money(value: Any, symbol: str = "$") -> str:
    """Отформатировать сумму с разделителями тысяч."""

    amount = quantize(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"
