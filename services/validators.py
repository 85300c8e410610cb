"""Валидаторы и нормализаторы входных данных."""

import ast
import operator as op
import re
from datetime import datetime
from decimal import Decimal, InvalidOperation

from core.errors import ValidationError
from utils.money import quantize
from utils.time_utils import parse_datetime

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_phone(phone: str) -> str:
    """Нормализовать номер телефона.

    Оставляет только цифры и ведущий ``+``. Допустимы номера от 7 до 15 цифр.

    Args:
        phone: Исходный номер.

    Returns:
        str: Номер без пробелов, скобок и дефисов.
    """
    raw = (phone or "").strip()
    digits = re.sub(r"\D", "", raw)
    if not 7 <= len(digits) <= 15:
        raise ValidationError(
            f"Неверный формат телефона: ожидается 7–15 цифр, получили {len(digits)}"
        )
    return f"+{digits}" if raw.startswith("+") else digits


def normalize_email(email: str) -> str:
    """Привести e-mail к нижнему регистру и проверить формат."""
    value = (email or "").strip().lower()
    if not _EMAIL_RE.match(value):
        raise ValidationError(f"Некорректный e-mail: {email!r}")
    return value


def normalize_full_name(name: str) -> str:
    """Нормализует имя: каждая часть с заглавной буквы.

    Args:
        name: Исходное имя.

    Returns:
        str: Имя в формате ``Иванов Иван``.
    """
    parts = re.split(r"\s+", name.strip())

    def norm(word: str) -> str:
        return "-".join(p.capitalize() for p in word.split("-") if p)

    return " ".join(norm(p) for p in parts if p)


def normalize_number(value: str | int | float | None) -> str | None:
    """Нормализует строку с числом и поддерживает простые выражения.

    Помимо удаления пробелов/букв и замены запятой на точку можно
    вводить простые математические выражения и проценты, например ``10*10``
    или ``5+5``. Процент записывается как ``10%`` и интерпретируется как
    ``10/100``.
    """

    if value is None:
        return None

    text = str(value)
    text = re.sub(r"\s+", "", text)
    text = text.replace(" ", "")
    text = text.replace(",", ".")
    text = re.sub(r"[a-zA-Zа-яА-Я$₽]+", "", text)
    text = text.rstrip(".")

    if text == "":
        return text

    expr = re.sub(r"(\d+(?:\.\d+)?)%", r"(\1/100)", text)

    allowed = {
        ast.Add: op.add,
        ast.Sub: op.sub,
        ast.Mult: op.mul,
        ast.Div: op.truediv,
    }

    def _eval(n):
        if isinstance(n, ast.Constant) and isinstance(n.value, (int, float)):
            return Decimal(str(n.value))
        if isinstance(n, ast.UnaryOp) and isinstance(n.op, ast.USub):
            return -_eval(n.operand)
        if isinstance(n, ast.BinOp) and type(n.op) in allowed:
            return allowed[type(n.op)](_eval(n.left), _eval(n.right))
        raise ValueError("Недопустимое выражение")

    try:
        node = ast.parse(expr, mode="eval").body
        result = _eval(node)
    except (SyntaxError, ValueError, ArithmeticError):
        return text
    if result == result.to_integral_value():
        result = result.quantize(Decimal(1))
    return str(result.normalize() if "." in str(result) else result)


def require_text(value: str | None, field: str) -> str:
    """Вернуть непустую строку без краевых пробелов."""
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"Поле '{field}' обязательно")
    return text


def parse_money(value, field: str = "amount", *, allow_zero: bool = False) -> Decimal:
    """Разобрать сумму в ``Decimal`` с копейками и проверить её знак."""
    if isinstance(value, (Decimal, int)) and not isinstance(value, bool):
        raw = value
    else:
        raw = normalize_number(value)
    if isinstance(raw, Decimal) and not raw.is_finite():
        raise ValidationError(f"Поле '{field}': некорректная сумма {value!r}")
    try:
        amount = quantize(raw)
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError(f"Поле '{field}': некорректная сумма {value!r}") from None
    if amount < 0 or (amount == 0 and not allow_zero):
        raise ValidationError(f"Поле '{field}' должно быть больше нуля")
    return amount


def parse_positive_int(value, field: str, *, allow_zero: bool = False) -> int:
    """Проверить целое положительное (или неотрицательное) число."""
    if isinstance(value, bool):
        raise ValidationError(f"Поле '{field}' должно быть целым числом")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Поле '{field}' должно быть целым числом") from None
    if number != value and not isinstance(value, str):
        raise ValidationError(f"Поле '{field}' должно быть целым числом")
    if number < 0 or (number == 0 and not allow_zero):
        limit = "неотрицательным" if allow_zero else "больше нуля"
        raise ValidationError(f"Поле '{field}' должно быть {limit}")
    return number


def parse_moment(value, field: str) -> datetime:
    """Разобрать дату-время из строки или ``datetime`` с точностью до секунды."""
    if value in (None, ""):
        raise ValidationError(f"Поле '{field}' обязательно")
    try:
        return parse_datetime(value).replace(microsecond=0)
    except (ValueError, OverflowError):
        raise ValidationError(f"Поле '{field}': некорректная дата {value!r}") from None


def validate_interval(start, end) -> tuple[datetime, datetime]:
    """Проверить, что ``end`` строго позже ``start``."""
    start_at = parse_moment(start, "start_time")
    end_at = parse_moment(end, "end_time")
    if end_at <= start_at:
        raise ValidationError("Время окончания должно быть позже времени начала")
    return start_at, end_at
