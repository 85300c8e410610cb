"""Леджер клиента: начисления, оплаты, очки лояльности и баланс.

Баланс нигде не хранится: он всегда пересчитывается как
``Σ Transaction.total − Σ Payment.amount`` по истории клиента.
Очки (``Client.total_points``) только растут.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from peewee import ModelSelect

from core.errors import NotFoundError
from database.db import atomic_write
from database.models import Client, Payment, Product, Transaction, User
from services.validators import parse_money, parse_positive_int, require_text
from utils.money import ZERO, apply_discount, quantize

logger = logging.getLogger(__name__)

DEFAULT_PAYMENT_METHOD = "cash"


def _get_client(client_id: int) -> Client:
    client = Client.get_or_none(Client.id == client_id)
    if client is None:
        raise NotFoundError("Клиент", client_id)
    return client


def _get_user(user_id: int) -> User:
    user = User.get_or_none(User.id == user_id)
    if user is None:
        raise NotFoundError("Пользователь", user_id)
    return user


def _get_product(product_id: int) -> Product:
    product = Product.get_or_none(Product.id == product_id)
    if product is None:
        raise NotFoundError("Товар", product_id)
    return product


def discounted_price(price, discount_percent) -> Decimal:
    """Цена единицы со скидкой ранга."""
    return apply_discount(price, discount_percent)


# ─────────────────────────── Начисления ───────────────────────────


def post_charge(
    client_id: int,
    product_id: int,
    quantity: int,
    created_by: int,
    unit_price_override=None,
) -> Transaction:
    """Провести начисление за товар.

    Цена берётся из товара на момент продажи, если не передана
    ``unit_price_override`` (например, цена со скидкой ранга).
    """
    quantity = parse_positive_int(quantity, "quantity")
    client = _get_client(client_id)
    product = _get_product(product_id)
    user = _get_user(created_by)

    if unit_price_override is None:
        unit_price = quantize(product.price)
    else:
        unit_price = parse_money(unit_price_override, "unit_price")
    total = quantize(unit_price * quantity)

    with atomic_write():
        transaction = Transaction.create(
            client=client,
            product=product,
            quantity=quantity,
            unit_price=unit_price,
            total=total,
            created_by=user,
        )
    logger.info(
        "🧾 Начисление #%s клиенту #%s: %s × %s = %s",
        transaction.id,
        client.id,
        quantity,
        unit_price,
        total,
    )
    return transaction


def delete_transaction(transaction_id: int) -> None:
    transaction = Transaction.get_or_none(Transaction.id == transaction_id)
    if transaction is None:
        raise NotFoundError("Начисление", transaction_id)
    with atomic_write():
        transaction.delete_instance()
    logger.info("🗑️ Удалено начисление #%s", transaction_id)


def get_client_transactions(client_id: int) -> ModelSelect:
    """Начисления клиента, новые первыми."""
    return (
        Transaction.select(Transaction, Product)
        .join(Product)
        .where(Transaction.client == client_id)
        .order_by(Transaction.created_at.desc(), Transaction.id.desc())
    )


def get_recent_transactions(limit: int = 100) -> ModelSelect:
    return (
        Transaction.select(Transaction, Product, Client)
        .join(Product)
        .switch(Transaction)
        .join(Client)
        .order_by(Transaction.created_at.desc(), Transaction.id.desc())
        .limit(limit)
    )


# ──────────────────────────── Оплаты ────────────────────────────


def post_payment(
    client_id: int,
    amount,
    created_by: int,
    method: str = DEFAULT_PAYMENT_METHOD,
    notes: str | None = None,
) -> Payment:
    """Принять оплату. Переплата допустима и даёт отрицательный баланс."""
    amount = parse_money(amount, "amount")
    method = require_text(method or DEFAULT_PAYMENT_METHOD, "method")
    client = _get_client(client_id)
    user = _get_user(created_by)

    with atomic_write():
        payment = Payment.create(
            client=client,
            amount=amount,
            method=method,
            notes=notes or None,
            created_by=user,
        )
    logger.info(
        "💵 Оплата #%s от клиента #%s: %s (%s)", payment.id, client.id, amount, method
    )
    return payment


def delete_payment(payment_id: int) -> None:
    payment = Payment.get_or_none(Payment.id == payment_id)
    if payment is None:
        raise NotFoundError("Оплата", payment_id)
    with atomic_write():
        payment.delete_instance()
    logger.info("🗑️ Удалена оплата #%s", payment_id)


def get_client_payments(client_id: int) -> ModelSelect:
    """Оплаты клиента, новые первыми."""
    return (
        Payment.select()
        .where(Payment.client == client_id)
        .order_by(Payment.created_at.desc(), Payment.id.desc())
    )


def get_recent_payments(limit: int = 100) -> ModelSelect:
    return (
        Payment.select(Payment, Client)
        .join(Client)
        .order_by(Payment.created_at.desc(), Payment.id.desc())
        .limit(limit)
    )


# ───────────────────────────── Очки ─────────────────────────────


def award_points(client_id: int, points: int) -> int:
    """Начислить очки лояльности и вернуть новое значение ``total_points``."""
    points = parse_positive_int(points, "points", allow_zero=True)
    client = _get_client(client_id)
    if points:
        with atomic_write():
            Client.update(total_points=Client.total_points + points).where(
                Client.id == client.id
            ).execute()
        logger.info("👻 Клиенту #%s начислено %s очков", client.id, points)
    return Client.get_by_id(client.id).total_points


# ──────────────────────────── Баланс ────────────────────────────
#
# Суммы считаются в Python по Decimal-значениям строк, не через SUM():
# SQLite хранит NUMERIC как REAL.


def get_charged_total(client_id: int) -> Decimal:
    query = Transaction.select(Transaction.total).where(Transaction.client == client_id)
    return sum((row[0] for row in query.tuples()), ZERO)


def get_paid_total(client_id: int) -> Decimal:
    query = Payment.select(Payment.amount).where(Payment.client == client_id)
    return sum((row[0] for row in query.tuples()), ZERO)


def get_balance(client_id: int) -> Decimal:
    """Пересчитать баланс клиента по истории начислений и оплат."""
    _get_client(client_id)
    return quantize(get_charged_total(client_id) - get_paid_total(client_id))


def get_balances() -> dict[int, Decimal]:
    """Балансы всех клиентов за три запроса без JOIN."""
    balances: dict[int, Decimal] = {
        client_id: ZERO for (client_id,) in Client.select(Client.id).tuples()
    }
    charges = Transaction.select(Transaction.client, Transaction.total).tuples()
    for client_id, total in charges:
        balances[client_id] += total
    payments = Payment.select(Payment.client, Payment.amount).tuples()
    for client_id, amount in payments:
        balances[client_id] -= amount
    return {client_id: quantize(value) for client_id, value in balances.items()}


def get_total_outstanding() -> Decimal:
    """Общий долг: все начисления минус все оплаты."""
    charged = sum((row[0] for row in Transaction.select(Transaction.total).tuples()), ZERO)
    paid = sum((row[0] for row in Payment.select(Payment.amount).tuples()), ZERO)
    return quantize(charged - paid)
