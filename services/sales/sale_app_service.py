"""Прикладной сервис кассы: продажа корзины и приём оплаты."""

from __future__ import annotations

import logging
from decimal import Decimal

from core.errors import ValidationError
from database.db import atomic_write
from services import alert_service, ledger_service, rank_service
from services.client_service import get_client_by_id
from services.product_service import get_product_by_id
from services.validators import parse_money, parse_moment
from utils.money import ZERO, format_money

from .dto import CheckoutCommand, CheckoutResult, PaymentCommand, PaymentResult

logger = logging.getLogger(__name__)

__all__ = ["SaleAppService", "sale_app_service"]


class SaleAppService:
    """Фасад между диспетчером запросов и леджером."""

    def checkout(self, command: CheckoutCommand) -> CheckoutResult:
        """Провести корзину: по начислению на строку, затем очки одним вызовом.

        Строки проводятся в одной транзакции. Если строка не задаёт цену
        явно, применяется скидка текущего ранга клиента.
        """
        if not command.lines:
            raise ValidationError("Корзина пуста")
        client = get_client_by_id(command.client_id)
        discount = ZERO
        if command.apply_rank_discount:
            discount = rank_service.get_discount_percent(client.total_points)

        result = CheckoutResult(discount_percent=discount)
        points = 0
        with atomic_write():
            for line in command.lines:
                product = get_product_by_id(line.product_id)
                price = line.unit_price
                if price is None and discount > 0:
                    price = ledger_service.discounted_price(product.price, discount)
                transaction = ledger_service.post_charge(
                    client.id,
                    product.id,
                    line.quantity,
                    command.created_by,
                    unit_price_override=price,
                )
                result.transaction_ids.append(transaction.id)
                result.total += transaction.total
                points += transaction.quantity * product.ghost_points

        result.points_awarded = points
        result.total_points = ledger_service.award_points(client.id, points)
        result.balance = ledger_service.get_balance(client.id)
        logger.info(
            "🛒 Продажа клиенту #%s: %s строк на %s, +%s очков",
            client.id,
            len(result.transaction_ids),
            result.total,
            points,
        )
        return result

    def record_payment(self, command: PaymentCommand) -> PaymentResult:
        """Принять оплату и при остатке долга поставить напоминание."""
        amount = parse_money(command.amount, "amount")
        remind_at = None
        if command.remind_at not in (None, ""):
            remind_at = parse_moment(command.remind_at, "remind_at")

        payment = ledger_service.post_payment(
            command.client_id,
            amount,
            command.created_by,
            method=command.method,
            notes=command.notes,
        )
        balance = ledger_service.get_balance(command.client_id)
        result = PaymentResult(payment_id=payment.id, balance=balance)

        if remind_at is not None and balance > Decimal(0):
            alert = alert_service.add_alert(
                command.client_id,
                remind_at,
                balance,
                notes=f"Напоминание: остаток после оплаты {format_money(amount)}",
                created_by=command.created_by,
            )
            result.alert_id = alert.id
        return result


sale_app_service = SaleAppService()
