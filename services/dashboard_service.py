"""Функции для получения сводной информации на дашборд."""

from datetime import datetime
from decimal import Decimal

from database.models import Client, Payment, PaymentAlert
from services.ledger_service import get_total_outstanding
from utils.money import ZERO, quantize
from utils.time_utils import month_bounds


def get_month_earnings(now: datetime | None = None) -> Decimal:
    """Сумма оплат за календарный месяц, в который попадает ``now``."""
    start, end = month_bounds(now or datetime.now())
    query = Payment.select(Payment.amount).where(
        (Payment.created_at >= start) & (Payment.created_at < end)
    )
    return quantize(sum((row[0] for row in query.tuples()), ZERO))


def get_dashboard_stats(now: datetime | None = None) -> dict:
    """Вернуть счётчики для главного экрана."""
    now = now or datetime.now()
    overdue = (
        PaymentAlert.select()
        .where((PaymentAlert.due_at <= now) & (PaymentAlert.is_notified == False))
        .count()
    )
    return {
        "total_clients": Client.select().count(),
        "total_outstanding": get_total_outstanding(),
        "overdue_alerts": overdue,
        "current_month_earnings": get_month_earnings(now),
    }
