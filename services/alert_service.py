"""Напоминания об оплате.

Флаг ``is_notified`` переходит только из ``False`` в ``True``.
Способ доставки уведомления выбирает вызывающий код.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from peewee import ModelSelect

from core.errors import NotFoundError
from database.db import atomic_write
from database.models import Client, PaymentAlert, User
from services.validators import parse_money, parse_moment

logger = logging.getLogger(__name__)


def _with_client(query: ModelSelect) -> ModelSelect:
    return query.select_extend(Client).join(Client).switch(PaymentAlert)


def get_alert_by_id(alert_id: int) -> PaymentAlert:
    alert = PaymentAlert.get_or_none(PaymentAlert.id == alert_id)
    if alert is None:
        raise NotFoundError("Напоминание", alert_id)
    return alert


def get_all_alerts() -> ModelSelect:
    return _with_client(PaymentAlert.select()).order_by(
        PaymentAlert.due_at.asc(), PaymentAlert.id.asc()
    )


def get_overdue_alerts(now: datetime | None = None) -> ModelSelect:
    """Наступившие и ещё не показанные напоминания."""
    now = now or datetime.now()
    return (
        _with_client(PaymentAlert.select())
        .where((PaymentAlert.due_at <= now) & (PaymentAlert.is_notified == False))
        .order_by(PaymentAlert.due_at.asc(), PaymentAlert.id.asc())
    )


def add_alert(
    client_id: int,
    due_at,
    amount,
    notes: str | None = None,
    created_by: int | None = None,
) -> PaymentAlert:
    due = parse_moment(due_at, "due_at")
    amount = parse_money(amount, "amount")
    client = Client.get_or_none(Client.id == client_id)
    if client is None:
        raise NotFoundError("Клиент", client_id)
    user = None
    if created_by is not None:
        user = User.get_or_none(User.id == created_by)
        if user is None:
            raise NotFoundError("Пользователь", created_by)

    with atomic_write():
        alert = PaymentAlert.create(
            client=client,
            due_at=due,
            amount=amount,
            notes=notes or None,
            created_by=user,
        )
    logger.info("⏰ Напоминание #%s клиенту #%s на %s", alert.id, client.id, due)
    return alert


def mark_alert_notified(alert_id: int) -> PaymentAlert:
    """Отметить напоминание показанным. Повторный вызов ничего не меняет."""
    alert = get_alert_by_id(alert_id)
    if not alert.is_notified:
        with atomic_write():
            PaymentAlert.update(is_notified=True).where(
                PaymentAlert.id == alert.id
            ).execute()
        alert.is_notified = True
        logger.info("🔔 Напоминание #%s отмечено показанным", alert.id)
    return alert


def delete_alert(alert_id: int) -> None:
    alert = get_alert_by_id(alert_id)
    with atomic_write():
        alert.delete_instance()
    logger.info("🗑️ Удалено напоминание #%s", alert_id)


def dispatch_overdue_alerts(
    notify: Callable[[PaymentAlert], None], now: datetime | None = None
) -> int:
    """Передать просроченные напоминания в ``notify`` и отметить их.

    Напоминание, на котором ``notify`` упал, остаётся неотмеченным
    и будет передано при следующем вызове.
    """
    sent = 0
    for alert in list(get_overdue_alerts(now)):
        try:
            notify(alert)
        except Exception:  # noqa: BLE001
            logger.warning(
                "Не удалось доставить напоминание #%s", alert.id, exc_info=True
            )
            continue
        mark_alert_notified(alert.id)
        sent += 1
    return sent
