from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from core.errors import NotFoundError, ValidationError
from services.alert_service import (
    add_alert,
    delete_alert,
    dispatch_overdue_alerts,
    get_alert_by_id,
    get_all_alerts,
    get_overdue_alerts,
    mark_alert_notified,
)

NOW = datetime(2030, 1, 15, 18, 0)


def test_add_alert(client, user):
    alert = add_alert(client.id, "2030-01-20 10:00", "25.5", "Долг за напитки", user.id)
    stored = get_alert_by_id(alert.id)
    assert stored.due_at == datetime(2030, 1, 20, 10, 0)
    assert stored.amount == Decimal("25.50")
    assert stored.is_notified is False
    assert stored.created_by_id == user.id


def test_add_alert_validation(client):
    with pytest.raises(ValidationError):
        add_alert(client.id, None, 10)
    with pytest.raises(ValidationError):
        add_alert(client.id, NOW, 0)
    with pytest.raises(NotFoundError):
        add_alert(555, NOW, 10)


def test_overdue_alerts_exclude_future_and_notified(client):
    overdue = add_alert(client.id, NOW - timedelta(days=1), 10)
    due_now = add_alert(client.id, NOW, 5)
    add_alert(client.id, NOW + timedelta(hours=1), 7)
    shown = add_alert(client.id, NOW - timedelta(days=2), 3)
    mark_alert_notified(shown.id)

    assert [a.id for a in get_overdue_alerts(NOW)] == [overdue.id, due_now.id]
    assert len(list(get_all_alerts())) == 4


def test_mark_notified_is_idempotent(client):
    alert = add_alert(client.id, NOW, 10)
    mark_alert_notified(alert.id)
    again = mark_alert_notified(alert.id)
    assert again.is_notified is True
    assert get_alert_by_id(alert.id).is_notified is True


def test_dispatch_overdue_alerts(client):
    first = add_alert(client.id, NOW - timedelta(hours=2), 10)
    second = add_alert(client.id, NOW - timedelta(hours=1), 20)
    delivered = []

    def notify(alert):
        if alert.id == second.id:
            raise RuntimeError("канал недоступен")
        delivered.append(alert.id)

    assert dispatch_overdue_alerts(notify, NOW) == 1
    assert delivered == [first.id]
    assert get_alert_by_id(first.id).is_notified is True
    assert get_alert_by_id(second.id).is_notified is False

    assert dispatch_overdue_alerts(lambda a: delivered.append(a.id), NOW) == 1
    assert delivered == [first.id, second.id]
    assert dispatch_overdue_alerts(lambda a: delivered.append(a.id), NOW) == 0


def test_delete_alert(client):
    alert = add_alert(client.id, NOW, 10)
    delete_alert(alert.id)
    with pytest.raises(NotFoundError):
        get_alert_by_id(alert.id)
