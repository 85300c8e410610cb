from datetime import datetime
from decimal import Decimal

from database.models import Payment
from services.alert_service import add_alert
from services.dashboard_service import get_dashboard_stats, get_month_earnings
from services.ledger_service import post_charge, post_payment

NOW = datetime(2030, 3, 15, 12, 0)


def test_dashboard_stats(client, other_client, product, user):
    post_charge(client.id, product.id, 6, user.id)
    payment = post_payment(client.id, Decimal("10"), user.id)
    old = post_payment(other_client.id, Decimal("4"), user.id)
    Payment.update(created_at=datetime(2030, 3, 10)).where(Payment.id == payment.id).execute()
    Payment.update(created_at=datetime(2030, 2, 28, 23, 59)).where(Payment.id == old.id).execute()
    add_alert(client.id, datetime(2030, 3, 14), Decimal("20"))
    add_alert(client.id, datetime(2030, 3, 20), Decimal("20"))

    stats = get_dashboard_stats(NOW)

    assert stats["total_clients"] == 2
    assert stats["total_outstanding"] == Decimal("16.00")
    assert stats["overdue_alerts"] == 1
    assert stats["current_month_earnings"] == Decimal("10.00")


def test_month_earnings_empty():
    assert get_month_earnings(NOW) == Decimal("0.00")
