from datetime import datetime
from decimal import Decimal

import pytest

from core.errors import NotFoundError, ValidationError
from database.models import Client, PaymentAlert, Transaction
from services import ledger_service, product_service
from services.sales import CartLine, CheckoutCommand, PaymentCommand, SaleAppService


@pytest.fixture
def service():
    return SaleAppService()


@pytest.fixture
def snack(category):
    return product_service.add_product("Chips", category.id, Decimal("3.00"), ghost_points=4)


def test_checkout_posts_lines_and_awards_points_once(service, client, product, snack, user):
    result = service.checkout(
        CheckoutCommand(
            client_id=client.id,
            created_by=user.id,
            lines=(CartLine(product.id, 2), CartLine(snack.id, 3)),
        )
    )
    assert len(result.transaction_ids) == 2
    assert result.total == Decimal("19.00")
    assert result.points_awarded == 2 * 10 + 3 * 4
    assert result.total_points == 32
    assert result.balance == Decimal("19.00")
    assert Client.get_by_id(client.id).total_points == 32


def test_checkout_applies_rank_discount(service, client, product, user, rank_ladder):
    ledger_service.award_points(client.id, 320)
    result = service.checkout(
        CheckoutCommand(client.id, user.id, (CartLine(product.id, 2),))
    )
    transaction = Transaction.get_by_id(result.transaction_ids[0])
    assert result.discount_percent == Decimal("5.00")
    assert transaction.unit_price == Decimal("4.75")
    assert result.total == Decimal("9.50")


def test_checkout_explicit_price_wins(service, client, product, user, rank_ladder):
    ledger_service.award_points(client.id, 320)
    result = service.checkout(
        CheckoutCommand(client.id, user.id, (CartLine(product.id, 1, Decimal("2.00")),))
    )
    assert result.total == Decimal("2.00")


def test_checkout_without_rank_discount(service, client, product, user, rank_ladder):
    ledger_service.award_points(client.id, 320)
    result = service.checkout(
        CheckoutCommand(
            client.id, user.id, (CartLine(product.id, 1),), apply_rank_discount=False
        )
    )
    assert result.total == Decimal("5.00")


def test_checkout_is_all_or_nothing(service, client, product, user):
    with pytest.raises(NotFoundError):
        service.checkout(
            CheckoutCommand(client.id, user.id, (CartLine(product.id, 1), CartLine(999, 1)))
        )
    with pytest.raises(ValidationError):
        service.checkout(
            CheckoutCommand(client.id, user.id, (CartLine(product.id, 1), CartLine(product.id, 0)))
        )
    assert Transaction.select().count() == 0
    assert Client.get_by_id(client.id).total_points == 0


def test_checkout_empty_cart(service, client, user):
    with pytest.raises(ValidationError):
        service.checkout(CheckoutCommand(client.id, user.id, ()))


def test_record_payment_with_reminder(service, client, product, user):
    ledger_service.post_charge(client.id, product.id, 10, user.id)
    result = service.record_payment(
        PaymentCommand(
            client_id=client.id,
            amount=Decimal("20"),
            created_by=user.id,
            remind_at="2030-06-01 12:00",
        )
    )
    assert result.balance == Decimal("30.00")
    alert = PaymentAlert.get_by_id(result.alert_id)
    assert alert.amount == Decimal("30.00")
    assert alert.due_at == datetime(2030, 6, 1, 12, 0)
    assert alert.notes == "Напоминание: остаток после оплаты $20.00"


def test_record_payment_settled_skips_reminder(service, client, product, user):
    ledger_service.post_charge(client.id, product.id, 1, user.id)
    result = service.record_payment(
        PaymentCommand(client.id, Decimal("5"), user.id, remind_at=datetime(2030, 6, 1))
    )
    assert result.balance == Decimal("0.00")
    assert result.alert_id is None
    assert PaymentAlert.select().count() == 0


def test_record_payment_bad_reminder_rejected_before_write(service, client, user):
    with pytest.raises(ValidationError):
        service.record_payment(
            PaymentCommand(client.id, Decimal("5"), user.id, remind_at="когда-нибудь")
        )
    assert list(ledger_service.get_client_payments(client.id)) == []
