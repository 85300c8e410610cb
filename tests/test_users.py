import pytest

from core.errors import ConflictError, NotFoundError, ValidationError
from database.models import Reservation
from services import ledger_service
from services.reservation_service import create_reservation
from services.user_service import (
    add_user,
    authenticate,
    delete_user,
    get_all_users,
    get_user_by_id,
    update_user,
)


def test_add_user_hashes_password():
    user = add_user("admin", "s3cret", "Администратор", "admin")
    assert user.password_hash != "s3cret"
    assert user.password_hash.startswith("$2")
    assert user.role == "admin"


def test_authenticate():
    add_user("staff", "pass", "Сотрудник")
    assert authenticate("staff", "pass").username == "staff"
    assert authenticate(" staff ", "pass") is not None
    assert authenticate("staff", "wrong") is None
    assert authenticate("nobody", "pass") is None


def test_user_validation():
    with pytest.raises(ValidationError):
        add_user("", "pass", "Имя")
    with pytest.raises(ValidationError):
        add_user("login", "", "Имя")
    with pytest.raises(ValidationError):
        add_user("login", "pass", "Имя", role="owner")


def test_username_unique(user):
    with pytest.raises(ConflictError):
        add_user("cashier", "other", "Другой")
    second = add_user("second", "pw", "Второй")
    with pytest.raises(ConflictError):
        update_user(second.id, username="cashier", full_name="Второй", role="staff")


def test_update_user_password_only_when_given(user):
    old_hash = user.password_hash
    update_user(user.id, username="cashier", full_name="Старший кассир", role="admin")
    stored = get_user_by_id(user.id)
    assert stored.password_hash == old_hash
    assert stored.full_name == "Старший кассир"

    update_user(user.id, username="cashier", full_name="Старший кассир", role="admin", password="new")
    assert authenticate("cashier", "new") is not None
    assert authenticate("cashier", "secret") is None


def test_delete_user_with_operations_rejected(user, client, product):
    ledger_service.post_charge(client.id, product.id, 1, user.id)
    with pytest.raises(ConflictError):
        delete_user(user.id)


def test_delete_user_clears_reservation_author(user, client, pc, hours):
    reservation = create_reservation(client.id, pc.id, *hours(0, 1), created_by=user.id)
    delete_user(user.id)
    assert Reservation.get_by_id(reservation.id).created_by_id is None
    assert list(get_all_users()) == []
    with pytest.raises(NotFoundError):
        get_user_by_id(user.id)
