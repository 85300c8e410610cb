"""Сервисный модуль для управления клиентами."""

import logging
from dataclasses import dataclass
from decimal import Decimal

from peewee import ModelSelect

from core.errors import ConflictError, NotFoundError, ValidationError
from database.db import atomic_write
from database.models import Client, Payment, PaymentAlert, Reservation, Transaction
from services import ledger_service, rank_service
from services.validators import normalize_email, normalize_full_name, normalize_phone

logger = logging.getLogger(__name__)

CLIENT_ALLOWED_FIELDS = {"name", "phone", "email", "notes"}


@dataclass
class ClientSummary:
    """Клиент с вычисленным балансом и сведениями о ранге."""

    client: Client
    balance: Decimal
    rank_info: rank_service.RankInfo

    @property
    def discount_percent(self) -> Decimal:
        return self.rank_info.discount_percent

    @property
    def points_to_next_rank(self) -> int | None:
        return self.rank_info.points_to_next(self.client.total_points)


def _clean(kwargs: dict) -> dict:
    data = {
        key: kwargs[key]
        for key in CLIENT_ALLOWED_FIELDS
        if key in kwargs and kwargs[key] not in ("", None)
    }
    if "name" in data:
        data["name"] = normalize_full_name(data["name"])
    if "phone" in data:
        try:
            data["phone"] = normalize_phone(data["phone"])
        except ValueError as e:
            logger.warning("⚠️ Ошибка нормализации телефона '%s': %s", data["phone"], e)
            raise
    if "email" in data:
        data["email"] = normalize_email(data["email"])
    return data


# ──────────────────────────── Получение ─────────────────────────────


def get_client_by_id(client_id: int) -> Client:
    """Получить клиента по его идентификатору."""
    client = Client.get_or_none(Client.id == client_id)
    if client is None:
        raise NotFoundError("Клиент", client_id)
    return client


def build_client_query(search_text: str = "") -> ModelSelect:
    """Создаёт выборку клиентов с учётом строки поиска."""
    query = Client.select()
    if search_text:
        query = query.where(
            (Client.name.contains(search_text))
            | (Client.phone.contains(search_text))
            | (Client.email.contains(search_text))
        )
    return query.order_by(Client.name.asc())


def get_clients(search_text: str = "") -> list[tuple[Client, Decimal]]:
    """Клиенты по имени вместе с текущим балансом."""
    balances = ledger_service.get_balances()
    return [
        (client, balances.get(client.id, Decimal("0.00")))
        for client in build_client_query(search_text)
    ]


def get_client_summary(client_id: int) -> ClientSummary:
    client = get_client_by_id(client_id)
    return ClientSummary(
        client=client,
        balance=ledger_service.get_balance(client.id),
        rank_info=rank_service.get_rank_info(client.total_points),
    )


# ──────────────────────────── Добавление ─────────────────────────────


def add_client(**kwargs) -> Client:
    """Создать и вернуть нового клиента."""
    clean_data = _clean(kwargs)

    if not clean_data.get("name"):
        logger.warning("❌ Попытка создать клиента без имени")
        raise ValidationError("Поле 'name' обязательно для клиента")

    with atomic_write():
        client = Client.create(**clean_data)
    logger.info("🙋 Создан клиент #%s %s", client.id, client.name)
    return client


# ──────────────────────────── Обновление ─────────────────────────────


def update_client(client_id: int, **kwargs) -> Client:
    """Обновить контактные данные клиента. Очки здесь не меняются."""
    client = get_client_by_id(client_id)
    updates = _clean(kwargs)
    if not updates:
        return client

    logger.info("✏️ Обновление клиента #%s: %s", client.id, updates)
    for k, v in updates.items():
        setattr(client, k, v)
    client.touch()
    with atomic_write():
        client.save()
    return client


# ──────────────────────────── Удаление ─────────────────────────────


def delete_client(client_id: int) -> None:
    """Удалить клиента без финансовой истории.

    Брони и напоминания клиента удаляются вместе с ним.
    """
    client = get_client_by_id(client_id)
    has_history = (
        Transaction.select().where(Transaction.client == client).exists()
        or Payment.select().where(Payment.client == client).exists()
    )
    if has_history:
        logger.warning("⛔ Клиент #%s имеет историю операций, удаление отклонено", client_id)
        raise ConflictError(
            "Нельзя удалить клиента с начислениями или оплатами"
        )

    with atomic_write():
        PaymentAlert.delete().where(PaymentAlert.client == client).execute()
        Reservation.delete().where(Reservation.client == client).execute()
        client.delete_instance()
    logger.info("🗑️ Удалён клиент #%s", client_id)
