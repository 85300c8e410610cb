"""Бронирование ПК и проверка пересечений.

Интервалы броней полуоткрытые: ``[start, end)``. Брони ``[a, b)`` и
``[c, d)`` пересекаются тогда и только тогда, когда ``a < d and c < b``,
поэтому бронь, которая заканчивается ровно в момент начала другой,
конфликтом не считается.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime

from peewee import ModelSelect

from core.errors import ConflictError, NotFoundError, ValidationError
from database.db import atomic_write
from database.models import PC, Client, Reservation, User
from services.validators import parse_positive_int, validate_interval

logger = logging.getLogger(__name__)

# Проверка пересечения и запись брони выполняются под одной блокировкой.
_booking_lock = threading.RLock()


def _interval(start, end) -> tuple[datetime, datetime]:
    return validate_interval(start, end)


def _overlaps(start: datetime, end: datetime):
    return (Reservation.start_time < end) & (Reservation.end_time > start)


def _with_relations(query: ModelSelect) -> ModelSelect:
    return (
        query.select_extend(Client, PC)
        .join(Client)
        .switch(Reservation)
        .join(PC)
        .switch(Reservation)
    )


def _get_client(client_id: int) -> Client:
    client = Client.get_or_none(Client.id == client_id)
    if client is None:
        raise NotFoundError("Клиент", client_id)
    return client


def _get_pc(pc_id: int) -> PC:
    pc = PC.get_or_none(PC.id == pc_id)
    if pc is None:
        raise NotFoundError("ПК", pc_id)
    return pc


def _get_user(user_id: int | None) -> User | None:
    if user_id is None:
        return None
    user = User.get_or_none(User.id == user_id)
    if user is None:
        raise NotFoundError("Пользователь", user_id)
    return user


# ──────────────────────────── Проверка ─────────────────────────────


def check_conflict(
    pc_id: int,
    start: datetime,
    end: datetime,
    exclude_reservation_id: int | None = None,
) -> bool:
    """Есть ли на ``pc_id`` бронь, пересекающая ``[start, end)``.

    Интервал должен быть уже проверен вызывающим кодом (``end > start``).
    """
    query = Reservation.select().where(
        (Reservation.pc == pc_id) & _overlaps(start, end)
    )
    if exclude_reservation_id is not None:
        query = query.where(Reservation.id != exclude_reservation_id)
    return query.exists()


# ──────────────────────────── Получение ─────────────────────────────


def get_reservation(reservation_id: int) -> Reservation:
    reservation = (
        _with_relations(Reservation.select())
        .where(Reservation.id == reservation_id)
        .first()
    )
    if reservation is None:
        raise NotFoundError("Бронь", reservation_id)
    return reservation


def get_all_reservations() -> ModelSelect:
    return _with_relations(Reservation.select()).order_by(
        Reservation.start_time.desc()
    )


def get_reservations_by_client(client_id: int) -> ModelSelect:
    return (
        _with_relations(Reservation.select())
        .where(Reservation.client == client_id)
        .order_by(Reservation.start_time.desc())
    )


def list_by_range(range_start, range_end) -> ModelSelect:
    """Брони, пересекающие диапазон, по возрастанию начала."""
    start, end = _interval(range_start, range_end)
    return (
        _with_relations(Reservation.select())
        .where(_overlaps(start, end))
        .order_by(Reservation.start_time.asc(), Reservation.id.asc())
    )


def list_upcoming(limit: int = 10, now: datetime | None = None) -> ModelSelect:
    """Ближайшие брони, начинающиеся не раньше ``now``."""
    limit = parse_positive_int(limit, "limit")
    now = now or datetime.now()
    return (
        _with_relations(Reservation.select())
        .where(Reservation.start_time >= now)
        .order_by(Reservation.start_time.asc(), Reservation.id.asc())
        .limit(limit)
    )


# ──────────────────────────── Изменение ─────────────────────────────


def create_reservation(
    client_id: int,
    pc_id: int,
    start,
    end,
    *,
    notes: str | None = None,
    created_by: int | None = None,
    external_event_id: str | None = None,
) -> Reservation:
    """Забронировать ПК, если интервал свободен."""
    start_at, end_at = _interval(start, end)
    client = _get_client(client_id)
    pc = _get_pc(pc_id)
    user = _get_user(created_by)
    if not pc.is_active:
        raise ValidationError(f"ПК {pc.name} отключён и недоступен для брони")

    with _booking_lock, atomic_write():
        if check_conflict(pc.id, start_at, end_at):
            logger.warning(
                "⛔ Пересечение брони на ПК #%s: %s – %s", pc.id, start_at, end_at
            )
            raise ConflictError(f"ПК {pc.name} уже забронирован на это время")
        reservation = Reservation.create(
            client=client,
            pc=pc,
            start_time=start_at,
            end_time=end_at,
            notes=notes or None,
            external_event_id=external_event_id,
            created_by=user,
        )
    logger.info(
        "📅 Бронь #%s: клиент #%s, ПК %s, %s – %s",
        reservation.id,
        client.id,
        pc.name,
        start_at,
        end_at,
    )
    return reservation


def update_reservation(
    reservation_id: int,
    client_id: int,
    pc_id: int,
    start,
    end,
    *,
    notes: str | None = None,
    external_event_id: str | None = None,
) -> Reservation:
    """Изменить бронь; собственный интервал в проверку не входит.

    ``external_event_id=None`` оставляет прежнюю ссылку на событие.
    """
    start_at, end_at = _interval(start, end)
    reservation = Reservation.get_or_none(Reservation.id == reservation_id)
    if reservation is None:
        raise NotFoundError("Бронь", reservation_id)
    client = _get_client(client_id)
    pc = _get_pc(pc_id)
    if not pc.is_active and pc.id != reservation.pc_id:
        raise ValidationError(f"ПК {pc.name} отключён и недоступен для брони")

    with _booking_lock, atomic_write():
        if check_conflict(pc.id, start_at, end_at, exclude_reservation_id=reservation.id):
            logger.warning(
                "⛔ Пересечение при изменении брони #%s на ПК #%s", reservation.id, pc.id
            )
            raise ConflictError(f"ПК {pc.name} уже забронирован на это время")
        reservation.client = client
        reservation.pc = pc
        reservation.start_time = start_at
        reservation.end_time = end_at
        reservation.notes = notes or None
        if external_event_id is not None:
            reservation.external_event_id = external_event_id
        reservation.touch()
        reservation.save()
    logger.info("✏️ Изменена бронь #%s", reservation.id)
    return reservation


def set_external_event_id(reservation_id: int, event_id: str | None) -> None:
    """Сохранить ссылку на событие во внешнем календаре."""
    with atomic_write():
        updated = (
            Reservation.update(external_event_id=event_id)
            .where(Reservation.id == reservation_id)
            .execute()
        )
    if not updated:
        raise NotFoundError("Бронь", reservation_id)


def delete_reservation(reservation_id: int) -> Reservation:
    """Удалить бронь и вернуть удалённую запись."""
    reservation = get_reservation(reservation_id)
    with _booking_lock, atomic_write():
        reservation.delete_instance()
    logger.info("🗑️ Удалена бронь #%s", reservation_id)
    return reservation
