"""Игровые места (ПК) клуба."""

import logging

from peewee import ModelSelect

from core.errors import ConflictError, NotFoundError
from database.db import atomic_write
from database.models import PC, Reservation
from services.validators import require_text

logger = logging.getLogger(__name__)


def get_all_pcs() -> ModelSelect:
    return PC.select().order_by(PC.name.asc())


def get_active_pcs() -> ModelSelect:
    """ПК, доступные для новых броней."""
    return PC.select().where(PC.is_active == True).order_by(PC.name.asc())


def get_pc_by_id(pc_id: int) -> PC:
    pc = PC.get_or_none(PC.id == pc_id)
    if pc is None:
        raise NotFoundError("ПК", pc_id)
    return pc


def _ensure_unique_name(name: str, exclude_id: int | None = None) -> None:
    query = PC.select().where(PC.name == name)
    if exclude_id is not None:
        query = query.where(PC.id != exclude_id)
    if query.exists():
        raise ConflictError(f"ПК с именем {name!r} уже существует")


def add_pc(name: str, description: str | None = None) -> PC:
    name = require_text(name, "name")
    _ensure_unique_name(name)
    with atomic_write():
        pc = PC.create(name=name, description=description or None)
    logger.info("🖥 Добавлен ПК #%s %s", pc.id, name)
    return pc


def update_pc(
    pc_id: int, *, name: str, description: str | None = None, is_active: bool = True
) -> PC:
    """Изменить ПК; неактивный ПК сохраняет историю броней."""
    pc = get_pc_by_id(pc_id)
    name = require_text(name, "name")
    _ensure_unique_name(name, exclude_id=pc_id)
    pc.name = name
    pc.description = description or None
    pc.is_active = bool(is_active)
    with atomic_write():
        pc.save()
    logger.info("✏️ Обновлён ПК #%s (active=%s)", pc_id, pc.is_active)
    return pc


def delete_pc(pc_id: int) -> None:
    pc = get_pc_by_id(pc_id)
    if Reservation.select().where(Reservation.pc == pc).exists():
        raise ConflictError("Нельзя удалить ПК с бронями, отключите его")
    with atomic_write():
        pc.delete_instance()
    logger.info("🗑️ Удалён ПК #%s", pc_id)
