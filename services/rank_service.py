"""Ранги программы лояльности (GhostPoints) и расчёт скидки."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from peewee import ModelSelect

from core.errors import ConflictError, NotFoundError, ValidationError
from database.db import atomic_write
from database.models import Rank
from services.validators import parse_positive_int, require_text
from utils.money import ZERO, quantize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankInfo:
    """Текущий и следующий ранги для заданного количества очков."""

    current_rank: Rank | None
    next_rank: Rank | None

    @property
    def discount_percent(self) -> Decimal:
        if self.current_rank is None:
            return ZERO
        return quantize(self.current_rank.discount_percent)

    def points_to_next(self, total_points: int) -> int | None:
        if self.next_rank is None:
            return None
        return self.next_rank.min_points - total_points


def _parse_discount(value) -> Decimal:
    try:
        discount = quantize(value if value is not None else 0)
    except ArithmeticError:
        raise ValidationError(f"Некорректная скидка: {value!r}") from None
    if not Decimal(0) <= discount <= Decimal(100):
        raise ValidationError("Скидка должна быть в диапазоне 0–100%")
    return discount


def _ensure_unique_threshold(min_points: int, exclude_id: int | None = None) -> None:
    query = Rank.select().where(Rank.min_points == min_points)
    if exclude_id is not None:
        query = query.where(Rank.id != exclude_id)
    if query.exists():
        logger.warning("⛔ Порог ранга %s уже занят", min_points)
        raise ConflictError(f"Ранг с порогом {min_points} очков уже существует")


# ──────────────────────────── Получение ─────────────────────────────


def get_all_ranks() -> ModelSelect:
    """Все ранги по возрастанию порога."""
    return Rank.select().order_by(Rank.min_points.asc())


def get_rank_by_id(rank_id: int) -> Rank:
    rank = Rank.get_or_none(Rank.id == rank_id)
    if rank is None:
        raise NotFoundError("Ранг", rank_id)
    return rank


def get_rank_info(total_points: int) -> RankInfo:
    """Найти ранг с наибольшим порогом ``<= total_points`` и следующий за ним."""
    current = (
        Rank.select()
        .where(Rank.min_points <= total_points)
        .order_by(Rank.min_points.desc())
        .first()
    )
    following = (
        Rank.select()
        .where(Rank.min_points > total_points)
        .order_by(Rank.min_points.asc())
        .first()
    )
    return RankInfo(current_rank=current, next_rank=following)


def get_discount_percent(total_points: int) -> Decimal:
    """Скидка текущего ранга; без подходящего ранга скидка нулевая."""
    return get_rank_info(total_points).discount_percent


# ──────────────────────────── Изменение ─────────────────────────────


def add_rank(
    name: str,
    min_points: int,
    discount_percent=0,
    color: str | None = None,
    sort_order: int = 0,
) -> Rank:
    name = require_text(name, "name")
    min_points = parse_positive_int(min_points, "min_points", allow_zero=True)
    discount = _parse_discount(discount_percent)
    _ensure_unique_threshold(min_points)

    with atomic_write():
        rank = Rank.create(
            name=name,
            min_points=min_points,
            discount_percent=discount,
            color=color or "#808080",
            sort_order=sort_order,
        )
    logger.info("🏅 Создан ранг %s (%s очков, %s%%)", name, min_points, discount)
    return rank


def update_rank(
    rank_id: int,
    *,
    name: str,
    min_points: int,
    discount_percent=0,
    color: str | None = None,
    sort_order: int = 0,
) -> Rank:
    rank = get_rank_by_id(rank_id)
    rank.name = require_text(name, "name")
    rank.min_points = parse_positive_int(min_points, "min_points", allow_zero=True)
    rank.discount_percent = _parse_discount(discount_percent)
    rank.color = color or rank.color
    rank.sort_order = sort_order
    _ensure_unique_threshold(rank.min_points, exclude_id=rank.id)

    with atomic_write():
        rank.save()
    logger.info("✏️ Обновлён ранг #%s", rank_id)
    return rank


def delete_rank(rank_id: int) -> None:
    rank = get_rank_by_id(rank_id)
    with atomic_write():
        rank.delete_instance()
    logger.info("🗑️ Удалён ранг #%s", rank_id)
