"""Сервис каталога товаров."""

import logging

from peewee import ModelSelect

from core.errors import ConflictError, NotFoundError
from database.db import atomic_write
from database.models import Category, Product, Transaction
from services.category_service import get_category_by_id
from services.validators import parse_money, parse_positive_int, require_text

logger = logging.getLogger(__name__)


# ──────────────────────────── Получение ─────────────────────────────


def get_product_by_id(product_id: int) -> Product:
    product = Product.get_or_none(Product.id == product_id)
    if product is None:
        raise NotFoundError("Товар", product_id)
    return product


def get_products(search_text: str = "", category_id: int | None = None) -> ModelSelect:
    """Товары по категориям и названию с необязательными фильтрами."""
    query = Product.select(Product, Category).join(Category)
    if search_text:
        query = query.where(
            Product.name.contains(search_text)
            | Product.description.contains(search_text)
        )
    if category_id:
        query = query.where(Product.category == category_id)
    return query.order_by(Category.name.asc(), Product.name.asc())


# ──────────────────────────── Изменение ─────────────────────────────


def _validated(name, category_id, price, ghost_points) -> dict:
    return {
        "name": require_text(name, "name"),
        "category": get_category_by_id(category_id),
        "price": parse_money(price, "price"),
        "ghost_points": parse_positive_int(
            ghost_points or 0, "ghost_points", allow_zero=True
        ),
    }


def add_product(
    name: str,
    category_id: int,
    price,
    description: str | None = None,
    ghost_points: int = 0,
) -> Product:
    data = _validated(name, category_id, price, ghost_points)
    with atomic_write():
        product = Product.create(description=description or None, **data)
    logger.info("📦 Создан товар #%s %s по %s", product.id, product.name, product.price)
    return product


def update_product(
    product_id: int,
    *,
    name: str,
    category_id: int,
    price,
    description: str | None = None,
    ghost_points: int = 0,
) -> Product:
    """Обновить товар. Прошлые начисления сохраняют свою цену."""
    product = get_product_by_id(product_id)
    data = _validated(name, category_id, price, ghost_points)
    for key, value in data.items():
        setattr(product, key, value)
    product.description = description or None
    product.touch()
    with atomic_write():
        product.save()
    logger.info("✏️ Обновлён товар #%s", product_id)
    return product


def delete_product(product_id: int) -> None:
    product = get_product_by_id(product_id)
    if Transaction.select().where(Transaction.product == product).exists():
        logger.warning("⛔ Товар #%s есть в начислениях, удаление отклонено", product_id)
        raise ConflictError("Нельзя удалить товар, по которому есть начисления")
    with atomic_write():
        product.delete_instance()
    logger.info("🗑️ Удалён товар #%s", product_id)
