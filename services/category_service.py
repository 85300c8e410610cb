"""Категории товаров."""

import logging

from peewee import ModelSelect

from core.errors import ConflictError, NotFoundError
from database.db import atomic_write
from database.models import Category, Product
from services.validators import require_text

logger = logging.getLogger(__name__)


def get_all_categories() -> ModelSelect:
    return Category.select().order_by(Category.name.asc())


def get_category_by_id(category_id: int) -> Category:
    category = Category.get_or_none(Category.id == category_id)
    if category is None:
        raise NotFoundError("Категория", category_id)
    return category


def _ensure_unique_name(name: str, exclude_id: int | None = None) -> None:
    query = Category.select().where(Category.name == name)
    if exclude_id is not None:
        query = query.where(Category.id != exclude_id)
    if query.exists():
        raise ConflictError(f"Категория {name!r} уже существует")


def add_category(name: str, description: str | None = None) -> Category:
    name = require_text(name, "name")
    _ensure_unique_name(name)
    with atomic_write():
        category = Category.create(name=name, description=description or None)
    logger.info("📂 Создана категория #%s %s", category.id, name)
    return category


def update_category(category_id: int, name: str, description: str | None = None) -> Category:
    category = get_category_by_id(category_id)
    name = require_text(name, "name")
    _ensure_unique_name(name, exclude_id=category_id)
    category.name = name
    category.description = description or None
    with atomic_write():
        category.save()
    return category


def delete_category(category_id: int) -> None:
    """Удалить категорию без товаров."""
    category = get_category_by_id(category_id)
    if Product.select().where(Product.category == category).exists():
        raise ConflictError("Нельзя удалить категорию, в которой есть товары")
    with atomic_write():
        category.delete_instance()
    logger.info("🗑️ Удалена категория #%s", category_id)
