"""Общий Peewee-Proxy ``db`` и транзакционная обёртка записи."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from peewee import DatabaseError, InterfaceError, Proxy

from core.errors import StoreError

db = Proxy()


@contextmanager
def atomic_write() -> Iterator[None]:
    """Выполнить блок в ``db.atomic()`` и поднять сбои БД как :class:`StoreError`."""
    try:
        with db.atomic():
            yield
    except (DatabaseError, InterfaceError) as exc:
        raise StoreError(f"Ошибка хранилища: {exc}") from exc
