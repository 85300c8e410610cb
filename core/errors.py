"""Классифицированные ошибки доменного слоя.

Диспетчер запросов переводит их в конверт ``{success, error}``;
сервисы только выбирают правильный класс.
"""

from __future__ import annotations


class LoungeError(Exception):
    """Базовая ошибка с машиночитаемым видом ``kind``."""

    kind = "error"


class ValidationError(LoungeError, ValueError):
    """Некорректные входные данные, отклонены до записи."""

    kind = "validation"


class NotFoundError(LoungeError, LookupError):
    """Запрошенная сущность отсутствует в хранилище."""

    kind = "not_found"

    def __init__(self, entity: str, entity_id: object, message: str | None = None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(message or f"{entity} id={entity_id} не найден")


class ConflictError(LoungeError):
    """Пересечение бронирований или удаление записи с историей."""

    kind = "conflict"


class StoreError(LoungeError):
    """Сбой хранилища; ядро его не обрабатывает."""

    kind = "store"


__all__ = [
    "LoungeError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "StoreError",
]
