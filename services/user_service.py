"""Сервис учётных записей сотрудников клуба."""

from __future__ import annotations

import logging

import bcrypt
from peewee import ModelSelect

from core.errors import ConflictError, NotFoundError, ValidationError
from database.db import atomic_write
from database.models import Payment, Transaction, User, UserRole
from services.validators import require_text

logger = logging.getLogger(__name__)

_BCRYPT_ROUNDS = 12
_ROLES = {role.value for role in UserRole}


def hash_password(password: str) -> str:
    """Хэшировать пароль через bcrypt."""
    if not password:
        raise ValidationError("Пароль не может быть пустым")
    salt = bcrypt.gensalt(rounds=_BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def _check_role(role: str) -> str:
    if role not in _ROLES:
        raise ValidationError(f"Неизвестная роль: {role!r}")
    return role


# ──────────────────────────── Получение ─────────────────────────────


def get_all_users() -> ModelSelect:
    """Пользователи, новые первыми."""
    return User.select().order_by(User.created_at.desc(), User.id.desc())


def get_user_by_id(user_id: int) -> User:
    user = User.get_or_none(User.id == user_id)
    if user is None:
        raise NotFoundError("Пользователь", user_id)
    return user


def authenticate(username: str, password: str) -> User | None:
    """Вернуть пользователя при совпадении пароля, иначе ``None``."""
    user = User.get_or_none(User.username == (username or "").strip())
    if user is None or not verify_password(password or "", user.password_hash):
        logger.warning("🔒 Неудачная попытка входа: %s", username)
        return None
    logger.info("🔓 Вход пользователя %s", user.username)
    return user


# ──────────────────────────── Изменение ─────────────────────────────


def add_user(
    username: str, password: str, full_name: str, role: str = UserRole.STAFF.value
) -> User:
    """Создать пользователя с уникальным логином."""
    username = require_text(username, "username")
    full_name = require_text(full_name, "full_name")
    role = _check_role(role)
    if User.select().where(User.username == username).exists():
        raise ConflictError(f"Логин {username!r} уже занят")

    password_hash = hash_password(password)
    with atomic_write():
        user = User.create(
            username=username,
            password_hash=password_hash,
            full_name=full_name,
            role=role,
        )
    logger.info("👤 Создан пользователь #%s %s", user.id, username)
    return user


def update_user(
    user_id: int,
    *,
    username: str,
    full_name: str,
    role: str,
    password: str | None = None,
) -> User:
    """Обновить пользователя; пароль меняется только если передан."""
    user = get_user_by_id(user_id)
    username = require_text(username, "username")
    full_name = require_text(full_name, "full_name")
    role = _check_role(role)
    clash = User.select().where((User.username == username) & (User.id != user_id))
    if clash.exists():
        raise ConflictError(f"Логин {username!r} уже занят")

    user.username = username
    user.full_name = full_name
    user.role = role
    if password:
        user.password_hash = hash_password(password)
    user.touch()
    with atomic_write():
        user.save()
    logger.info("✏️ Обновлён пользователь #%s", user_id)
    return user


def delete_user(user_id: int) -> None:
    """Удалить пользователя без проведённых операций."""
    user = get_user_by_id(user_id)
    has_history = (
        Transaction.select().where(Transaction.created_by == user).exists()
        or Payment.select().where(Payment.created_by == user).exists()
    )
    if has_history:
        logger.warning("⛔ Пользователь #%s имеет операции, удаление отклонено", user_id)
        raise ConflictError(
            "Нельзя удалить пользователя с проведёнными начислениями или оплатами"
        )
    with atomic_write():
        user.delete_instance()
    logger.info("🗑️ Удалён пользователь #%s", user_id)
