"""Контекст приложения: настройки и лениво создаваемые сервисы."""

from __future__ import annotations

from typing import Any

from config import Settings, get_settings
from infrastructure.calendar_gateway import CalendarGateway
from services.calendar_sync import CalendarSyncService
from services.reservations import ReservationAppService
from services.sales import SaleAppService

# Имя зависимости -> фабрика от контекста.
_FACTORIES = {
    "calendar_gateway": lambda ctx: CalendarGateway(ctx.settings),
    "calendar_sync_service": lambda ctx: CalendarSyncService(
        settings=ctx.settings, gateway=ctx.calendar_gateway
    ),
    "sale_app_service": lambda ctx: SaleAppService(),
    "reservation_app_service": lambda ctx: ReservationAppService(
        sync=ctx.calendar_sync_service
    ),
}


class AppContext:
    """Создаёт каждый сервис при первом обращении и дальше отдаёт тот же."""

    def __init__(self, settings: Settings, overrides: dict[str, Any] | None = None):
        self.settings = settings
        self._instances: dict[str, Any] = dict(overrides or {})

    def _get(self, name: str) -> Any:
        if name not in self._instances:
            self._instances[name] = _FACTORIES[name](self)
        return self._instances[name]

    @property
    def calendar_gateway(self) -> CalendarGateway:
        return self._get("calendar_gateway")

    @property
    def calendar_sync_service(self) -> CalendarSyncService:
        return self._get("calendar_sync_service")

    @property
    def sale_app_service(self) -> SaleAppService:
        return self._get("sale_app_service")

    @property
    def reservation_app_service(self) -> ReservationAppService:
        return self._get("reservation_app_service")

    def override(self, **deps: Any) -> AppContext:
        """Новый контекст с подставленными зависимостями (для тестов)."""
        unknown = set(deps) - set(_FACTORIES)
        if unknown:
            raise ValueError(f"Неизвестные зависимости: {', '.join(sorted(unknown))}")
        return AppContext(self.settings, deps)


_app_context: AppContext | None = None


def build_app_context(settings: Settings) -> AppContext:
    return AppContext(settings)


def get_app_context() -> AppContext:
    """Синглтон контекста для HTTP-диспетчера."""
    global _app_context
    if _app_context is None:
        _app_context = build_app_context(get_settings())
    return _app_context


__all__ = ["AppContext", "build_app_context", "get_app_context"]
