"""Зеркалирование броней во внешний календарь.

Ошибки календаря не влияют на бронь: они логируются и отбрасываются.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from config import Settings
from database.models import Reservation
from infrastructure.calendar_gateway import CalendarGateway

logger = logging.getLogger(__name__)

EVENT_COLOR_ID = "10"


def build_event_body(reservation: Reservation, timezone: str) -> dict:
    """Сформировать тело события Google Calendar для брони."""
    client_name = reservation.client.name
    pc_name = reservation.pc.name
    description = f"Gaming reservation for {client_name}\nPC: {pc_name}"
    if reservation.notes:
        description += f"\n{reservation.notes}"
    return {
        "summary": f"{client_name} - {pc_name}",
        "description": description,
        "start": {
            "dateTime": reservation.start_time.isoformat(),
            "timeZone": timezone,
        },
        "end": {
            "dateTime": reservation.end_time.isoformat(),
            "timeZone": timezone,
        },
        "colorId": EVENT_COLOR_ID,
    }


@dataclass
class CalendarSyncService:
    settings: Settings
    gateway: CalendarGateway

    @property
    def enabled(self) -> bool:
        return self.settings.calendar_enabled

    def push_created(self, reservation: Reservation) -> str | None:
        """Создать событие; вернуть его id или ``None`` при сбое."""
        if not self.enabled:
            return None
        body = build_event_body(reservation, self.settings.calendar_timezone)
        try:
            event_id = self.gateway.insert_event(body)
        except Exception:  # noqa: BLE001
            logger.warning(
                "Не удалось создать событие для брони #%s",
                reservation.id,
                exc_info=True,
            )
            return None
        logger.info("🗓 Бронь #%s отражена в календаре: %s", reservation.id, event_id)
        return event_id

    def push_updated(self, reservation: Reservation) -> bool:
        if not self.enabled or not reservation.external_event_id:
            return False
        body = build_event_body(reservation, self.settings.calendar_timezone)
        try:
            self.gateway.update_event(reservation.external_event_id, body)
        except Exception:  # noqa: BLE001
            logger.warning(
                "Не удалось обновить событие %s", reservation.external_event_id,
                exc_info=True,
            )
            return False
        return True

    def push_deleted(self, event_id: str | None) -> bool:
        if not self.enabled or not event_id:
            return False
        try:
            self.gateway.delete_event(event_id)
        except Exception:  # noqa: BLE001
            logger.warning("Не удалось удалить событие %s", event_id, exc_info=True)
            return False
        logger.info("🗓 Событие %s удалено из календаря", event_id)
        return True
