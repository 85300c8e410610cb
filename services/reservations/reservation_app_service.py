"""Прикладной сервис броней с зеркалированием во внешний календарь."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from database.models import Reservation
from services import reservation_service
from services.calendar_sync import CalendarSyncService

from .dto import ReservationCommand

logger = logging.getLogger(__name__)


@dataclass
class ReservationAppService:
    sync: CalendarSyncService

    def create(self, command: ReservationCommand) -> Reservation:
        reservation = reservation_service.create_reservation(
            command.client_id,
            command.pc_id,
            command.start,
            command.end,
            notes=command.notes,
            created_by=command.created_by,
        )
        self._mirror_new(reservation)
        return reservation_service.get_reservation(reservation.id)

    def update(self, reservation_id: int, command: ReservationCommand) -> Reservation:
        reservation_service.update_reservation(
            reservation_id,
            command.client_id,
            command.pc_id,
            command.start,
            command.end,
            notes=command.notes,
        )
        reservation = reservation_service.get_reservation(reservation_id)
        if reservation.external_event_id:
            self.sync.push_updated(reservation)
        else:
            self._mirror_new(reservation)
        return reservation_service.get_reservation(reservation_id)

    def delete(self, reservation_id: int) -> Reservation:
        reservation = reservation_service.delete_reservation(reservation_id)
        self.sync.push_deleted(reservation.external_event_id)
        return reservation

    def _mirror_new(self, reservation: Reservation) -> None:
        event_id = self.sync.push_created(reservation)
        if event_id:
            reservation_service.set_external_event_id(reservation.id, event_id)
            logger.debug("Бронь #%s связана с событием %s", reservation.id, event_id)


__all__ = ["ReservationAppService"]
