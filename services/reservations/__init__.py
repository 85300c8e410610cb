"""Подмодуль броней ПК."""

from .dto import ReservationCommand
from .reservation_app_service import ReservationAppService

__all__ = ["ReservationAppService", "ReservationCommand"]
