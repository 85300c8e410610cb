"""Адаптер для работы с Google Calendar."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from google.oauth2.service_account import Credentials
from googleapiclient.discovery import build

from config import Settings

SCOPES = ["https://www.googleapis.com/auth/calendar"]


@dataclass
class CalendarGateway:
    """Ленивая обёртка над Google Calendar API v3."""

    settings: Settings
    _service: Any = field(default=None, init=False, repr=False)

    def _get_service(self):
        if self._service is not None:
            return self._service

        credentials_path = Path(
            self.settings.calendar_service_account_file
        ).expanduser()
        creds = Credentials.from_service_account_file(
            str(credentials_path), scopes=SCOPES
        )
        self._service = build(
            "calendar", "v3", credentials=creds, cache_discovery=False
        )
        return self._service

    @property
    def calendar_id(self) -> str:
        return self.settings.calendar_id

    def insert_event(self, body: dict) -> str:
        """Создать событие и вернуть его идентификатор."""

        service = self._get_service()
        event = (
            service.events()
            .insert(calendarId=self.calendar_id, body=body)
            .execute()
        )
        return event["id"]

    def update_event(self, event_id: str, body: dict) -> None:
        service = self._get_service()
        service.events().update(
            calendarId=self.calendar_id, eventId=event_id, body=body
        ).execute()

    def delete_event(self, event_id: str) -> None:
        service = self._get_service()
        service.events().delete(
            calendarId=self.calendar_id, eventId=event_id
        ).execute()


__all__ = ["CalendarGateway"]
