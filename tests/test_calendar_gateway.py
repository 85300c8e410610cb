from __future__ import annotations

from datetime import datetime
from types import SimpleNamespace

import pytest

from config import Settings
from infrastructure.calendar_gateway import CalendarGateway
from services.calendar_sync import EVENT_COLOR_ID, build_event_body


class _FakeExecute:
    def __init__(self, response):
        self._response = response

    def execute(self):
        return self._response


class _FakeEventsResource:
    def __init__(self):
        self.calls: list[tuple[str, dict]] = []

    def insert(self, **kwargs):
        self.calls.append(("insert", kwargs))
        return _FakeExecute({"id": "evt-123"})

    def update(self, **kwargs):
        self.calls.append(("update", kwargs))
        return _FakeExecute({})

    def delete(self, **kwargs):
        self.calls.append(("delete", kwargs))
        return _FakeExecute("")


class _FakeService:
    def __init__(self, events_resource):
        self._events_resource = events_resource

    def events(self):
        return self._events_resource


@pytest.fixture
def gateway(monkeypatch):
    events = _FakeEventsResource()
    gateway = CalendarGateway(Settings(calendar_id="club@example.com"))
    monkeypatch.setattr(gateway, "_get_service", lambda: _FakeService(events))
    return gateway, events


def test_insert_update_delete_use_calendar_id(gateway):
    gateway, events = gateway

    assert gateway.insert_event({"summary": "x"}) == "evt-123"
    gateway.update_event("evt-123", {"summary": "y"})
    gateway.delete_event("evt-123")

    assert [name for name, _ in events.calls] == ["insert", "update", "delete"]
    assert all(kw["calendarId"] == "club@example.com" for _, kw in events.calls)
    assert events.calls[1][1]["eventId"] == "evt-123"
    assert events.calls[1][1]["body"] == {"summary": "y"}


def test_build_event_body():
    reservation = SimpleNamespace(
        client=SimpleNamespace(name="Иван"),
        pc=SimpleNamespace(name="VIP-1"),
        notes=None,
        start_time=datetime(2030, 5, 10, 12, 0),
        end_time=datetime(2030, 5, 10, 14, 0),
    )
    body = build_event_body(reservation, "Europe/Moscow")
    assert body["summary"] == "Иван - VIP-1"
    assert body["description"] == "Gaming reservation for Иван\nPC: VIP-1"
    assert body["start"] == {"dateTime": "2030-05-10T12:00:00", "timeZone": "Europe/Moscow"}
    assert body["end"]["dateTime"] == "2030-05-10T14:00:00"
    assert body["colorId"] == EVENT_COLOR_ID
