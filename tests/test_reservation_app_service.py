import pytest

from core.errors import ConflictError
from database.models import Reservation
from services.calendar_sync import CalendarSyncService
from services.reservation_service import get_reservation
from services.reservations import ReservationAppService, ReservationCommand


@pytest.fixture
def service(calendar_settings, stub_calendar_gateway):
    sync = CalendarSyncService(settings=calendar_settings, gateway=stub_calendar_gateway)
    return ReservationAppService(sync=sync)


def _command(client, pc, start, end, **kwargs):
    return ReservationCommand(client_id=client.id, pc_id=pc.id, start=start, end=end, **kwargs)


def test_create_mirrors_event_and_stores_id(service, stub_calendar_gateway, client, pc, hours):
    reservation = service.create(_command(client, pc, *hours(0, 2), notes="Стрим"))
    assert reservation.external_event_id == "evt-1"
    assert get_reservation(reservation.id).external_event_id == "evt-1"
    body = stub_calendar_gateway.inserted[0]
    assert body["summary"] == f"{client.name} - {pc.name}"
    assert "Стрим" in body["description"]


def test_calendar_failure_does_not_block_booking(service, stub_calendar_gateway, client, pc, hours):
    stub_calendar_gateway.fail = True
    reservation = service.create(_command(client, pc, *hours(0, 2)))
    assert reservation.external_event_id is None
    assert Reservation.select().count() == 1


def test_conflict_skips_calendar(service, stub_calendar_gateway, client, pc, hours):
    service.create(_command(client, pc, *hours(0, 2)))
    with pytest.raises(ConflictError):
        service.create(_command(client, pc, *hours(1, 3)))
    assert len(stub_calendar_gateway.inserted) == 1


def test_update_pushes_existing_event(service, stub_calendar_gateway, client, pc, hours):
    reservation = service.create(_command(client, pc, *hours(0, 2)))
    updated = service.update(reservation.id, _command(client, pc, *hours(1, 3)))
    assert updated.external_event_id == "evt-1"
    event_id, body = stub_calendar_gateway.updated[0]
    assert event_id == "evt-1"
    assert body["start"]["dateTime"] == hours(1, 3)[0].isoformat()


def test_update_creates_missing_event(service, stub_calendar_gateway, client, pc, hours):
    stub_calendar_gateway.fail = True
    reservation = service.create(_command(client, pc, *hours(0, 2)))
    stub_calendar_gateway.fail = False
    updated = service.update(reservation.id, _command(client, pc, *hours(0, 3)))
    assert updated.external_event_id == "evt-1"
    assert stub_calendar_gateway.updated == []


def test_delete_removes_event(service, stub_calendar_gateway, client, pc, hours):
    reservation = service.create(_command(client, pc, *hours(0, 2)))
    service.delete(reservation.id)
    assert stub_calendar_gateway.deleted == ["evt-1"]
    assert Reservation.select().count() == 0


def test_disabled_calendar_is_not_called(stub_calendar_gateway, calendar_settings, client, pc, hours):
    calendar_settings.calendar_enabled = False
    service = ReservationAppService(
        sync=CalendarSyncService(settings=calendar_settings, gateway=stub_calendar_gateway)
    )
    reservation = service.create(_command(client, pc, *hours(0, 2)))
    service.delete(reservation.id)
    assert reservation.external_event_id is None
    assert stub_calendar_gateway.inserted == []
    assert stub_calendar_gateway.deleted == []
