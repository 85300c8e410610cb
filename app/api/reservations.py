from datetime import datetime

from fastapi import APIRouter, Depends

from core.app_context import AppContext
from services import reservation_service
from services.reservations import ReservationCommand
from services.validators import validate_interval

from ..dependencies import get_context
from ..envelope import ok
from ..schemas import ConflictCheck, ReservationIn, ReservationRead

router = APIRouter(prefix="/reservations", tags=["reservations"])


def _command(reservation_in: ReservationIn) -> ReservationCommand:
    return ReservationCommand(
        client_id=reservation_in.client_id,
        pc_id=reservation_in.pc_id,
        start=reservation_in.start_time,
        end=reservation_in.end_time,
        notes=reservation_in.notes,
        created_by=reservation_in.created_by,
    )


@router.get("/")
def read_reservations(start: datetime | None = None, end: datetime | None = None):
    if start is not None or end is not None:
        query = reservation_service.list_by_range(start, end)
    else:
        query = reservation_service.get_all_reservations()
    return ok([ReservationRead.model_validate(r) for r in query])


@router.get("/upcoming")
def read_upcoming(limit: int = 10):
    query = reservation_service.list_upcoming(limit)
    return ok([ReservationRead.model_validate(r) for r in query])


@router.post("/check")
def check_conflict(check: ConflictCheck):
    start, end = validate_interval(check.start_time, check.end_time)
    conflict = reservation_service.check_conflict(
        check.pc_id, start, end, exclude_reservation_id=check.exclude_reservation_id
    )
    return ok({"conflict": conflict})


@router.get("/{reservation_id}")
def read_reservation(reservation_id: int):
    reservation = reservation_service.get_reservation(reservation_id)
    return ok(ReservationRead.model_validate(reservation))


@router.post("/", status_code=201)
def add_reservation(
    reservation_in: ReservationIn, context: AppContext = Depends(get_context)
):
    reservation = context.reservation_app_service.create(_command(reservation_in))
    return ok(ReservationRead.model_validate(reservation))


@router.put("/{reservation_id}")
def edit_reservation(
    reservation_id: int,
    reservation_in: ReservationIn,
    context: AppContext = Depends(get_context),
):
    reservation = context.reservation_app_service.update(
        reservation_id, _command(reservation_in)
    )
    return ok(ReservationRead.model_validate(reservation))


@router.delete("/{reservation_id}")
def remove_reservation(
    reservation_id: int, context: AppContext = Depends(get_context)
):
    context.reservation_app_service.delete(reservation_id)
    return ok({"id": reservation_id})
