from fastapi import APIRouter

from services import alert_service

from ..envelope import ok
from ..schemas import AlertCreate, AlertRead

router = APIRouter(prefix="/alerts", tags=["alerts"])


@router.get("/")
def read_alerts(overdue: bool = False):
    query = (
        alert_service.get_overdue_alerts()
        if overdue
        else alert_service.get_all_alerts()
    )
    return ok([AlertRead.model_validate(a) for a in query])


@router.post("/", status_code=201)
def add_alert(alert_in: AlertCreate):
    alert = alert_service.add_alert(**alert_in.model_dump())
    return ok(AlertRead.model_validate(alert_service.get_alert_by_id(alert.id)))


@router.post("/{alert_id}/notified")
def mark_notified(alert_id: int):
    alert = alert_service.mark_alert_notified(alert_id)
    return ok(AlertRead.model_validate(alert))


@router.delete("/{alert_id}")
def remove_alert(alert_id: int):
    alert_service.delete_alert(alert_id)
    return ok({"id": alert_id})
