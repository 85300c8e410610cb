from fastapi import APIRouter

from services.dashboard_service import get_dashboard_stats

from ..envelope import ok

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/")
def read_dashboard():
    return ok(get_dashboard_stats())
