from fastapi import APIRouter

from .alerts import router as alerts_router
from .auth import router as auth_router
from .categories import router as categories_router
from .clients import router as clients_router
from .dashboard import router as dashboard_router
from .payments import router as payments_router
from .pcs import router as pcs_router
from .products import router as products_router
from .ranks import router as ranks_router
from .reservations import router as reservations_router
from .sales import router as sales_router
from .transactions import router as transactions_router
from .users import router as users_router

router = APIRouter()
for sub_router in (
    auth_router,
    users_router,
    clients_router,
    categories_router,
    products_router,
    transactions_router,
    payments_router,
    sales_router,
    alerts_router,
    ranks_router,
    pcs_router,
    reservations_router,
    dashboard_router,
):
    router.include_router(sub_router)


@router.get("/status")
def status():
    return {"status": "ok"}
