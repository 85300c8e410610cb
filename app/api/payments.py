from fastapi import APIRouter, Depends

from core.app_context import AppContext
from services import ledger_service
from services.sales import PaymentCommand

from ..dependencies import get_context
from ..envelope import ok
from ..schemas import PaymentCreate, PaymentRead, PaymentRecorded

router = APIRouter(prefix="/payments", tags=["ledger"])


@router.get("/")
def read_payments(limit: int = 100):
    query = ledger_service.get_recent_payments(limit)
    return ok([PaymentRead.model_validate(p) for p in query])


@router.post("/", status_code=201)
def record_payment(
    payment_in: PaymentCreate, context: AppContext = Depends(get_context)
):
    result = context.sale_app_service.record_payment(
        PaymentCommand(**payment_in.model_dump())
    )
    return ok(PaymentRecorded(**vars(result)))


@router.delete("/{payment_id}")
def remove_payment(payment_id: int):
    ledger_service.delete_payment(payment_id)
    return ok({"id": payment_id})
