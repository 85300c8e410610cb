from fastapi import APIRouter

from services import ledger_service

from ..envelope import ok
from ..schemas import ChargeCreate, TransactionRead

router = APIRouter(prefix="/transactions", tags=["ledger"])


@router.get("/")
def read_transactions(limit: int = 100):
    query = ledger_service.get_recent_transactions(limit)
    return ok([TransactionRead.model_validate(t) for t in query])


@router.post("/", status_code=201)
def post_charge(charge: ChargeCreate):
    transaction = ledger_service.post_charge(
        charge.client_id,
        charge.product_id,
        charge.quantity,
        charge.created_by,
        unit_price_override=charge.unit_price,
    )
    return ok(TransactionRead.model_validate(transaction))


@router.delete("/{transaction_id}")
def remove_transaction(transaction_id: int):
    ledger_service.delete_transaction(transaction_id)
    return ok({"id": transaction_id})
