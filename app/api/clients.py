from fastapi import APIRouter

from services import client_service, ledger_service, reservation_service

from ..envelope import ok
from ..schemas import (
    ClientCreate,
    ClientRead,
    ClientSummaryRead,
    ClientUpdate,
    ClientWithBalance,
    PaymentRead,
    PointsAward,
    RankRead,
    ReservationRead,
    TransactionRead,
)

router = APIRouter(prefix="/clients", tags=["clients"])


def _summary(client_id: int) -> ClientSummaryRead:
    summary = client_service.get_client_summary(client_id)
    info = summary.rank_info
    return ClientSummaryRead(
        client=ClientRead.model_validate(summary.client),
        balance=summary.balance,
        current_rank=RankRead.model_validate(info.current_rank) if info.current_rank else None,
        next_rank=RankRead.model_validate(info.next_rank) if info.next_rank else None,
        discount_percent=summary.discount_percent,
        points_to_next_rank=summary.points_to_next_rank,
    )


@router.get("/")
def read_clients(search: str = ""):
    items = [
        ClientWithBalance(**ClientRead.model_validate(c).model_dump(), balance=balance)
        for c, balance in client_service.get_clients(search)
    ]
    return ok(items)


@router.post("/", status_code=201)
def add_client(client_in: ClientCreate):
    client = client_service.add_client(**client_in.model_dump())
    return ok(ClientRead.model_validate(client))


@router.get("/{client_id}")
def read_client(client_id: int):
    return ok(_summary(client_id))


@router.put("/{client_id}")
def edit_client(client_id: int, client_in: ClientUpdate):
    client = client_service.update_client(
        client_id, **client_in.model_dump(exclude_none=True)
    )
    return ok(ClientRead.model_validate(client))


@router.delete("/{client_id}")
def remove_client(client_id: int):
    client_service.delete_client(client_id)
    return ok({"id": client_id})


@router.get("/{client_id}/balance")
def read_balance(client_id: int):
    client_service.get_client_by_id(client_id)
    return ok({"client_id": client_id, "balance": ledger_service.get_balance(client_id)})


@router.post("/{client_id}/points")
def add_points(client_id: int, award: PointsAward):
    total = ledger_service.award_points(client_id, award.points)
    return ok({"client_id": client_id, "total_points": total})


@router.get("/{client_id}/transactions")
def read_client_transactions(client_id: int):
    client_service.get_client_by_id(client_id)
    query = ledger_service.get_client_transactions(client_id)
    return ok([TransactionRead.model_validate(t) for t in query])


@router.get("/{client_id}/payments")
def read_client_payments(client_id: int):
    client_service.get_client_by_id(client_id)
    query = ledger_service.get_client_payments(client_id)
    return ok([PaymentRead.model_validate(p) for p in query])


@router.get("/{client_id}/reservations")
def read_client_reservations(client_id: int):
    client_service.get_client_by_id(client_id)
    query = reservation_service.get_reservations_by_client(client_id)
    return ok([ReservationRead.model_validate(r) for r in query])
