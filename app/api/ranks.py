from fastapi import APIRouter

from services import rank_service

from ..envelope import ok
from ..schemas import RankIn, RankLookup, RankRead

router = APIRouter(prefix="/ranks", tags=["ranks"])


@router.get("/")
def read_ranks():
    return ok([RankRead.model_validate(r) for r in rank_service.get_all_ranks()])


@router.get("/lookup")
def lookup_rank(points: int = 0):
    info = rank_service.get_rank_info(points)
    return ok(
        RankLookup(
            total_points=points,
            current_rank=RankRead.model_validate(info.current_rank) if info.current_rank else None,
            next_rank=RankRead.model_validate(info.next_rank) if info.next_rank else None,
            discount_percent=info.discount_percent,
            points_to_next_rank=info.points_to_next(points),
        )
    )


@router.post("/", status_code=201)
def add_rank(rank_in: RankIn):
    rank = rank_service.add_rank(**rank_in.model_dump())
    return ok(RankRead.model_validate(rank))


@router.put("/{rank_id}")
def edit_rank(rank_id: int, rank_in: RankIn):
    rank = rank_service.update_rank(rank_id, **rank_in.model_dump())
    return ok(RankRead.model_validate(rank))


@router.delete("/{rank_id}")
def remove_rank(rank_id: int):
    rank_service.delete_rank(rank_id)
    return ok({"id": rank_id})
