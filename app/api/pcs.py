from fastapi import APIRouter

from services import pc_service

from ..envelope import ok
from ..schemas import PCIn, PCRead

router = APIRouter(prefix="/pcs", tags=["pcs"])


@router.get("/")
def read_pcs(active_only: bool = False):
    query = pc_service.get_active_pcs() if active_only else pc_service.get_all_pcs()
    return ok([PCRead.model_validate(pc) for pc in query])


@router.post("/", status_code=201)
def add_pc(pc_in: PCIn):
    pc = pc_service.add_pc(pc_in.name, pc_in.description)
    if not pc_in.is_active:
        pc = pc_service.update_pc(
            pc.id, name=pc.name, description=pc.description, is_active=False
        )
    return ok(PCRead.model_validate(pc))


@router.put("/{pc_id}")
def edit_pc(pc_id: int, pc_in: PCIn):
    pc = pc_service.update_pc(pc_id, **pc_in.model_dump())
    return ok(PCRead.model_validate(pc))


@router.delete("/{pc_id}")
def remove_pc(pc_id: int):
    pc_service.delete_pc(pc_id)
    return ok({"id": pc_id})
