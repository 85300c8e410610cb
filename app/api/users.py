from fastapi import APIRouter

from services import user_service

from ..envelope import ok
from ..schemas import UserCreate, UserRead, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/")
def read_users():
    return ok([UserRead.model_validate(u) for u in user_service.get_all_users()])


@router.get("/{user_id}")
def read_user(user_id: int):
    return ok(UserRead.model_validate(user_service.get_user_by_id(user_id)))


@router.post("/", status_code=201)
def add_user(user_in: UserCreate):
    user = user_service.add_user(**user_in.model_dump())
    return ok(UserRead.model_validate(user))


@router.put("/{user_id}")
def edit_user(user_id: int, user_in: UserUpdate):
    user = user_service.update_user(user_id, **user_in.model_dump())
    return ok(UserRead.model_validate(user))


@router.delete("/{user_id}")
def remove_user(user_id: int):
    user_service.delete_user(user_id)
    return ok({"id": user_id})
