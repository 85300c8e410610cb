from fastapi import APIRouter

from services import category_service

from ..envelope import ok
from ..schemas import CategoryIn, CategoryRead

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("/")
def read_categories():
    return ok([CategoryRead.model_validate(c) for c in category_service.get_all_categories()])


@router.post("/", status_code=201)
def add_category(category_in: CategoryIn):
    category = category_service.add_category(**category_in.model_dump())
    return ok(CategoryRead.model_validate(category))


@router.put("/{category_id}")
def edit_category(category_id: int, category_in: CategoryIn):
    category = category_service.update_category(category_id, **category_in.model_dump())
    return ok(CategoryRead.model_validate(category))


@router.delete("/{category_id}")
def remove_category(category_id: int):
    category_service.delete_category(category_id)
    return ok({"id": category_id})
