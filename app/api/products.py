from fastapi import APIRouter

from services import product_service

from ..envelope import ok
from ..schemas import ProductIn, ProductRead

router = APIRouter(prefix="/products", tags=["products"])


@router.get("/")
def read_products(search: str = "", category_id: int | None = None):
    query = product_service.get_products(search, category_id)
    return ok([ProductRead.model_validate(p) for p in query])


@router.get("/{product_id}")
def read_product(product_id: int):
    return ok(ProductRead.model_validate(product_service.get_product_by_id(product_id)))


@router.post("/", status_code=201)
def add_product(product_in: ProductIn):
    product = product_service.add_product(**product_in.model_dump())
    return ok(ProductRead.model_validate(product))


@router.put("/{product_id}")
def edit_product(product_id: int, product_in: ProductIn):
    product = product_service.update_product(product_id, **product_in.model_dump())
    return ok(ProductRead.model_validate(product))


@router.delete("/{product_id}")
def remove_product(product_id: int):
    product_service.delete_product(product_id)
    return ok({"id": product_id})
