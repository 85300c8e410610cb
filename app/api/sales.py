from fastapi import APIRouter, Depends

from core.app_context import AppContext
from services.sales import CartLine, CheckoutCommand

from ..dependencies import get_context
from ..envelope import ok
from ..schemas import CheckoutRead, CheckoutRequest

router = APIRouter(prefix="/sales", tags=["sales"])


@router.post("/checkout", status_code=201)
def checkout(request: CheckoutRequest, context: AppContext = Depends(get_context)):
    command = CheckoutCommand(
        client_id=request.client_id,
        created_by=request.created_by,
        lines=tuple(CartLine(**line.model_dump()) for line in request.lines),
        apply_rank_discount=request.apply_rank_discount,
    )
    result = context.sale_app_service.checkout(command)
    return ok(CheckoutRead(**vars(result)))
