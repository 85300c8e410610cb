from fastapi import APIRouter
from fastapi.responses import JSONResponse

from services import user_service

from ..envelope import fail, ok
from ..schemas import LoginRequest, UserRead

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
def login(payload: LoginRequest):
    user = user_service.authenticate(payload.username, payload.password)
    if user is None:
        return JSONResponse(
            status_code=401,
            content=fail("unauthorized", "Неверный логин или пароль"),
        )
    return ok(UserRead.model_validate(user))
