"""HTTP-диспетчер: каждый запрос проходит через сервисы и конверт ответа."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from peewee import DatabaseError
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import get_settings
from core.errors import LoungeError
from database.init import init_from_env

from .api.router import router as api_router
from .envelope import fail, status_for

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    init_from_env(get_settings().database_url)
    yield


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(LoungeError)
    async def lounge_error_handler(_request: Request, exc: LoungeError):
        return JSONResponse(status_code=status_for(exc), content=fail(exc.kind, str(exc)))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(_request: Request, exc: RequestValidationError):
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        return JSONResponse(status_code=400, content=fail("validation", details))

    @app.exception_handler(DatabaseError)
    async def database_error_handler(_request: Request, exc: DatabaseError):
        logger.exception("Ошибка хранилища при обработке запроса")
        return JSONResponse(
            status_code=503, content=fail("store", f"Ошибка хранилища: {exc}")
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(_request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code, content=fail("http", str(exc.detail))
        )


def create_app() -> FastAPI:
    app = FastAPI(title="Lounge Desk API", lifespan=lifespan)
    _register_error_handlers(app)
    app.include_router(api_router, prefix="/api")

    @app.get("/ping")
    def ping():
        return {"message": "pong"}

    return app


app = create_app()
