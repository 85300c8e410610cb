"""Единый конверт ответа ``{success, data}`` / ``{success, error}``."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel

from core.errors import LoungeError

STATUS_BY_KIND = {
    "validation": 400,
    "not_found": 404,
    "conflict": 409,
    "store": 503,
}


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, dict):
        return {key: _dump(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_dump(item) for item in value]
    return jsonable_encoder(value)


def ok(data: Any = None) -> dict:
    return {"success": True, "data": _dump(data)}


def fail(kind: str, message: str) -> dict:
    return {"success": False, "error": {"kind": kind, "message": message}}


def status_for(error: LoungeError) -> int:
    return STATUS_BY_KIND.get(error.kind, 500)
