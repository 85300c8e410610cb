from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ReservationCommand:
    client_id: int
    pc_id: int
    start: datetime | str
    end: datetime | str
    notes: str | None = None
    created_by: int | None = None
