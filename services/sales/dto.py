from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class CartLine:
    product_id: int
    quantity: int
    unit_price: Decimal | None = None


@dataclass(frozen=True)
class CheckoutCommand:
    client_id: int
    created_by: int
    lines: tuple[CartLine, ...]
    apply_rank_discount: bool = True


@dataclass
class CheckoutResult:
    transaction_ids: list[int] = field(default_factory=list)
    total: Decimal = Decimal("0.00")
    discount_percent: Decimal = Decimal("0.00")
    points_awarded: int = 0
    total_points: int = 0
    balance: Decimal = Decimal("0.00")


@dataclass(frozen=True)
class PaymentCommand:
    client_id: int
    amount: Decimal
    created_by: int
    method: str = "cash"
    notes: str | None = None
    remind_at: datetime | str | None = None


@dataclass
class PaymentResult:
    payment_id: int
    balance: Decimal
    alert_id: int | None = None
