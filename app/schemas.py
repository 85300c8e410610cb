from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# ──────────────────────────── Пользователи ─────────────────────────────


class LoginRequest(BaseModel):
    username: str
    password: str


class UserCreate(BaseModel):
    username: str
    password: str
    full_name: str
    role: str = "staff"


class UserUpdate(BaseModel):
    username: str
    full_name: str
    role: str
    password: str | None = None


class UserRead(ORMModel):
    id: int
    username: str
    full_name: str
    role: str
    created_at: datetime


# ──────────────────────────── Клиенты ─────────────────────────────


class ClientBase(BaseModel):
    name: str | None = None
    phone: str | None = None
    email: str | None = None
    notes: str | None = None


class ClientCreate(ClientBase):
    name: str


class ClientUpdate(ClientBase):
    pass


class ClientRef(ORMModel):
    id: int
    name: str


class ClientRead(ClientBase, ORMModel):
    id: int
    name: str
    total_points: int
    created_at: datetime
    updated_at: datetime


class ClientWithBalance(ClientRead):
    balance: Decimal


class PointsAward(BaseModel):
    points: int


# ──────────────────────────── Ранги ─────────────────────────────


class RankIn(BaseModel):
    name: str
    min_points: int
    discount_percent: Decimal = Decimal(0)
    color: str | None = None
    sort_order: int = 0


class RankRead(ORMModel):
    id: int
    name: str
    min_points: int
    discount_percent: Decimal
    color: str
    sort_order: int


class RankLookup(BaseModel):
    total_points: int
    current_rank: RankRead | None = None
    next_rank: RankRead | None = None
    discount_percent: Decimal
    points_to_next_rank: int | None = None


class ClientSummaryRead(BaseModel):
    client: ClientRead
    balance: Decimal
    current_rank: RankRead | None = None
    next_rank: RankRead | None = None
    discount_percent: Decimal
    points_to_next_rank: int | None = None


# ──────────────────────────── Каталог ─────────────────────────────


class CategoryIn(BaseModel):
    name: str
    description: str | None = None


class CategoryRead(ORMModel):
    id: int
    name: str
    description: str | None = None


class ProductIn(BaseModel):
    name: str
    category_id: int
    price: Decimal
    description: str | None = None
    ghost_points: int = 0


class ProductRead(ORMModel):
    id: int
    name: str
    category_id: int
    price: Decimal
    description: str | None = None
    ghost_points: int


# ──────────────────────────── Леджер ─────────────────────────────


class ChargeCreate(BaseModel):
    client_id: int
    product_id: int
    quantity: int
    created_by: int
    unit_price: Decimal | None = None


class TransactionRead(ORMModel):
    id: int
    client_id: int
    product_id: int
    quantity: int
    unit_price: Decimal
    total: Decimal
    created_by_id: int
    created_at: datetime


class PaymentCreate(BaseModel):
    client_id: int
    amount: Decimal
    created_by: int
    method: str = "cash"
    notes: str | None = None
    remind_at: datetime | None = None


class PaymentRead(ORMModel):
    id: int
    client_id: int
    amount: Decimal
    method: str
    notes: str | None = None
    created_by_id: int
    created_at: datetime


class PaymentRecorded(BaseModel):
    payment_id: int
    balance: Decimal
    alert_id: int | None = None


class CheckoutLineIn(BaseModel):
    product_id: int
    quantity: int
    unit_price: Decimal | None = None


class CheckoutRequest(BaseModel):
    client_id: int
    created_by: int
    lines: list[CheckoutLineIn] = Field(default_factory=list)
    apply_rank_discount: bool = True


class CheckoutRead(BaseModel):
    transaction_ids: list[int]
    total: Decimal
    discount_percent: Decimal
    points_awarded: int
    total_points: int
    balance: Decimal


# ──────────────────────────── Напоминания ─────────────────────────────


class AlertCreate(BaseModel):
    client_id: int
    due_at: datetime
    amount: Decimal
    notes: str | None = None
    created_by: int | None = None


class AlertRead(ORMModel):
    id: int
    client: ClientRef
    due_at: datetime
    amount: Decimal
    notes: str | None = None
    is_notified: bool
    created_at: datetime


# ──────────────────────────── ПК и брони ─────────────────────────────


class PCIn(BaseModel):
    name: str
    description: str | None = None
    is_active: bool = True


class PCRef(ORMModel):
    id: int
    name: str


class PCRead(ORMModel):
    id: int
    name: str
    description: str | None = None
    is_active: bool


class ReservationIn(BaseModel):
    client_id: int
    pc_id: int
    start_time: datetime
    end_time: datetime
    notes: str | None = None
    created_by: int | None = None


class ReservationRead(ORMModel):
    id: int
    client: ClientRef
    pc: PCRef
    start_time: datetime
    end_time: datetime
    notes: str | None = None
    external_event_id: str | None = None
    created_by_id: int | None = None
    created_at: datetime
    updated_at: datetime


class ConflictCheck(BaseModel):
    pc_id: int
    start_time: datetime
    end_time: datetime
    exclude_reservation_id: int | None = None
