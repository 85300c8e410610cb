from datetime import datetime
from enum import Enum

from peewee import (
    BooleanField,
    CharField,
    DateTimeField,
    DecimalField,
    ForeignKeyField,
    IntegerField,
    Model,
    TextField,
)

from database.db import db


def _money_field(**kwargs) -> DecimalField:
    return DecimalField(max_digits=12, decimal_places=2, auto_round=True, **kwargs)


class BaseModel(Model):
    class Meta:
        database = db


class TimestampedModel(BaseModel):
    """База с отметками создания и изменения."""

    created_at = DateTimeField(default=datetime.now, index=True)
    updated_at = DateTimeField(default=datetime.now)

    def touch(self) -> None:
        self.updated_at = datetime.now()


class UserRole(str, Enum):
    ADMIN = "admin"
    STAFF = "staff"


class User(TimestampedModel):
    username = CharField(unique=True)
    password_hash = CharField()
    full_name = CharField()
    role = CharField(default=UserRole.STAFF.value)

    def __str__(self) -> str:
        return self.full_name


class Client(TimestampedModel):
    name = CharField(index=True)
    phone = CharField(null=True)
    email = CharField(null=True)
    notes = TextField(null=True)
    total_points = IntegerField(default=0)

    def __str__(self) -> str:
        return self.name


class Category(BaseModel):
    name = CharField(unique=True)
    description = TextField(null=True)
    created_at = DateTimeField(default=datetime.now)

    def __str__(self) -> str:
        return self.name


class Product(TimestampedModel):
    name = CharField(index=True)
    category = ForeignKeyField(Category, backref="products")
    price = _money_field()
    description = TextField(null=True)
    ghost_points = IntegerField(default=0)

    def __str__(self) -> str:
        return self.name


class Transaction(BaseModel):
    """Начисление клиенту; цена фиксируется на момент продажи."""

    client = ForeignKeyField(Client, backref="transactions")
    product = ForeignKeyField(Product, backref="transactions")
    quantity = IntegerField()
    unit_price = _money_field()
    total = _money_field()
    created_by = ForeignKeyField(User, backref="transactions")
    created_at = DateTimeField(default=datetime.now, index=True)


class Payment(BaseModel):
    client = ForeignKeyField(Client, backref="payments")
    amount = _money_field()
    method = CharField(default="cash")
    notes = TextField(null=True)
    created_by = ForeignKeyField(User, backref="payments")
    created_at = DateTimeField(default=datetime.now, index=True)


class PaymentAlert(BaseModel):
    client = ForeignKeyField(Client, backref="alerts", on_delete="CASCADE")
    due_at = DateTimeField(index=True)
    amount = _money_field()
    notes = TextField(null=True)
    is_notified = BooleanField(default=False)
    created_by = ForeignKeyField(
        User, backref="alerts", null=True, on_delete="SET NULL"
    )
    created_at = DateTimeField(default=datetime.now)


class Rank(BaseModel):
    name = CharField()
    min_points = IntegerField(unique=True)
    discount_percent = _money_field(default=0)
    color = CharField(default="#808080")
    sort_order = IntegerField(default=0)
    created_at = DateTimeField(default=datetime.now)

    def __str__(self) -> str:
        return self.name


class PC(BaseModel):
    name = CharField(unique=True)
    description = TextField(null=True)
    is_active = BooleanField(default=True)
    created_at = DateTimeField(default=datetime.now)

    class Meta:
        table_name = "pc"

    def __str__(self) -> str:
        return self.name


class Reservation(TimestampedModel):
    client = ForeignKeyField(Client, backref="reservations", on_delete="CASCADE")
    pc = ForeignKeyField(PC, backref="reservations")
    start_time = DateTimeField(index=True)
    end_time = DateTimeField(index=True)
    notes = TextField(null=True)
    external_event_id = CharField(null=True)
    created_by = ForeignKeyField(
        User, backref="reservations", null=True, on_delete="SET NULL"
    )

    def __str__(self) -> str:
        client = self.client.name if self.client_id else ""
        pc = self.pc.name if self.pc_id else ""
        return f"{client} - {pc}"
