from datetime import datetime, timedelta
from decimal import Decimal
from types import SimpleNamespace

import pytest

from services import (
    category_service,
    client_service,
    pc_service,
    product_service,
    rank_service,
    user_service,
)


@pytest.fixture
def user():
    return user_service.add_user("cashier", "secret", "Кассир Клуба")


@pytest.fixture
def client():
    return client_service.add_client(name="Иван Петров", phone="+7 999 123-45-67")


@pytest.fixture
def other_client():
    return client_service.add_client(name="Анна Смирнова")


@pytest.fixture
def category():
    return category_service.add_category("Snacks")


@pytest.fixture
def product(category):
    return product_service.add_product(
        "Energy Drink", category.id, Decimal("5.00"), ghost_points=10
    )


@pytest.fixture
def pc():
    return pc_service.add_pc("PC-1", "Standard Gaming PC")


@pytest.fixture
def other_pc():
    return pc_service.add_pc("VIP-1", "VIP Gaming Station")


@pytest.fixture
def rank_ladder():
    return [
        rank_service.add_rank("Newcomer", 0, 0),
        rank_service.add_rank("Bronze", 100, 2),
        rank_service.add_rank("Silver", 300, 5),
        rank_service.add_rank("Gold", 600, 8),
    ]


@pytest.fixture
def base_time():
    return datetime(2030, 5, 10, 12, 0)


@pytest.fixture
def hours(base_time):
    def factory(start: float, end: float):
        return (
            base_time + timedelta(hours=start),
            base_time + timedelta(hours=end),
        )

    return factory


class StubCalendarGateway:
    def __init__(self):
        self.inserted: list[dict] = []
        self.updated: list[tuple[str, dict]] = []
        self.deleted: list[str] = []
        self.fail = False
        self._counter = 0

    def insert_event(self, body: dict) -> str:
        if self.fail:
            raise RuntimeError("calendar unavailable")
        self._counter += 1
        self.inserted.append(body)
        return f"evt-{self._counter}"

    def update_event(self, event_id: str, body: dict) -> None:
        if self.fail:
            raise RuntimeError("calendar unavailable")
        self.updated.append((event_id, body))

    def delete_event(self, event_id: str) -> None:
        if self.fail:
            raise RuntimeError("calendar unavailable")
        self.deleted.append(event_id)


@pytest.fixture
def stub_calendar_gateway():
    return StubCalendarGateway()


@pytest.fixture
def calendar_settings():
    return SimpleNamespace(calendar_enabled=True, calendar_timezone="Europe/Moscow")
