from decimal import Decimal

import pytest

from core.errors import ConflictError, NotFoundError, ValidationError
from services import rank_service
from services.rank_service import (
    add_rank,
    delete_rank,
    get_all_ranks,
    get_discount_percent,
    get_rank_info,
    update_rank,
)


@pytest.mark.parametrize(
    "points, current, following",
    [
        (0, "Newcomer", "Bronze"),
        (99, "Newcomer", "Bronze"),
        (100, "Bronze", "Silver"),
        (450, "Silver", "Gold"),
        (600, "Gold", None),
        (10_000, "Gold", None),
    ],
)
def test_rank_lookup(rank_ladder, points, current, following):
    info = get_rank_info(points)
    assert info.current_rank.name == current
    assert (info.next_rank.name if info.next_rank else None) == following


def test_points_to_next_rank(rank_ladder):
    info = get_rank_info(250)
    assert info.points_to_next(250) == 50
    assert get_rank_info(700).points_to_next(700) is None


def test_discount_follows_rank(rank_ladder):
    assert get_discount_percent(50) == Decimal("0.00")
    assert get_discount_percent(320) == Decimal("5.00")


def test_no_qualifying_rank_means_no_discount():
    add_rank("Silver", 300, 5)
    info = get_rank_info(10)
    assert info.current_rank is None
    assert info.next_rank.name == "Silver"
    assert info.discount_percent == Decimal("0.00")


def test_empty_ladder():
    info = get_rank_info(100)
    assert info.current_rank is None
    assert info.next_rank is None
    assert get_discount_percent(100) == Decimal("0.00")


def test_ranks_ordered_by_threshold():
    add_rank("Gold", 600, 8)
    add_rank("Newcomer", 0, 0)
    add_rank("Silver", 300, 5)
    assert [r.min_points for r in get_all_ranks()] == [0, 300, 600]


def test_duplicate_threshold_rejected(rank_ladder):
    with pytest.raises(ConflictError):
        add_rank("Copper", 100, 1)
    with pytest.raises(ConflictError):
        update_rank(rank_ladder[2].id, name="Silver", min_points=600, discount_percent=5)


@pytest.mark.parametrize("discount", [-1, 101, "abc"])
def test_discount_must_be_percentage(discount):
    with pytest.raises(ValidationError):
        add_rank("Broken", 10, discount)


def test_update_and_delete_rank(rank_ladder):
    gold = rank_ladder[3]
    updated = update_rank(
        gold.id, name="Gold", min_points=650, discount_percent="9.5", color="#ffd700"
    )
    assert updated.min_points == 650
    assert updated.discount_percent == Decimal("9.50")
    assert get_rank_info(620).current_rank.name == "Silver"

    delete_rank(gold.id)
    with pytest.raises(NotFoundError):
        rank_service.get_rank_by_id(gold.id)
    assert get_rank_info(700).current_rank.name == "Silver"
