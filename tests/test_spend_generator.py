import random
from datetime import datetime, timedelta, timezone

import pytest

from app.services.spend_generator import (
    generate_history,
    generate_month,
    generate_month_amounts,
    month_label,
    monthly_spending_target,
    pick_transaction_type,
)


def test_spending_target_schedule():
    rng = random.Random(0)
    assert [monthly_spending_target(i, 1300, 1500, rng) for i in range(5)] == [200, 250, 300, 1300, 1500]
    for month in range(5, 12):
        assert 1500 <= monthly_spending_target(month, 1300, 1500, rng) < 2000


@pytest.mark.parametrize("seed", range(20))
@pytest.mark.parametrize("month_index,budget", [(0, -250), (2, -150), (3, 850), (4, 1050), (8, 1400)])
def test_month_amounts_bounds(seed, month_index, budget):
    amounts = generate_month_amounts(budget, month_index, 9, random.Random(seed))
    assert len(amounts) == 9
    assert all(10 <= a <= 300 for a in amounts)


@pytest.mark.parametrize("seed", range(20))
def test_month_amounts_scaled_near_budget(seed):
    amounts = generate_month_amounts(850, 3, 9, random.Random(seed))
    # Clamping small values back up to 10 can add a little on top
    assert sum(amounts) <= 850 + 9 * 10


def test_low_budget_floors_at_minimum():
    amounts = generate_month_amounts(-250, 0, 9, random.Random(4))
    assert amounts == [10] * 9


def test_generate_month_shape():
    items = generate_month(2025, 1, 1300, 450, rent_day=15, count=10, rng=random.Random(9))

    assert len(items) == 10
    rent = items[0]
    assert rent["type"] == "rent"
    assert rent["amount"] == 450
    assert rent["date"] == datetime(2025, 2, 15, tzinfo=timezone.utc)

    for item in items[1:]:
        assert item["type"] in {"payment", "bills", "utilities"}
        assert item["date"].year == 2025 and item["date"].month == 2
        assert 1 <= item["date"].day <= 28

    suffixes = [item["suffix"] for item in items]
    assert len(set(suffixes)) == 10


def test_transaction_type_weights():
    rng = random.Random(123)
    picks = [pick_transaction_type(rng) for _ in range(10000)]
    assert 0.45 < picks.count("payment") / 10000 < 0.55
    assert 0.25 < picks.count("bills") / 10000 < 0.35
    assert 0.15 < picks.count("utilities") / 10000 < 0.25


def test_month_label():
    assert month_label(2025, 0) == "January 2025"
    assert month_label(2025, 11) == "December 2025"


def test_generate_history():
    now = datetime(2025, 5, 20, tzinfo=timezone.utc)
    items = generate_history(5, random.Random(2), now=now)

    assert len(items) == 5
    assert [i["date"] for i in items] == sorted((i["date"] for i in items), reverse=True)
    for item in items:
        assert 20 <= item["amount"] <= 219
        assert now - timedelta(days=29) <= item["date"] <= now
