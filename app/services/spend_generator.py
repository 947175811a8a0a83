"""
Synthetic spending generators.

Pure functions driven by an injected random.Random, used for a new
account's seeded history and for the year-long test simulation.
"""

from typing import Any, Dict, List, Optional
from datetime import datetime, timedelta, timezone
import random

MIN_AMOUNT = 10
MAX_AMOUNT = 300
HIGH_MIN = 200
HIGH_MAX = 300
RAMP_BASE = 200
RAMP_STEP = 50
RAMP_MONTHS = 3
BOOST_BEFORE_MONTH = 4
HIGH_SPREAD = 500

HISTORY_DESCRIPTIONS = {
    "rent": ["Rent Payment", "Monthly Rent", "Housing Payment"],
    "utilities": ["Electricity Bill", "Gas & Water Bill", "Energy Bill", "Heating"],
    "bills": ["Internet & Subscriptions", "Mobile Phone", "Gym Membership", "Streaming Services", "Shopping"],
    "payment": ["Groceries", "Food Delivery", "Transport", "Entertainment"],
}

SIMULATION_DESCRIPTIONS = {
    "rent": ["Rent Payment", "Monthly Rent", "Housing Payment"],
    "utilities": ["Electricity Bill", "Gas & Water Bill", "Energy Bill", "Heating"],
    "bills": ["Internet & Subscriptions", "Mobile Phone", "Gym Membership", "Streaming Services"],
    "payment": ["Groceries", "Food Delivery", "Transport", "Entertainment", "Shopping", "Takeaway", "Coffee & Snacks"],
}

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

def clamp(amount: int, low: int = MIN_AMOUNT, high: int = MAX_AMOUNT) -> int:
    return max(low, min(high, amount))

def generate_history(
    count: int = 5,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None
) -> List[Dict[str, Any]]:
    """Random past payments within the last 30 days, newest first"""
    rng = rng or random.Random()
    now = now or datetime.now(timezone.utc)
    items = []
    for _ in range(count):
        tx_type = rng.choice(list(HISTORY_DESCRIPTIONS))
        items.append({
            "amount": rng.randint(20, 219),
            "description": rng.choice(HISTORY_DESCRIPTIONS[tx_type]),
            "type": tx_type,
            "date": now - timedelta(days=rng.randint(0, 29)),
        })
    items.sort(key=lambda item: item["date"], reverse=True)
    return items

def monthly_spending_target(
    month_index: int,
    regular_threshold: int,
    emergency_threshold: int,
    rng: Optional[random.Random] = None
) -> int:
    """
    Target total spend for a simulated month.

    Ramps 200, 250, 300, then hits the regular roast threshold in month 3,
    the emergency threshold in month 4, and stays in
    [emergency, emergency + 500) afterwards.
    """
    if month_index < RAMP_MONTHS:
        return RAMP_BASE + month_index * RAMP_STEP
    if month_index == RAMP_MONTHS:
        return regular_threshold
    if month_index == RAMP_MONTHS + 1:
        return emergency_threshold
    rng = rng or random.Random()
    return emergency_threshold + rng.randrange(HIGH_SPREAD)

def _scale(amounts: List[int], budget: int) -> List[int]:
    factor = budget / sum(amounts)
    return [clamp(int(amount * factor)) for amount in amounts]

def generate_month_amounts(
    budget: int,
    month_index: int,
    count: int = 9,
    rng: Optional[random.Random] = None
) -> List[int]:
    """
    Non-rent amounts for one month, biased towards small values.

    2-3 values land in [200, 300]; the rest come from a squared uniform
    draw over [10, 300). The set is then scaled down to fit the budget, or
    boosted in early months when it falls short. Every value ends in [10, 300].
    """
    rng = rng or random.Random()
    amounts: List[int] = []

    high_count = min(count, rng.randint(2, 3))
    high_values: List[int] = []
    for _ in range(high_count):
        attempts = 0
        while True:
            value = rng.randint(HIGH_MIN, HIGH_MAX)
            attempts += 1
            if value not in high_values or attempts >= 20:
                break
        high_values.append(value)
        amounts.append(value)

    remaining = count - high_count
    used = set(amounts)
    for i in range(remaining):
        last = i == remaining - 1
        attempts = 0
        while True:
            r = rng.random()
            amount = int(r * r * 290) + MIN_AMOUNT
            attempts += 1
            if amount not in used or attempts >= 30 or last:
                break
        if amount in used and not last:
            amount = clamp(amount + rng.randint(-10, 9))
        amounts.append(amount)
        used.add(amount)

    rng.shuffle(amounts)
    total = sum(amounts)
    adjusted = list(amounts)

    if adjusted and total > budget:
        adjusted = _scale(amounts, budget)
        # nudge near-duplicates apart
        for i in range(len(adjusted)):
            for j in range(i + 1, len(adjusted)):
                if abs(adjusted[i] - adjusted[j]) < 5 and adjusted[i] > MIN_AMOUNT:
                    adjusted[i] = max(MIN_AMOUNT, adjusted[i] - rng.randint(0, 4))
                    adjusted[j] = min(MAX_AMOUNT, adjusted[j] + rng.randint(0, 4))
    elif total < budget and month_index < BOOST_BEFORE_MONTH and adjusted:
        slots = min(3, len(adjusted))
        boost = (budget - total) // slots
        for idx in rng.sample(range(len(adjusted)), slots):
            adjusted[idx] = min(MAX_AMOUNT, adjusted[idx] + boost)

    if adjusted and sum(adjusted) > budget:
        adjusted = _scale(adjusted, budget)

    return [clamp(amount) for amount in adjusted]

def pick_transaction_type(rng: random.Random) -> str:
    """0.5 payment, 0.3 bills, 0.2 utilities"""
    roll = rng.random()
    if roll < 0.5:
        return "payment"
    if roll < 0.8:
        return "bills"
    return "utilities"

def month_label(year: int, month_index: int) -> str:
    return f"{MONTH_NAMES[month_index % 12]} {year}"

def generate_month(
    year: int,
    month_index: int,
    target: int,
    rent_amount: int,
    rent_day: int = 15,
    count: int = 10,
    rng: Optional[random.Random] = None
) -> List[Dict[str, Any]]:
    """Rent plus count-1 other payments for one calendar month"""
    rng = rng or random.Random()
    month = month_index % 12 + 1
    items = [{
        "amount": rent_amount,
        "description": "Rent Payment",
        "type": "rent",
        "date": datetime(year, month, rent_day, tzinfo=timezone.utc),
        "suffix": "rent",
    }]

    amounts = generate_month_amounts(target - rent_amount, month_index, count - 1, rng)
    for i, amount in enumerate(amounts):
        tx_type = pick_transaction_type(rng)
        items.append({
            "amount": amount,
            "description": rng.choice(SIMULATION_DESCRIPTIONS[tx_type]),
            "type": tx_type,
            "date": datetime(year, month, rng.randint(1, 28), tzinfo=timezone.utc),
            "suffix": str(i),
        })
    return items
