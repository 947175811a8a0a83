import random
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.core.exceptions import InsufficientFundsException, InvalidInputException
from app.models import TransactionType
from app.services.ledger import Ledger


def test_new_account_uses_starting_balance(ledger):
    assert ledger.get_balance("user") == Decimal("56.75")
    assert ledger.get_balance("someone-else") == Decimal("0")


def test_seeded_history_is_already_credited():
    ledger = Ledger(starting_balances={"user": Decimal("56.75")}, seed_count=5, rng=random.Random(11))
    account = ledger.open_account("user")

    assert len(account.transactions) == 5
    assert account.balance == Decimal("56.75")
    assert ledger.audit("user")

    dates = [t.date for t in ledger.list_transactions("user")]
    assert dates == sorted(dates, reverse=True)
    for t in account.transactions:
        assert 20 <= t.amount <= 219
        assert t.credits == t.amount * Decimal("0.05")


def test_open_account_is_idempotent():
    ledger = Ledger(rng=random.Random(5))
    first = ledger.open_account("u")
    second = ledger.open_account("u")
    assert first is second
    assert len(second.transactions) == 5


def test_record_transaction_credits_five_percent(ledger):
    tx = ledger.record_transaction("user", 100, "Shopping")

    assert tx.credits == Decimal("5.00")
    assert tx.type == TransactionType.PAYMENT
    assert tx.merchant == "Shopping"
    assert tx.id.startswith("user-")
    assert ledger.get_balance("user") == Decimal("61.75")
    assert ledger.audit("user")


def test_record_transaction_keeps_explicit_fields(ledger):
    when = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
    tx = ledger.record_transaction("user", "12.50", "Bus pass", type="bills", date=when, merchant="Stagecoach")
    assert tx.amount == Decimal("12.50")
    assert tx.type == TransactionType.BILLS
    assert tx.date == when
    assert tx.merchant == "Stagecoach"


@pytest.mark.parametrize("amount,description,tx_type", [
    (None, "Shopping", "payment"),
    (0, "Shopping", "payment"),
    (-5, "Shopping", "payment"),
    ("abc", "Shopping", "payment"),
    (10, "", "payment"),
    (10, "   ", "payment"),
    (10, "Shopping", "groceries"),
])
def test_record_transaction_rejects_bad_input(ledger, amount, description, tx_type):
    with pytest.raises(InvalidInputException):
        ledger.record_transaction("user", amount, description, type=tx_type)
    assert ledger.get_balance("user") == Decimal("56.75")
    assert ledger.list_transactions("user") == []


def test_list_transactions_newest_first(ledger):
    base = datetime(2025, 1, 1, tzinfo=timezone.utc)
    ledger.record_transaction("user", 10, "old", date=base)
    ledger.record_transaction("user", 10, "new", date=base + timedelta(days=2))
    ledger.record_transaction("user", 10, "mid", date=base + timedelta(days=1))

    assert [t.description for t in ledger.list_transactions("user")] == ["new", "mid", "old"]


def test_debit_insufficient_funds_leaves_balance(ledger):
    ledger.record_transaction("user", 100, "Shopping")

    with pytest.raises(InsufficientFundsException) as exc:
        ledger.debit("user", 70)

    assert exc.value.status_code == 400
    assert exc.value.extra == {"success": False, "currentBalance": 61.75, "required": 70.0}
    assert ledger.get_balance("user") == Decimal("61.75")


def test_debit_success(ledger):
    ledger.record_transaction("user", 100, "Shopping")
    previous, new = ledger.debit("user", 50)
    assert previous == Decimal("61.75")
    assert new == Decimal("11.75")
    assert ledger.audit("user")


def test_debit_exact_balance_allowed(ledger):
    previous, new = ledger.debit("user", "56.75")
    assert new == Decimal("0")


def test_concurrent_debits_never_overdraw(locks):
    ledger = Ledger(starting_balances={"u": Decimal("10")}, seed_history=False, locks=locks)

    def attempt(_):
        try:
            ledger.debit("u", 1)
            return True
        except InsufficientFundsException:
            return False

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(attempt, range(50)))

    assert results.count(True) == 10
    assert ledger.get_balance("u") == Decimal("0")
    assert ledger.audit("u")


def test_reset_account(ledger):
    ledger.record_transaction("user", 100, "Shopping")
    ledger.debit("user", 5)
    account = ledger.reset_account("user")
    assert account.transactions == []
    assert account.balance == Decimal("56.75")
    assert ledger.audit("user")


def test_apply_batch_credits_and_sorts(ledger):
    base = datetime(2025, 6, 1, tzinfo=timezone.utc)
    batch = [
        ledger.make_transaction("user", 200, "a", date=base),
        ledger.make_transaction("user", 100, "b", date=base + timedelta(days=3)),
    ]
    balance = ledger.apply_batch("user", batch)

    assert balance == Decimal("56.75") + Decimal("15.00")
    assert [t.description for t in ledger.list_transactions("user")] == ["b", "a"]
    assert ledger.audit("user")
