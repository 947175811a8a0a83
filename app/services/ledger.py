"""Rewards ledger: per-user balance and transaction log"""

from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
import random
import uuid
import logging

from app.core.exceptions import InvalidInputException, InsufficientFundsException
from app.core.locks import KeyedLock, user_key
from app.models import Transaction, TransactionType, utcnow, ensure_aware
from app.services.spend_generator import generate_history

logger = logging.getLogger(__name__)

Amount = Union[Decimal, int, float, str]

def to_decimal(value: Amount, field_name: str = "amount") -> Decimal:
    """Convert request/user input to Decimal without float noise"""
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError):
            raise InvalidInputException(f"{field_name} must be a number")
    if not result.is_finite():
        raise InvalidInputException(f"{field_name} must be a number")
    return result

def new_transaction_id(user_id: str, date: datetime, suffix: Optional[str] = None) -> str:
    return f"{user_id}-{int(date.timestamp() * 1000)}-{suffix or uuid.uuid4().hex[:8]}"

@dataclass
class Account:
    """
    Balance bookkeeping for one user.

    Invariant: balance == initial_balance + sum(credits) - redeemed_total
    """

    user_id: str
    starting_balance: Decimal
    balance: Decimal
    initial_balance: Decimal
    transactions: List[Transaction] = field(default_factory=list)
    redeemed_total: Decimal = Decimal("0")

class Ledger:
    """Owns every user's balance and transaction log"""

    def __init__(
        self,
        starting_balances: Optional[Mapping[str, Decimal]] = None,
        default_starting_balance: Decimal = Decimal("0"),
        cashback_rate: Decimal = Decimal("0.05"),
        seed_history: bool = True,
        seed_count: int = 5,
        locks: Optional[KeyedLock] = None,
        rng: Optional[random.Random] = None
    ):
        self.starting_balances = dict(starting_balances or {})
        self.default_starting_balance = default_starting_balance
        self.cashback_rate = cashback_rate
        self.seed_history = seed_history
        self.seed_count = seed_count
        self.locks = locks or KeyedLock()
        self.rng = rng or random.Random()
        self._accounts: Dict[str, Account] = {}

    def starting_balance_for(self, user_id: str) -> Decimal:
        return self.starting_balances.get(user_id, self.default_starting_balance)

    def open_account(self, user_id: str) -> Account:
        """
        Create the account if it does not exist yet. Idempotent.

        Seeded history is treated as already credited, so the opening
        balance stays at the user's starting balance.
        """
        with self.locks.hold(user_key(user_id)):
            account = self._accounts.get(user_id)
            if account is not None:
                return account

            starting = self.starting_balance_for(user_id)
            history: List[Transaction] = []
            if self.seed_history:
                for item in generate_history(self.seed_count, rng=self.rng):
                    history.append(self.make_transaction(
                        user_id,
                        amount=item["amount"],
                        description=item["description"],
                        type=item["type"],
                        date=item["date"]
                    ))
            seeded_credits = sum((t.credits for t in history), Decimal("0"))

            account = Account(
                user_id=user_id,
                starting_balance=starting,
                balance=starting,
                initial_balance=starting - seeded_credits,
                transactions=history
            )
            self._sort(account)
            self._accounts[user_id] = account
            logger.info(f"Opened account {user_id}: balance {starting}, {len(history)} seeded transactions")
            return account

    def _account(self, user_id: str) -> Account:
        account = self._accounts.get(user_id)
        if account is None:
            account = self.open_account(user_id)
        return account

    def make_transaction(
        self,
        user_id: str,
        amount: Amount,
        description: str,
        type: Union[TransactionType, str] = TransactionType.PAYMENT,
        date: Optional[datetime] = None,
        merchant: Optional[str] = None,
        transaction_id: Optional[str] = None
    ) -> Transaction:
        """Validate input and build a transaction with frozen credits"""
        if amount is None or amount == "":
            raise InvalidInputException("Transaction must include amount and description")
        if not description or not str(description).strip():
            raise InvalidInputException("Transaction must include amount and description")

        value = to_decimal(amount)
        if value <= 0:
            raise InvalidInputException("amount must be greater than zero")

        try:
            tx_type = TransactionType(type) if type is not None else TransactionType.PAYMENT
        except ValueError:
            raise InvalidInputException(f"Invalid transaction type: {type}")

        when = ensure_aware(date) if date else utcnow()
        return Transaction(
            id=transaction_id or new_transaction_id(user_id, when),
            user_id=user_id,
            amount=value,
            description=description,
            type=tx_type,
            credits=value * self.cashback_rate,
            date=when,
            merchant=merchant or description
        )

    def get_balance(self, user_id: str) -> Decimal:
        with self.locks.hold(user_key(user_id)):
            return self._account(user_id).balance

    def record_transaction(
        self,
        user_id: str,
        amount: Amount,
        description: str,
        type: Union[TransactionType, str] = TransactionType.PAYMENT,
        date: Optional[datetime] = None,
        merchant: Optional[str] = None
    ) -> Transaction:
        """Store a payment and credit its cashback"""
        transaction = self.make_transaction(user_id, amount, description, type, date, merchant)

        with self.locks.hold(user_key(user_id)):
            account = self._account(user_id)
            account.transactions.append(transaction)
            account.balance += transaction.credits
            new_balance = account.balance
            count = len(account.transactions)

        logger.info(
            f"Transaction created for {user_id}: {transaction.id} amount {transaction.amount} "
            f"credits {transaction.credits}, balance {new_balance}, {count} transactions"
        )
        return transaction

    def list_transactions(self, user_id: str) -> List[Transaction]:
        """All transactions, most recent first"""
        with self.locks.hold(user_key(user_id)):
            account = self._account(user_id)
            self._sort(account)
            return list(account.transactions)

    def debit(self, user_id: str, cost: Amount) -> Tuple[Decimal, Decimal]:
        """Take cost off the balance, all or nothing"""
        value = to_decimal(cost, "cost")
        if value < 0:
            raise InvalidInputException("cost must not be negative")

        with self.locks.hold(user_key(user_id)):
            account = self._account(user_id)
            previous = account.balance
            if previous < value:
                raise InsufficientFundsException(current_balance=previous, required=value)
            account.balance = previous - value
            account.redeemed_total += value
            return previous, account.balance

    def reset_account(self, user_id: str) -> Account:
        """Empty the log and restore the starting balance"""
        with self.locks.hold(user_key(user_id)):
            account = self._account(user_id)
            account.transactions = []
            account.balance = account.starting_balance
            account.initial_balance = account.starting_balance
            account.redeemed_total = Decimal("0")
            logger.info(f"Reset account {user_id} to {account.balance}")
            return account

    def apply_batch(self, user_id: str, transactions: Iterable[Transaction]) -> Decimal:
        """Append a batch, credit each one, then re-sort. Returns new balance."""
        with self.locks.hold(user_key(user_id)):
            account = self._account(user_id)
            for transaction in transactions:
                account.transactions.append(transaction)
                account.balance += transaction.credits
            self._sort(account)
            return account.balance

    def audit(self, user_id: str) -> bool:
        """Check the balance invariant for one user"""
        with self.locks.hold(user_key(user_id)):
            account = self._account(user_id)
            credits = sum((t.credits for t in account.transactions), Decimal("0"))
            return account.balance == account.initial_balance + credits - account.redeemed_total

    @staticmethod
    def _sort(account: Account) -> None:
        account.transactions.sort(key=lambda t: t.date, reverse=True)
